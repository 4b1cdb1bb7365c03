"""
repo_bookmarks package

Generates browser-importable bookmark collections (JSON or Netscape HTML)
for repositories hosted on GitHub or Bitbucket.

Key responsibilities are split across modules:
- `tree_builder.py`: cursor-based builder for the folder/link forest
- `serialize.py`: forest <-> plain dict conversion
- `props.py`: parse the props document (inline JSON or JSON/YAML file)
- `sources.py`: repository data from the `gh` / `bitbucket` CLIs
- `github_api.py`: repository data from the GitHub REST API
- `templates.py`: per-provider templates that drive the builder
- `renderer.py`: JSON / HTML output and artifact writing
- `cli.py`: CLI entrypoint and orchestration (props -> fetch -> build -> render)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
