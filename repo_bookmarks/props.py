"""
props.py

Responsibility: load the props document that parameterizes the templates.

Props come from either:
- `--props`: an inline JSON object, or
- `--props-file`: a JSON or YAML file (JSON is valid YAML, so one loader
  covers both).

Inline props take precedence when both are given. Anything that cannot be
parsed into a mapping raises `MalformedInputError`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from repo_bookmarks.errors import MalformedInputError

DEFAULT_BRANCHES = ("main", "develop")
DEFAULT_TITLE = "Bookmarks"


@dataclass(frozen=True)
class Props:
    """Values the templates and the HTML renderer read."""

    project_id: str = ""
    branches: tuple[str, ...] = DEFAULT_BRANCHES
    title: str = DEFAULT_TITLE


def _parse_inline(text: str) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"Invalid JSON in --props: {e}") from e
    if not isinstance(data, dict):
        raise MalformedInputError("--props must be a JSON object.")
    return data


def _parse_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise MalformedInputError(f"Props file does not exist: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise MalformedInputError(f"Could not read or parse props file: {path}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedInputError(f"Props file must contain a mapping at the top level: {path}")
    return data


def props_from_mapping(data: dict[str, Any]) -> Props:
    project_id = str(data.get("projectId") or data.get("project_id") or "").strip()

    branches_raw = data.get("branches")
    if branches_raw is None:
        branches = DEFAULT_BRANCHES
    elif isinstance(branches_raw, str):
        branches = tuple(b.strip() for b in branches_raw.split(",") if b.strip())
    elif isinstance(branches_raw, list):
        branches = tuple(str(b) for b in branches_raw)
    else:
        raise MalformedInputError("`branches` must be a list or a comma-separated string.")

    title = str(data.get("title") or DEFAULT_TITLE).strip() or DEFAULT_TITLE
    return Props(project_id=project_id, branches=branches, title=title)


def load_props(props: str | None = None, props_file: str | Path | None = None) -> Props:
    if props:
        data = _parse_inline(props)
    elif props_file:
        data = _parse_file(Path(props_file))
    else:
        data = {}
    return props_from_mapping(data)
