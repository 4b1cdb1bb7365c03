"""
renderer.py

Responsibility: serialize a bookmark forest and persist the result.

Rules:
- Output order always matches forest order; nothing is sorted.
- HTML output is a Netscape bookmark file, which browsers import directly.
- A previous artifact at the output path is removed before writing.

This module intentionally does NOT know about templates, data sources, or
CLI parsing.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from jinja2 import Environment, StrictUndefined, TemplateError

from repo_bookmarks.serialize import forest_to_dicts
from repo_bookmarks.tree_builder import Node

logger = logging.getLogger(__name__)

NETSCAPE_TEMPLATE = """\
<!DOCTYPE NETSCAPE-Bookmark-file-1>
<!-- This is an automatically generated file. -->
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<TITLE>{{ title }}</TITLE>
<H1>{{ title }}</H1>
<DL><p>
{%- for node in forest recursive %}
{%- set pad = "    " * loop.depth %}
{%- if "children" in node %}
{{ pad }}<DT><H3>{{ node.name }}</H3>
{{ pad }}<DL><p>
{{- loop(node.children) }}
{{ pad }}</DL><p>
{%- else %}
{{ pad }}<DT><A HREF="{{ node.href }}">{{ node.name }}</A>
{%- endif %}
{%- endfor %}
</DL><p>
"""


class RenderError(RuntimeError):
    pass


def _environment() -> Environment:
    return Environment(
        autoescape=True,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


def render_json(forest: Iterable[Node]) -> str:
    return json.dumps(forest_to_dicts(forest), indent=2)


def render_html(forest: Iterable[Node], *, title: str = "Bookmarks") -> str:
    """
    Render the forest as a Netscape bookmark document: folders become
    `<H3>` headings with a nested `<DL>`, links become `<A HREF>` entries.
    """
    try:
        template = _environment().from_string(NETSCAPE_TEMPLATE)
        return template.render(forest=forest_to_dicts(forest), title=title)
    except TemplateError as e:
        raise RenderError("Failed rendering bookmarks HTML") from e


def write_output(path: str | Path, content: str) -> Path:
    """
    Write `content` to `path`, removing any existing artifact first.
    """
    out = Path(path)
    try:
        if out.exists():
            out.unlink()
            logger.info("Successfully deleted existing %s", out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(content, encoding="utf-8", newline="\n")
    except OSError as e:
        raise RenderError(f"Failed writing {out}: {e}") from e
    logger.info("Wrote %s", out)
    return out
