"""
serialize.py

Responsibility: convert a bookmark forest to and from plain JSON-compatible
data. Folders become `{"name", "children"}`, links `{"name", "href"}`.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from repo_bookmarks.errors import MalformedInputError
from repo_bookmarks.tree_builder import FolderNode, LinkNode, Node


def node_to_dict(node: Node) -> dict[str, Any]:
    if isinstance(node, FolderNode):
        return {"name": node.name, "children": [node_to_dict(c) for c in node.children]}
    return {"name": node.name, "href": node.href}


def forest_to_dicts(forest: Iterable[Node]) -> list[dict[str, Any]]:
    return [node_to_dict(node) for node in forest]


def node_from_dict(data: Any) -> Node:
    if not isinstance(data, Mapping):
        raise MalformedInputError(f"Bookmark entry must be an object, got {type(data).__name__}")
    if "children" in data:
        children = data["children"]
        if not isinstance(children, list):
            raise MalformedInputError(f"`children` of folder {data.get('name')!r} must be a list")
        return FolderNode(name=data.get("name"), children=[node_from_dict(c) for c in children])
    if "href" in data:
        return LinkNode(name=data.get("name"), href=data["href"])
    raise MalformedInputError(f"Bookmark entry has neither `children` nor `href`: {dict(data)!r}")


def forest_from_dicts(data: Any) -> list[Node]:
    """Rebuild a forest from `forest_to_dicts` output (e.g. a parsed JSON file)."""
    if not isinstance(data, list):
        raise MalformedInputError("Bookmark forest must be a list.")
    return [node_from_dict(item) for item in data]


def load_forest(path: str | Path) -> list[Node]:
    """Read a forest previously written by `generate-json`."""
    src = Path(path)
    try:
        data = json.loads(src.read_text(encoding="utf-8"))
    except OSError as e:
        raise MalformedInputError(f"Could not read bookmarks file: {src}") from e
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"Invalid JSON in bookmarks file {src}: {e}") from e
    return forest_from_dicts(data)
