"""
tree_builder.py

Responsibility: accumulate a forest of folder/link nodes through a movable
cursor and hand out independent snapshots of it.

The cursor is the list the next node is appended to: either the forest
itself or the `children` of an open folder. Ancestors are kept on an explicit
stack instead of parent back-references, so nodes never point upwards.

Not thread-safe; use one builder per construction task.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import TypeVar

from repo_bookmarks.errors import MissingArgumentError

T = TypeVar("T")


@dataclass
class FolderNode:
    """Container node; children render top-to-bottom in insertion order."""

    name: str
    children: list[Node] = field(default_factory=list)


@dataclass(frozen=True)
class LinkNode:
    """Leaf node pointing at `href`."""

    name: str
    href: str


Node = FolderNode | LinkNode

LinkLike = LinkNode | Mapping[str, str]


def _as_link(link: LinkLike) -> LinkNode:
    if isinstance(link, LinkNode):
        return link
    return LinkNode(name=link.get("name"), href=link.get("href"))


class BookmarkTreeBuilder:
    """
    Fluent builder for a bookmark forest.

    Example:
        builder.add_folder("acme").add_folder("GitHub")
        builder.add_link("Pull Requests", "https://github.com/acme/app/pulls")
        forest = builder.build()
    """

    def __init__(self) -> None:
        self._root: list[Node] = []
        self._links: list[Node] = self._root
        self._prev_links: list[list[Node]] = []

    @property
    def depth(self) -> int:
        """Number of folders currently open above the cursor."""
        return len(self._prev_links)

    def add_folder(self, name: str | None) -> BookmarkTreeBuilder:
        """Append a folder at the cursor and move the cursor into it."""
        if not name:
            raise MissingArgumentError("Name is required to add a folder")
        folder = FolderNode(name=name)
        self._links.append(folder)
        self._prev_links.append(self._links)
        self._links = folder.children
        return self

    def add_folders(self, names: Iterable[str | None]) -> BookmarkTreeBuilder:
        """
        Open one nested folder per name, each inside the previous one.

        Folders opened before an invalid name are kept.
        """
        for name in names:
            self.add_folder(name)
        return self

    def end_folder(self) -> BookmarkTreeBuilder:
        """Move the cursor back to the parent's insertion point."""
        if self._prev_links:
            self._links = self._prev_links.pop()
        else:
            self._links = self._root
        return self

    def go_to_root(self) -> BookmarkTreeBuilder:
        """
        Move the cursor to the bottom of the ancestor stack and clear it.

        The bottom entry is the list the outermost open folder was appended
        to. With nothing open the cursor goes to the forest root.
        """
        self._links = self._prev_links[0] if self._prev_links else self._root
        self._prev_links = []
        return self

    def add_link(self, name: str, href: str) -> BookmarkTreeBuilder:
        """Append a link at the cursor."""
        self._links.append(LinkNode(name=name, href=href))
        return self

    def add_links(self, links: Iterable[LinkLike]) -> BookmarkTreeBuilder:
        """Append each link (a `LinkNode` or a `{name, href}` mapping) in order."""
        self._links.extend(_as_link(link) for link in links)
        return self

    def compute_links(
        self,
        items: Iterable[T],
        create_link: Callable[[T], LinkLike],
    ) -> BookmarkTreeBuilder:
        """Map each item to a link descriptor and append them in order."""
        return self.add_links([create_link(item) for item in items])

    def reset(self) -> BookmarkTreeBuilder:
        """Discard the forest and return the cursor to an empty root."""
        self._root = []
        self._links = self._root
        self._prev_links = []
        return self

    def build(self) -> list[Node]:
        """Return a deep copy of the forest and reset the builder."""
        out = copy.deepcopy(self._root)
        self.reset()
        return out
