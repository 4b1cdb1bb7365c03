import pytest

from repo_bookmarks.errors import MissingArgumentError
from repo_bookmarks.tree_builder import BookmarkTreeBuilder, FolderNode, LinkNode, Node

NAME = "test_folderName"
LINK_NAME = "test_linkName"
LINK_HREF = "test_linkHref"


def folder(*children, name=NAME):
    return FolderNode(name=name, children=list(children))


def link(name=LINK_NAME, href=LINK_HREF):
    return LinkNode(name=name, href=href)


def test_build_empty() -> None:
    assert BookmarkTreeBuilder().build() == []


def test_add_folder() -> None:
    bb = BookmarkTreeBuilder()
    bb.add_folder(NAME)
    assert bb.build() == [folder()]


def test_add_folder_nested() -> None:
    bb = BookmarkTreeBuilder()
    bb.add_folder(NAME).add_folder(NAME).add_folder(NAME)
    assert bb.build() == [folder(folder(folder()))]


def test_add_folder_chain_depth() -> None:
    bb = BookmarkTreeBuilder()
    for i in range(5):
        bb.add_folder(f"f{i}")
    assert bb.depth == 5

    node = bb.build()[0]
    for i in range(5):
        assert node.name == f"f{i}"
        if i < 4:
            assert len(node.children) == 1
            node = node.children[0]
    assert node.children == []


def test_end_folder_siblings() -> None:
    bb = BookmarkTreeBuilder()
    bb.add_folder("a").end_folder().add_folder("b")
    assert bb.build() == [folder(name="a"), folder(name="b")]


def test_end_folder_siblings_then_nested() -> None:
    bb = BookmarkTreeBuilder()
    bb.add_folder(NAME).end_folder().add_folder(NAME).add_folder(NAME)
    assert bb.build() == [folder(), folder(folder())]


def test_end_folder_at_root_stays_at_root() -> None:
    bb = BookmarkTreeBuilder()
    bb.end_folder().end_folder().add_link(LINK_NAME, LINK_HREF)
    assert bb.build() == [link()]


def test_go_to_root_when_at_root() -> None:
    bb = BookmarkTreeBuilder()
    bb.go_to_root().add_link(LINK_NAME, LINK_HREF)
    assert bb.build() == [link()]


def test_go_to_root_after_nesting() -> None:
    bb = BookmarkTreeBuilder()
    bb.add_folder(NAME).go_to_root().add_folder(NAME).add_folder(NAME).go_to_root().add_link(LINK_NAME, LINK_HREF)
    assert bb.build() == [folder(), folder(folder()), link()]


def test_go_to_root_clears_ancestors() -> None:
    bb = BookmarkTreeBuilder()
    bb.add_folders(["a", "b", "c"]).go_to_root()
    assert bb.depth == 0
    bb.end_folder().add_link(LINK_NAME, LINK_HREF)
    assert bb.build() == [folder(folder(folder(name="c"), name="b"), name="a"), link()]


def test_reset_when_empty() -> None:
    bb = BookmarkTreeBuilder()
    bb.reset()
    assert bb.build() == []


def test_reset_clears_folders() -> None:
    bb = BookmarkTreeBuilder()
    bb.add_folder(NAME).end_folder().add_folder(NAME).add_folder(NAME)
    bb.reset()
    assert bb.depth == 0
    assert bb.build() == []


def test_reset_builder_is_reusable() -> None:
    bb = BookmarkTreeBuilder()
    bb.add_folders(["a", "b"]).reset().add_link(LINK_NAME, LINK_HREF)
    assert bb.build() == [link()]


def test_add_link_at_root() -> None:
    bb = BookmarkTreeBuilder()
    bb.add_link(LINK_NAME, LINK_HREF)
    assert bb.build() == [link()]


def test_add_link_at_any_depth() -> None:
    bb = BookmarkTreeBuilder()
    (
        bb.add_link(LINK_NAME, LINK_HREF)
        .add_folder(NAME)
        .add_link(LINK_NAME, LINK_HREF)
        .end_folder()
        .add_folder(NAME)
        .add_folder(NAME)
        .add_link(LINK_NAME, LINK_HREF)
    )
    assert bb.build() == [link(), folder(link()), folder(folder(link()))]


def test_add_link_appends_last_keeping_order() -> None:
    bb = BookmarkTreeBuilder()
    bb.add_folder("a").add_link("1", "h1").add_folder("b").end_folder().add_link("2", "h2")
    [a] = bb.build()
    assert [c.name for c in a.children] == ["1", "b", "2"]


def test_add_folders_matches_sequential_calls() -> None:
    batch = BookmarkTreeBuilder().add_folders(["a", "b", "c"]).build()
    sequential = BookmarkTreeBuilder().add_folder("a").add_folder("b").add_folder("c").build()
    assert batch == sequential


def test_add_links() -> None:
    bb = BookmarkTreeBuilder()
    bb.add_links([{"name": LINK_NAME, "href": LINK_HREF}, link(), {"name": LINK_NAME, "href": LINK_HREF}])
    assert bb.build() == [link(), link(), link()]


def test_add_links_does_not_deduplicate() -> None:
    bb = BookmarkTreeBuilder()
    bb.add_link("x", "h").add_link("x", "h")
    assert len(bb.build()) == 2


def test_compute_links() -> None:
    bb = BookmarkTreeBuilder()
    bb.compute_links([LINK_NAME, LINK_NAME, LINK_NAME], lambda n: {"name": n, "href": LINK_HREF})
    assert bb.build() == [link(), link(), link()]


def test_compute_links_matches_add_links() -> None:
    def to_link(n: int) -> dict:
        return {"name": f"n{n}", "href": f"h{n}"}

    computed = BookmarkTreeBuilder().add_folder("f").compute_links([1, 2, 3], to_link).build()
    explicit = BookmarkTreeBuilder().add_folder("f").add_links([to_link(1), to_link(2), to_link(3)]).build()
    assert computed == explicit


@pytest.mark.parametrize("name", ["", None])
def test_add_folder_missing_name(name) -> None:
    bb = BookmarkTreeBuilder()
    bb.add_folder("a").add_link("l", "h")

    with pytest.raises(MissingArgumentError):
        bb.add_folder(name)

    assert bb.depth == 1
    bb.add_link("m", "h2")
    assert bb.build() == [folder(link("l", "h"), link("m", "h2"), name="a")]


def test_missing_argument_is_value_error() -> None:
    with pytest.raises(ValueError):
        BookmarkTreeBuilder().add_folder("")


def test_add_folders_partial_state_kept() -> None:
    bb = BookmarkTreeBuilder()
    with pytest.raises(MissingArgumentError):
        bb.add_folders(["a", "b", "", "c"])
    assert bb.depth == 2
    assert bb.build() == [folder(folder(name="b"), name="a")]


def test_link_name_and_href_not_validated() -> None:
    bb = BookmarkTreeBuilder()
    bb.add_link("", "")
    assert bb.build() == [LinkNode(name="", href="")]


def test_link_nodes_are_immutable() -> None:
    node = link()
    with pytest.raises(AttributeError):
        node.name = "other"  # type: ignore[misc]


def test_build_resets_builder() -> None:
    bb = BookmarkTreeBuilder()
    bb.add_folders(["a", "b"])
    bb.build()
    assert bb.depth == 0
    assert bb.build() == []


def test_build_result_is_independent() -> None:
    bb = BookmarkTreeBuilder()
    bb.add_folder("a").add_link("l", "h")
    first = bb.build()
    snapshot = [folder(link("l", "h"), name="a")]

    bb.add_folder("a").add_link("other", "h2")
    second = bb.build()

    assert first == snapshot
    assert second != first

    first[0].children.append(link("x", "y"))
    first[0].name = "renamed"
    assert second == [folder(link("other", "h2"), name="a")]


def test_build_does_not_share_nodes_with_builder() -> None:
    bb = BookmarkTreeBuilder()
    bb.add_folder("a")
    exported = bb.build()
    bb.add_folder("a")
    again = bb.build()
    assert exported == again
    assert exported[0] is not again[0]


def test_chaining_returns_builder() -> None:
    bb = BookmarkTreeBuilder()
    assert bb.add_folder("a") is bb
    assert bb.add_folders(["b"]) is bb
    assert bb.end_folder() is bb
    assert bb.go_to_root() is bb
    assert bb.add_link("l", "h") is bb
    assert bb.add_links([]) is bb
    assert bb.compute_links([], lambda x: x) is bb
    assert bb.reset() is bb


def test_built_nodes_are_node_instances() -> None:
    forest = BookmarkTreeBuilder().add_folder("a").add_link("l", "h").go_to_root().add_link("m", "h").build()
    assert all(isinstance(node, Node) for node in forest)
    assert all(isinstance(node, Node) for node in forest[0].children)
    assert not isinstance({"name": "l", "href": "h"}, Node)
