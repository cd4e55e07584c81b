import pytest

from src.outline import NodeKind, OutlineNode, OutlineTree, ROOT_ID, linearize, starter_outline
from src.outline.tree import NEW_NODE_TITLE


def _small_tree() -> OutlineTree:
    return OutlineTree(
        {
            ROOT_ID: OutlineNode(ROOT_ID, "구조", "hook", children=("hook", "body"), expanded=True),
            "hook": OutlineNode("hook", "HOOK", "hook", locked=True),
            "body": OutlineNode("body", "BODY", "body", children=("p1",), locked=True),
            "p1": OutlineNode("p1", "핵심 포인트 1", "point", children=("d1",)),
            "d1": OutlineNode("d1", "설명", "detail"),
        }
    )


def test_tree_requires_root() -> None:
    with pytest.raises(ValueError):
        OutlineTree({"x": OutlineNode("x", "x", "point")})


def test_locked_nodes_cannot_be_renamed_or_deleted() -> None:
    tree = starter_outline()
    locked_ids = [node.id for _, node in tree.walk() if node.locked]
    assert locked_ids

    for node_id in locked_ids:
        assert tree.rename_node(node_id, "바뀐 제목") == tree
        assert tree.delete_node(node_id) == tree


def test_root_is_never_deleted_or_renamed() -> None:
    tree = starter_outline()

    assert tree.delete_node(ROOT_ID) is tree
    assert tree.rename_node(ROOT_ID, "새 루트") is tree
    assert ROOT_ID in tree.delete_node("body").delete_node(ROOT_ID)


def test_add_child_creates_fresh_id_and_expands_parent() -> None:
    tree = starter_outline()
    collapsed = tree.toggle_expanded("point-1")
    assert collapsed["point-1"].expanded is False

    updated = collapsed.add_child("point-1", NodeKind.DETAIL)

    new_ids = set(updated.ids()) - set(collapsed.ids())
    assert len(new_ids) == 1
    new_id = new_ids.pop()
    assert new_id not in collapsed
    assert updated["point-1"].expanded is True
    assert updated["point-1"].children[-1] == new_id

    child = updated[new_id]
    assert child.title == NEW_NODE_TITLE
    assert child.kind == "detail"
    assert child.locked is False
    assert child.expanded is False
    assert updated.parent_of(new_id) == "point-1"


def test_add_child_to_locked_guide_is_allowed() -> None:
    tree = starter_outline()
    updated = tree.add_child("hook")

    new_id = updated["hook"].children[-1]
    assert updated[new_id].locked is False


def test_add_child_kind_defaults_from_parent() -> None:
    tree = starter_outline()

    under_body = tree.add_child("body")
    under_point = tree.add_child("point-1")

    assert under_body[under_body["body"].children[-1]].kind == "point"
    assert under_point[under_point["point-1"].children[-1]].kind == "detail"


def test_repeated_add_child_never_reuses_ids() -> None:
    tree = starter_outline()
    seen = set(tree.ids())
    for _ in range(20):
        tree = tree.add_child("point-2")
        new_id = tree["point-2"].children[-1]
        assert new_id not in seen
        seen.add(new_id)


def test_edits_return_new_snapshots() -> None:
    tree = starter_outline()
    renamed = tree.rename_node("point-1", "  첫 번째 이야기  ")

    assert renamed is not tree
    assert renamed.version == tree.version + 1
    assert renamed["point-1"].title == "첫 번째 이야기"
    assert tree["point-1"].title == "핵심 포인트 1"


def test_rename_with_blank_title_is_noop() -> None:
    tree = starter_outline()

    assert tree.rename_node("point-1", "   ") is tree
    assert tree.rename_node("missing", "제목") is tree


def test_delete_removes_whole_subtree() -> None:
    tree = _small_tree()
    updated = tree.delete_node("p1")

    assert "p1" not in updated
    assert "d1" not in updated
    assert updated["body"].children == ()
    assert len(updated) == 3


def test_toggle_unknown_node_returns_same_tree() -> None:
    tree = _small_tree()
    assert tree.toggle_expanded("nope") is tree
    assert tree.add_child("nope") is tree
    assert tree.delete_node("nope") is tree


def test_walk_is_depth_first_in_child_order() -> None:
    order = [(depth, node.id) for depth, node in _small_tree().walk()]

    assert order == [(0, ROOT_ID), (1, "hook"), (1, "body"), (2, "p1"), (3, "d1")]


def test_starter_outline_sections() -> None:
    tree = starter_outline()

    assert [node.id for node in tree.children(ROOT_ID)] == ["hook", "intro", "body", "outro"]
    assert tree["hook"].display_title == "🎯 HOOK (0-30초): 시청자 사로잡기"
    assert tree["point-1"].locked is False
    assert tree["detail-1-1"].locked is True
    assert len(tree.children("outro")) == 4


def test_dict_round_trip_preserves_structure() -> None:
    tree = starter_outline().add_child("point-3")

    restored = OutlineTree.from_dict(tree.to_dict())

    assert restored == tree


def test_from_dict_accepts_unknown_kinds() -> None:
    tree = OutlineTree.from_dict(
        {
            "id": "root",
            "title": "구조",
            "type": "hook",
            "children": [{"id": "x", "title": "자유 항목", "type": "sidebar"}],
        }
    )

    assert tree["x"].kind == "sidebar"
    assert tree.parent_of("x") == ROOT_ID


def test_from_dict_rejects_duplicate_ids_and_bad_root() -> None:
    with pytest.raises(ValueError, match="Duplicate"):
        OutlineTree.from_dict(
            {"id": "root", "children": [{"id": "a", "title": "1"}, {"id": "a", "title": "2"}]}
        )
    with pytest.raises(ValueError, match="root"):
        OutlineTree.from_dict({"id": "top", "children": []})


def test_delete_unlinks_node_from_parent_built_by_constructor() -> None:
    tree = OutlineTree(
        {
            ROOT_ID: OutlineNode(ROOT_ID, "구조", "hook", children=("body",)),
            "body": OutlineNode("body", "BODY", "body", children=("p1", "p2")),
            "p1": OutlineNode("p1", "첫 번째", "point"),
            "p2": OutlineNode("p2", "두 번째", "point"),
        }
    )
    assert tree.parent_of("p1") == "body"
    assert tree.parent_of(ROOT_ID) is None

    updated = tree.delete_node("p1")

    assert updated["body"].children == ("p2",)
    assert "p1" not in updated
    assert [node.id for _, node in updated.walk()] == [ROOT_ID, "body", "p2"]
    assert list(linearize(updated))[-1] == "### 두 번째"


def test_constructor_rejects_inconsistent_links() -> None:
    root = OutlineNode(ROOT_ID, "구조", "hook", children=("a",))
    with pytest.raises(ValueError, match="unknown child"):
        OutlineTree({ROOT_ID: root})
    with pytest.raises(ValueError, match="more than one parent"):
        OutlineTree(
            {
                ROOT_ID: OutlineNode(ROOT_ID, "구조", "hook", children=("a", "b")),
                "a": OutlineNode("a", "A", "body", children=("b",)),
                "b": OutlineNode("b", "B", "point"),
            }
        )
    with pytest.raises(ValueError, match="reachable"):
        OutlineTree(
            {
                ROOT_ID: root,
                "a": OutlineNode("a", "A", "body"),
                "loose": OutlineNode("loose", "떠돌이", "point"),
            }
        )


def test_add_child_only_accepts_known_kinds() -> None:
    tree = starter_outline()

    with pytest.raises(ValueError):
        tree.add_child("body", "sidebar")

    updated = tree.add_child("body", "detail")
    assert updated[updated["body"].children[-1]].kind == "detail"
