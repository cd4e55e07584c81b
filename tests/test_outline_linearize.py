from src.outline import (
    EMPTY_OUTLINE_PLACEHOLDER,
    OutlineNode,
    OutlineTree,
    ROOT_ID,
    linearize,
    outline_to_prompt_text,
    outline_to_text,
    starter_outline,
)
from src.outline.linearize import SECTION_RULE
from src.outline.tree import NEW_NODE_TITLE


def _root_only() -> OutlineTree:
    return OutlineTree({ROOT_ID: OutlineNode(ROOT_ID, "구조", "hook")})


def test_hook_and_body_sections_with_point() -> None:
    tree = OutlineTree(
        {
            ROOT_ID: OutlineNode(ROOT_ID, "구조", "hook", children=("hook", "body")),
            "hook": OutlineNode("hook", "HOOK", "hook", locked=True),
            "body": OutlineNode("body", "BODY", "body", children=("p1",), locked=True),
            "p1": OutlineNode("p1", "핵심 포인트 1", "point"),
        }
    )

    assert list(linearize(tree)) == [
        SECTION_RULE,
        "**HOOK**",
        SECTION_RULE,
        "",
        SECTION_RULE,
        "**BODY**",
        SECTION_RULE,
        "### 핵심 포인트 1",
    ]


def test_linearize_is_restartable_and_deterministic() -> None:
    lines = linearize(starter_outline())

    first = list(lines)
    second = list(lines)

    assert first == second
    assert outline_to_text(starter_outline()) == outline_to_text(starter_outline())


def test_annotations_details_and_unknown_kinds() -> None:
    tree = OutlineTree(
        {
            ROOT_ID: OutlineNode(ROOT_ID, "구조", "hook", children=("intro",)),
            "intro": OutlineNode(
                "intro", "📢 INTRO", "intro", children=("d", "x"), guide_annotation="(30초-1분)"
            ),
            "d": OutlineNode("d", "자기소개", "detail"),
            "x": OutlineNode("x", "메모", "sidebar"),
        }
    )

    lines = list(linearize(tree))

    assert lines[1] == "**📢 INTRO (30초-1분)**"
    assert lines[3] == "- 자기소개"
    assert lines[4] == "    - 메모"


def test_collapsed_nodes_are_still_linearized() -> None:
    tree = starter_outline().toggle_expanded("body")

    assert "### 핵심 포인트 2" in outline_to_text(tree)


def test_root_only_tree_is_empty() -> None:
    tree = _root_only()

    assert list(linearize(tree)) == []
    assert outline_to_text(tree) == ""
    assert outline_to_prompt_text(tree) == EMPTY_OUTLINE_PLACEHOLDER


def test_starter_outline_text_starts_with_hook_block() -> None:
    text = outline_to_text(starter_outline())

    assert text.startswith(f"{SECTION_RULE}\n**🎯 HOOK (0-30초): 시청자 사로잡기**\n{SECTION_RULE}")
    assert "### 충격적인 사실이나 질문" in text
    assert "- 구체적 설명" in text


def test_deeply_nested_unknown_kinds_render_with_depth_indent() -> None:
    depth = 3000
    nodes = {ROOT_ID: OutlineNode(ROOT_ID, "구조", "hook", children=("n1",))}
    for level in range(1, depth + 1):
        children = (f"n{level + 1}",) if level < depth else ()
        nodes[f"n{level}"] = OutlineNode(f"n{level}", f"메모 {level}", "sidebar", children=children)

    lines = list(linearize(OutlineTree(nodes)))

    assert len(lines) == depth
    assert lines[0] == "  - 메모 1"
    assert lines[-1] == "  " * depth + f"- 메모 {depth}"


def test_add_child_has_no_depth_limit() -> None:
    tree = starter_outline()
    parent_id = "detail-1-1"
    for _ in range(1200):
        tree = tree.add_child(parent_id, "detail")
        parent_id = tree[parent_id].children[-1]

    lines = list(linearize(tree))

    assert tree.parent_of(parent_id) is not None
    assert lines.count(f"- {NEW_NODE_TITLE}") == 1200
