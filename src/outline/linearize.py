"""Flatten a flow map into markdown-like script text.

The output follows the conventions the export adapter understands: ``===``
separator lines, whole-line ``**bold**`` titles, ``###`` sub-headings and
``-`` bullets.
"""
from __future__ import annotations

from typing import Iterator

from src.outline.tree import SECTION_KINDS, NodeKind, OutlineTree

SECTION_RULE = "=" * 40
EMPTY_OUTLINE_PLACEHOLDER = "(구성된 대본 구조가 없습니다. 흐름도에 항목을 추가해 주세요.)"


class OutlineLines:
    """Lazy, restartable view over the lines of a tree.

    Each ``iter()`` starts a fresh depth-first walk; since the tree is an
    immutable snapshot every pass yields the same lines.
    """

    def __init__(self, tree: OutlineTree) -> None:
        self.tree = tree

    def __iter__(self) -> Iterator[str]:
        first = True
        for depth, node in self.tree.walk():
            if node.is_root:
                continue
            label = node.display_title
            if node.kind in SECTION_KINDS:
                if not first:
                    yield ""
                yield SECTION_RULE
                yield f"**{label}**"
                yield SECTION_RULE
            elif node.kind == NodeKind.POINT.value:
                yield f"### {label}"
            elif node.kind == NodeKind.DETAIL.value:
                yield f"- {label}"
            else:
                yield f"{'  ' * depth}- {label}"
            first = False


def linearize(tree: OutlineTree) -> OutlineLines:
    return OutlineLines(tree)


def outline_to_text(tree: OutlineTree) -> str:
    """Join the linearized lines; a root-only tree gives an empty string."""
    return "\n".join(linearize(tree))


def outline_to_prompt_text(tree: OutlineTree) -> str:
    """Like ``outline_to_text`` but never empty, for text that goes downstream."""
    return outline_to_text(tree) or EMPTY_OUTLINE_PLACEHOLDER
