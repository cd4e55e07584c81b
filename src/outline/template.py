"""Starter flow map seeded when the editor first opens (the "30-second rule" guide)."""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from src.outline.tree import ROOT_ID, NodeKind, OutlineNode, OutlineTree

# (id, title, kind, locked, guide annotation, expanded, children)
_Spec = Tuple[str, str, NodeKind, bool, Optional[str], bool, list]


def _guide_points(prefix: str, titles: List[str], kind: NodeKind = NodeKind.POINT) -> list:
    return [(f"{prefix}-{i}", title, kind, True, None, False, []) for i, title in enumerate(titles, start=1)]


def _body_point(n: int, details: List[str]) -> _Spec:
    return (
        f"point-{n}",
        f"핵심 포인트 {n}",
        NodeKind.POINT,
        False,
        None,
        True,
        _guide_points(f"detail-{n}", details, NodeKind.DETAIL),
    )


STARTER_LAYOUT: List[_Spec] = [
    (
        "hook",
        "🎯 HOOK",
        NodeKind.HOOK,
        True,
        "(0-30초): 시청자 사로잡기",
        True,
        _guide_points("hook", ["충격적인 사실이나 질문", "시청자의 문제점 제시", "영상의 가치 약속"]),
    ),
    (
        "intro",
        "📢 INTRO",
        NodeKind.INTRO,
        True,
        "(30초-1분): 주제 소개",
        True,
        _guide_points("intro", ["자기소개 (간단히)", "영상 주제 명확히 밝히기", "구성 미리보기 (타임스탬프)"]),
    ),
    (
        "body",
        "📚 BODY",
        NodeKind.BODY,
        True,
        ": 본문 내용",
        True,
        [
            _body_point(1, ["구체적 설명", "예시 또는 사례", "시각 자료 활용"]),
            _body_point(2, ["구체적 설명", "예시 또는 사례"]),
            _body_point(3, ["구체적 설명", "예시 또는 사례"]),
        ],
    ),
    (
        "outro",
        "🎬 OUTRO & CTA",
        NodeKind.OUTRO,
        True,
        ": 마무리",
        True,
        _guide_points("outro", ["핵심 내용 요약", "시청자에게 질문 던지기", "구독/좋아요/알림 요청", "다음 영상 예고"]),
    ),
]


def starter_outline() -> OutlineTree:
    nodes: Dict[str, OutlineNode] = {}

    def _add(spec: _Spec) -> str:
        node_id, title, kind, locked, annotation, expanded, children = spec
        child_ids = tuple(_add(child) for child in children)
        nodes[node_id] = OutlineNode(
            id=node_id,
            title=title,
            kind=kind.value,
            children=child_ids,
            expanded=expanded,
            locked=locked,
            guide_annotation=annotation,
        )
        return node_id

    top_level = tuple(_add(spec) for spec in STARTER_LAYOUT)
    nodes[ROOT_ID] = OutlineNode(
        id=ROOT_ID,
        title="유튜브 대본 구조",
        kind=NodeKind.HOOK.value,
        children=top_level,
        expanded=True,
    )
    return OutlineTree(nodes)
