"""Script flow map: an immutable outline tree stored as an id-keyed arena.

Every edit returns a new ``OutlineTree``; the previous snapshot is never
touched, so a Streamlit rerun always sees either the old or the new tree.
"""
from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

_logger = logging.getLogger(__name__)

ROOT_ID = "root"
NEW_NODE_TITLE = "새 항목 (클릭하여 수정)"


class NodeKind(str, Enum):
    HOOK = "hook"
    INTRO = "intro"
    BODY = "body"
    OUTRO = "outro"
    POINT = "point"
    DETAIL = "detail"


SECTION_KINDS = frozenset({NodeKind.HOOK.value, NodeKind.INTRO.value, NodeKind.BODY.value, NodeKind.OUTRO.value})

_id_counter = itertools.count(1)


@dataclass(frozen=True)
class OutlineNode:
    id: str
    title: str
    kind: str
    children: Tuple[str, ...] = ()
    expanded: bool = False
    locked: bool = False
    guide_annotation: Optional[str] = None

    @property
    def is_root(self) -> bool:
        return self.id == ROOT_ID

    @property
    def display_title(self) -> str:
        if self.guide_annotation:
            return f"{self.title} {self.guide_annotation}"
        return self.title


def _kind_value(kind: Union[NodeKind, str]) -> str:
    return NodeKind(kind).value


def default_child_kind(parent_kind: str) -> str:
    if parent_kind == NodeKind.BODY.value:
        return NodeKind.POINT.value
    return NodeKind.DETAIL.value


class OutlineTree:
    def __init__(self, nodes: Mapping[str, OutlineNode], version: int = 0) -> None:
        if ROOT_ID not in nodes:
            raise ValueError("Outline tree requires a node with id 'root'.")
        self._nodes: Dict[str, OutlineNode] = dict(nodes)
        self._parents: Dict[str, str] = {}
        for node in self._nodes.values():
            for child_id in node.children:
                if child_id not in self._nodes:
                    raise ValueError(f"Outline node {node.id} lists unknown child {child_id}.")
                if child_id == ROOT_ID or child_id in self._parents:
                    raise ValueError(f"Outline node {child_id} has more than one parent.")
                self._parents[child_id] = node.id
        if sum(1 for _ in self.walk()) != len(self._nodes):
            raise ValueError("Every outline node must be reachable from the root.")
        self.version = version

    # ----------------------------
    # Read access
    # ----------------------------
    @property
    def root(self) -> OutlineNode:
        return self._nodes[ROOT_ID]

    def find(self, node_id: str) -> Optional[OutlineNode]:
        return self._nodes.get(node_id)

    def __getitem__(self, node_id: str) -> OutlineNode:
        return self._nodes[node_id]

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __eq__(self, other: object) -> bool:
        # Structural equality; the version counter is bookkeeping only.
        if not isinstance(other, OutlineTree):
            return NotImplemented
        return self._nodes == other._nodes

    def ids(self) -> List[str]:
        return list(self._nodes)

    def children(self, node_id: str) -> List[OutlineNode]:
        node = self._nodes.get(node_id)
        if node is None:
            return []
        return [self._nodes[child_id] for child_id in node.children]

    def parent_of(self, node_id: str) -> Optional[str]:
        return self._parents.get(node_id)

    def walk(self, start: str = ROOT_ID) -> Iterator[Tuple[int, OutlineNode]]:
        """Depth-first, children in stored order; yields ``(depth, node)`` with root at depth 0."""
        if start not in self._nodes:
            return
        stack: List[Tuple[int, str]] = [(0, start)]
        while stack:
            depth, node_id = stack.pop()
            node = self._nodes[node_id]
            yield depth, node
            for child_id in reversed(node.children):
                stack.append((depth + 1, child_id))

    # ----------------------------
    # Edits (each returns a new snapshot)
    # ----------------------------
    def _replaced(self, changes: Mapping[str, OutlineNode], removed: Tuple[str, ...] = ()) -> "OutlineTree":
        nodes = dict(self._nodes)
        for node_id in removed:
            nodes.pop(node_id, None)
        nodes.update(changes)
        return OutlineTree(nodes, version=self.version + 1)

    def _fresh_id(self, parent_id: str) -> str:
        while True:
            candidate = f"{parent_id}-new-{next(_id_counter)}"
            if candidate not in self._nodes:
                return candidate

    def toggle_expanded(self, node_id: str) -> "OutlineTree":
        node = self._nodes.get(node_id)
        if node is None:
            # A miss means the node was deleted between render and click.
            return self
        return self._replaced({node_id: replace(node, expanded=not node.expanded)})

    def add_child(self, parent_id: str, kind: Union[NodeKind, str, None] = None) -> "OutlineTree":
        parent = self._nodes.get(parent_id)
        if parent is None:
            return self
        child_kind = _kind_value(kind) if kind is not None else default_child_kind(parent.kind)
        child = OutlineNode(
            id=self._fresh_id(parent_id),
            title=NEW_NODE_TITLE,
            kind=child_kind,
        )
        updated_parent = replace(parent, children=parent.children + (child.id,), expanded=True)
        _logger.debug("Added outline node %s under %s.", child.id, parent_id)
        return self._replaced({parent_id: updated_parent, child.id: child})

    def delete_node(self, node_id: str) -> "OutlineTree":
        node = self._nodes.get(node_id)
        if node is None or node.is_root or node.locked:
            return self
        removed = tuple(n.id for _, n in self.walk(node_id))
        changes: Dict[str, OutlineNode] = {}
        parent_id = self._parents.get(node_id)
        if parent_id is not None:
            parent = self._nodes[parent_id]
            changes[parent.id] = replace(parent, children=tuple(c for c in parent.children if c != node_id))
        _logger.debug("Deleted outline node %s (%d nodes removed).", node_id, len(removed))
        return self._replaced(changes, removed=removed)

    def rename_node(self, node_id: str, new_title: str) -> "OutlineTree":
        node = self._nodes.get(node_id)
        if node is None or node.is_root or node.locked:
            return self
        title = (new_title or "").strip()
        if not title:
            return self
        return self._replaced({node_id: replace(node, title=title)})

    # ----------------------------
    # Nested dict form
    # ----------------------------
    def to_dict(self, node_id: str = ROOT_ID) -> Dict[str, Any]:
        node = self._nodes[node_id]
        payload: Dict[str, Any] = {
            "id": node.id,
            "title": node.title,
            "type": node.kind,
            "isExpanded": node.expanded,
            "children": [self.to_dict(child_id) for child_id in node.children],
        }
        if node.locked:
            payload["isGuide"] = True
        if node.guide_annotation:
            payload["guideSuffix"] = node.guide_annotation
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OutlineTree":
        if str(data.get("id", "")) != ROOT_ID:
            raise ValueError("Top-level outline node must have id 'root'.")
        nodes: Dict[str, OutlineNode] = {}

        def _visit(raw: Mapping[str, Any]) -> str:
            node_id = str(raw.get("id", "")).strip()
            if not node_id:
                raise ValueError("Every outline node needs a non-empty id.")
            if node_id in nodes:
                raise ValueError(f"Duplicate outline node id: {node_id}")
            # Reserve the id before visiting children so cycles and duplicates fail fast.
            nodes[node_id] = None  # type: ignore[assignment]
            raw_children = raw.get("children", []) or []
            if not isinstance(raw_children, list):
                raise ValueError(f"Children of {node_id} must be a list.")
            child_ids = tuple(_visit(child) for child in raw_children)
            nodes[node_id] = OutlineNode(
                id=node_id,
                title=str(raw.get("title", "") or ""),
                kind=str(raw.get("type", NodeKind.DETAIL.value) or NodeKind.DETAIL.value),
                children=child_ids,
                expanded=bool(raw.get("isExpanded", False)),
                locked=bool(raw.get("isGuide", False)) and node_id != ROOT_ID,
                guide_annotation=(str(raw["guideSuffix"]) if raw.get("guideSuffix") else None),
            )
            return node_id

        _visit(data)
        return cls(nodes)
