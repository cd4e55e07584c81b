"""Script flow map (outline tree) for TubeScript Forge."""

from .tree import NodeKind, OutlineNode, OutlineTree, ROOT_ID
from .template import starter_outline
from .linearize import EMPTY_OUTLINE_PLACEHOLDER, linearize, outline_to_prompt_text, outline_to_text

__all__ = [
    "NodeKind",
    "OutlineNode",
    "OutlineTree",
    "ROOT_ID",
    "starter_outline",
    "EMPTY_OUTLINE_PLACEHOLDER",
    "linearize",
    "outline_to_text",
    "outline_to_prompt_text",
]
