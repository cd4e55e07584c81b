from __future__ import annotations

from enum import Enum
from typing import List, Tuple


class LineKind(str, Enum):
    TITLE = "title"
    HEADING = "heading"
    BULLET = "bullet"
    SEPARATOR = "separator"
    TEXT = "text"
    BLANK = "blank"


def classify_line(line: str) -> Tuple[LineKind, str]:
    """Classify one script line and return it with its markup removed.

    Checks run in a fixed order, so a bold line made only of ``=`` still
    counts as a title.
    """
    if len(line) >= 4 and line.startswith("**") and line.endswith("**"):
        return LineKind.TITLE, line.replace("**", "").strip()
    if line.startswith("###"):
        return LineKind.HEADING, line.replace("###", "").strip()
    if line.startswith("-"):
        return LineKind.BULLET, line[1:].strip()
    if "===" in line:
        return LineKind.SEPARATOR, ""
    if line.strip():
        return LineKind.TEXT, line
    return LineKind.BLANK, ""


def split_emphasis(text: str) -> List[Tuple[str, bool]]:
    """Split ``**bold**`` spans into ``(segment, is_bold)`` pairs, dropping empty segments.

    An unmatched trailing ``**`` leaves the remainder bold, the way the
    result view has always rendered it.
    """
    segments = []
    for index, part in enumerate((text or "").split("**")):
        if part:
            segments.append((part, index % 2 == 1))
    return segments


def strip_emphasis(text: str) -> str:
    return "".join(part for part, _ in split_emphasis(text))


def script_to_markdown(script: str) -> str:
    """Rewrite a generated script so Streamlit's markdown renderer shows it as intended.

    ``====`` separators would otherwise turn the previous line into a setext heading.
    """
    rendered = []
    for line in (script or "").split("\n"):
        kind, text = classify_line(line)
        if kind is LineKind.TITLE:
            rendered.append(f"## {text}")
        elif kind is LineKind.HEADING:
            rendered.append(f"### {text}")
        elif kind is LineKind.BULLET:
            rendered.append(f"- {text}")
        elif kind is LineKind.SEPARATOR:
            rendered.append("\n---\n")
        elif kind is LineKind.TEXT:
            rendered.append(f"{text}  ")
        else:
            rendered.append("")
    return "\n".join(rendered)
