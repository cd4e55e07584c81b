"""Script rendering helpers and Word/PDF downloads."""

from .documents import build_docx, build_pdf, export_file_name
from .markdown import LineKind, classify_line, script_to_markdown, split_emphasis, strip_emphasis

__all__ = [
    "build_docx",
    "build_pdf",
    "export_file_name",
    "LineKind",
    "classify_line",
    "script_to_markdown",
    "split_emphasis",
    "strip_emphasis",
]
