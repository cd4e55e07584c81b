"""Word and PDF downloads for generated scripts and flattened flow maps."""
from __future__ import annotations

import logging
import re
from functools import lru_cache
from io import BytesIO
from typing import List

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt
from PIL import Image, ImageDraw, ImageFont

from src.config import get_secret
from src.export.markdown import LineKind, classify_line, split_emphasis, strip_emphasis

_logger = logging.getLogger(__name__)

# A4 at 150 dpi.
PAGE_DPI = 150
PAGE_SIZE = (1240, 1754)
MARGIN = 118
LINE_HEIGHT = 41
TEXT_WIDTH = PAGE_SIZE[0] - 2 * MARGIN

_FONT_CANDIDATES = (
    "NanumGothic.ttf",
    "/usr/share/fonts/truetype/nanum/NanumGothic.ttf",
    "NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/opentype/noto/NotoSansCJK-Regular.ttc",
    "AppleGothic.ttf",
    "malgun.ttf",
    "DejaVuSans.ttf",
)
_BOLD_FONT_CANDIDATES = (
    "NanumGothicBold.ttf",
    "/usr/share/fonts/truetype/nanum/NanumGothicBold.ttf",
    "NotoSansCJK-Bold.ttc",
    "/usr/share/fonts/opentype/noto/NotoSansCJK-Bold.ttc",
    "malgunbd.ttf",
    "DejaVuSans-Bold.ttf",
)


def export_file_name(title: str, extension: str) -> str:
    cleaned = re.sub(r'[\\/:*?"<>|]+', "", (title or "").strip())
    cleaned = re.sub(r"\s+", "_", cleaned).strip("._") or "script"
    return f"{cleaned}.{extension.lstrip('.')}"


# ----------------------------
# Word
# ----------------------------
def _add_runs(paragraph, text: str) -> None:
    for segment, bold in split_emphasis(text):
        run = paragraph.add_run(segment)
        run.bold = bold


def _spacing(paragraph, before: float, after: float) -> None:
    paragraph.paragraph_format.space_before = Pt(before)
    paragraph.paragraph_format.space_after = Pt(after)


def build_docx(title: str, body: str) -> bytes:
    doc = Document()
    doc.core_properties.title = title or ""

    for line in (body or "").split("\n"):
        kind, text = classify_line(line)
        if kind is LineKind.TITLE:
            paragraph = doc.add_heading(text, level=1)
            paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
            _spacing(paragraph, 20, 10)
        elif kind is LineKind.HEADING:
            _spacing(doc.add_heading(strip_emphasis(text), level=2), 15, 5)
        elif kind is LineKind.BULLET:
            paragraph = doc.add_paragraph(style="List Bullet")
            _add_runs(paragraph, text)
            _spacing(paragraph, 2.5, 2.5)
        elif kind is LineKind.SEPARATOR:
            continue
        elif kind is LineKind.TEXT:
            paragraph = doc.add_paragraph()
            _add_runs(paragraph, text)
            _spacing(paragraph, 5, 5)
        else:
            doc.add_paragraph("")

    buf = BytesIO()
    doc.save(buf)
    return buf.getvalue()


# ----------------------------
# PDF
# ----------------------------
@lru_cache(maxsize=16)
def _load_font(size: int, bold: bool = False):
    override = get_secret("pdf_font_path", "")
    candidates = ((override,) if override else ()) + (_BOLD_FONT_CANDIDATES if bold else ()) + _FONT_CANDIDATES
    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    _logger.warning("No TrueType font found for PDF export; Korean text may not render.")
    return ImageFont.load_default()


def _wrap(draw: ImageDraw.ImageDraw, text: str, font, max_width: int) -> List[str]:
    """Greedy wrap that prefers spaces but can break inside long words (Korean has few spaces)."""
    lines: List[str] = []
    current = ""
    for ch in text:
        candidate = current + ch
        if current and draw.textlength(candidate, font=font) > max_width:
            cut = current.rfind(" ")
            if cut > 0:
                lines.append(current[:cut])
                current = current[cut + 1:] + ch
            else:
                lines.append(current)
                current = ch
        else:
            current = candidate
    if current or not lines:
        lines.append(current)
    return lines


class _PageWriter:
    def __init__(self) -> None:
        self.pages: List[Image.Image] = []
        self._new_page()

    def _new_page(self) -> None:
        page = Image.new("RGB", PAGE_SIZE, "white")
        self.pages.append(page)
        self.draw = ImageDraw.Draw(page)
        self.y = MARGIN

    def _ensure_room(self, height: int) -> None:
        if self.y + height > PAGE_SIZE[1] - MARGIN:
            self._new_page()

    def text(self, text: str, size: int, bold: bool = False, indent: int = 0, gap: int = 0) -> None:
        font = _load_font(size, bold)
        for wrapped in _wrap(self.draw, text, font, TEXT_WIDTH - indent):
            self._ensure_room(LINE_HEIGHT)
            self.draw.text((MARGIN + indent, self.y), wrapped, fill=(0, 0, 0), font=font)
            self.y += LINE_HEIGHT
        self.y += gap

    def rule(self) -> None:
        self._ensure_room(LINE_HEIGHT)
        middle = self.y + LINE_HEIGHT // 3
        self.draw.line([(MARGIN, middle), (PAGE_SIZE[0] - MARGIN, middle)], fill=(100, 100, 100), width=2)
        self.y += LINE_HEIGHT

    def skip(self, amount: int) -> None:
        self.y += amount


def build_pdf(title: str, body: str) -> bytes:
    writer = _PageWriter()
    for line in (body or "").split("\n"):
        kind, text = classify_line(line)
        if kind is LineKind.TITLE:
            writer.text(text, 33, bold=True, gap=12)
        elif kind is LineKind.HEADING:
            writer.text(strip_emphasis(text), 29, bold=True, gap=8)
        elif kind is LineKind.BULLET:
            writer.text("• " + strip_emphasis(text), 23, indent=24)
        elif kind is LineKind.SEPARATOR:
            writer.rule()
        elif kind is LineKind.TEXT:
            writer.text(strip_emphasis(text), 23)
        else:
            writer.skip(LINE_HEIGHT // 2)

    buf = BytesIO()
    first, rest = writer.pages[0], writer.pages[1:]
    first.save(buf, format="PDF", save_all=True, append_images=rest, resolution=float(PAGE_DPI), title=title or "")
    _logger.info("Rendered PDF export with %d page(s).", len(writer.pages))
    return buf.getvalue()
