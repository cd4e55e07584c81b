import re
import zipfile
from io import BytesIO

from docx import Document

from src.export import (
    LineKind,
    build_docx,
    build_pdf,
    classify_line,
    export_file_name,
    script_to_markdown,
    split_emphasis,
)

SCRIPT = "\n".join(
    [
        "**아침 루틴의 힘**",
        "=" * 40,
        "### [00:00] 후킹",
        "- 충격적인 **통계** 제시",
        "오늘은 **아침 5분**의 힘을 이야기합니다.",
        "",
        "구독과 좋아요 부탁드립니다.",
    ]
)


def test_classify_line_rules() -> None:
    assert classify_line("**제목**") == (LineKind.TITLE, "제목")
    assert classify_line("### 소제목") == (LineKind.HEADING, "소제목")
    assert classify_line("- 항목") == (LineKind.BULLET, "항목")
    assert classify_line("====") == (LineKind.SEPARATOR, "")
    assert classify_line("본문 **강조**") == (LineKind.TEXT, "본문 **강조**")
    assert classify_line("   ") == (LineKind.BLANK, "")


def test_bold_title_wins_over_separator() -> None:
    assert classify_line("**====**")[0] is LineKind.TITLE


def test_split_emphasis() -> None:
    assert split_emphasis("앞 **굵게** 뒤") == [("앞 ", False), ("굵게", True), (" 뒤", False)]
    assert split_emphasis("**전부**") == [("전부", True)]
    assert split_emphasis("") == []


def test_script_to_markdown_neutralizes_separators() -> None:
    rendered = script_to_markdown(SCRIPT)

    assert "=" * 40 not in rendered
    assert "## 아침 루틴의 힘" in rendered
    assert "### [00:00] 후킹" in rendered
    assert "---" in rendered


def test_build_docx_structure() -> None:
    data = build_docx("아침 루틴", SCRIPT)

    assert data[:2] == b"PK"
    assert zipfile.is_zipfile(BytesIO(data))

    doc = Document(BytesIO(data))
    texts = [p.text for p in doc.paragraphs]
    assert texts[0] == "아침 루틴의 힘"
    assert doc.paragraphs[0].style.name == "Heading 1"
    assert "[00:00] 후킹" in texts
    assert not any("===" in text for text in texts)

    bullet = next(p for p in doc.paragraphs if p.text == "충격적인 통계 제시")
    assert bullet.style.name == "List Bullet"
    assert [run.bold for run in bullet.runs] == [False, True, False]
    assert doc.core_properties.title == "아침 루틴"


def test_build_pdf_signature_and_pagination() -> None:
    short = build_pdf("아침 루틴", SCRIPT)
    long = build_pdf("긴 대본", "\n".join(f"- 항목 {n}" for n in range(200)))

    assert short.startswith(b"%PDF")
    assert long.startswith(b"%PDF")
    page_count = re.search(rb"/Count (\d+)", long)
    assert page_count is not None
    assert int(page_count.group(1)) > 1


def test_export_file_name() -> None:
    assert export_file_name("아침 루틴: 5분?", "pdf") == "아침_루틴_5분.pdf"
    assert export_file_name("   ", ".docx") == "script.docx"
