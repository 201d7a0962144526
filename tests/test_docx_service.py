"""
Tests for markdown to DOCX rendering and DOCX text extraction.
"""

import io

import pytest
from docx import Document

from contentforge.services.docx_service import (
    CODE_FONT,
    DocumentParseError,
    Run,
    build_docx,
    clean_text,
    docx_filename,
    extract_text,
    is_supported_upload,
    parse_inline,
    parse_markdown,
)


def test_parse_inline_runs():
    runs = parse_inline("Say **hello** to *them* with `code` now")
    assert runs == [
        Run("Say "),
        Run("hello", bold=True),
        Run(" to "),
        Run("them", italic=True),
        Run(" with "),
        Run("code", code=True),
        Run(" now"),
    ]


def test_parse_inline_plain_text():
    assert parse_inline("just words") == [Run("just words")]


def test_parse_markdown_blocks():
    blocks = parse_markdown("# Intro\n\n## Scene 1\n### Beat\nNarrator **speaks**.")
    assert [(b.kind, b.level) for b in blocks] == [
        ("heading", 1),
        ("spacer", 0),
        ("heading", 2),
        ("heading", 3),
        ("paragraph", 0),
    ]
    assert blocks[0].text == "Intro"
    assert blocks[4].text == "Narrator speaks."


def test_build_docx_renders_headings_and_runs():
    data = build_docx("My Script", "# Hook\nSay **this** and `that`")

    document = Document(io.BytesIO(data))
    texts = [p.text for p in document.paragraphs]
    assert texts[0] == "My Script"
    assert "Hook" in texts
    body = document.paragraphs[-1]
    assert body.text == "Say this and that"
    assert body.runs[1].bold is True
    assert body.runs[3].font.name == CODE_FONT


def test_extract_text_round_trip():
    data = build_docx("Title", "First paragraph here.\nSecond paragraph here.")
    text = extract_text(data)
    assert "First paragraph here." in text
    assert "Second paragraph here." in text


def test_extract_text_rejects_garbage():
    with pytest.raises(DocumentParseError):
        extract_text(b"this is not a word document")


@pytest.mark.parametrize("title,expected", [
    ("My Script: Part 1", "My_Script_Part_1.docx"),
    (None, "Script.docx"),
    ("  spaced   out ", "_spaced_out_.docx"),
])
def test_docx_filename(title, expected):
    assert docx_filename(title) == expected


def test_is_supported_upload():
    assert is_supported_upload("script.docx", None)
    assert is_supported_upload("legacy.DOC", "")
    assert is_supported_upload("blob", "application/msword")
    assert not is_supported_upload("notes.txt", "text/plain")


def test_clean_text():
    assert clean_text("a\r\n\n\n\nb\t\tc   d  ") == "a\n\nb c d"
