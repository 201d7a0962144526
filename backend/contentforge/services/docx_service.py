"""Markdown ⇄ DOCX conversion with python-docx.

``parse_markdown`` is a pure function turning script markdown into
structural blocks; ``build_docx`` renders those blocks. ``extract_text``
reads the plain text back out of an uploaded document.
"""

from __future__ import annotations

import io
import logging
import re
import zipfile
from dataclasses import dataclass, field

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from docx.shared import Pt
from lxml.etree import XMLSyntaxError

logger = logging.getLogger(__name__)

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
CODE_FONT = "Courier New"
MIN_DOCUMENT_CHARS = 10

_INLINE_RE = re.compile(r"(\*\*([^*]+)\*\*|\*([^*]+)\*|`([^`]+)`)")
_HEADING_PREFIXES = (("### ", 3), ("## ", 2), ("# ", 1))

# Space after each block kind, in points.
_SPACING = {"heading1": 10, "heading2": 7.5, "heading3": 5, "paragraph": 6, "spacer": 10}


class DocumentParseError(Exception):
    """An uploaded document could not be read."""


@dataclass(frozen=True)
class Run:
    text: str
    bold: bool = False
    italic: bool = False
    code: bool = False


@dataclass
class Block:
    """One output paragraph: ``heading`` (with level), ``paragraph`` or ``spacer``."""
    kind: str
    level: int = 0
    runs: list[Run] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(r.text for r in self.runs)


def parse_inline(text: str) -> list[Run]:
    """Split a line into runs for ``**bold**``, ``*italic*`` and `` `code` ``.

    Plain text between and after matches is kept as its own run.
    """
    runs: list[Run] = []
    position = 0
    for match in _INLINE_RE.finditer(text):
        if match.start() > position:
            runs.append(Run(text[position:match.start()]))
        if match.group(2):
            runs.append(Run(match.group(2), bold=True))
        elif match.group(3):
            runs.append(Run(match.group(3), italic=True))
        elif match.group(4):
            runs.append(Run(match.group(4), code=True))
        position = match.end()

    if position < len(text):
        runs.append(Run(text[position:]))
    if not runs:
        runs.append(Run(text))
    return runs


def parse_markdown(content: str) -> list[Block]:
    blocks: list[Block] = []
    for line in content.split("\n"):
        stripped = line.strip()
        if not stripped:
            blocks.append(Block("spacer"))
            continue

        for prefix, level in _HEADING_PREFIXES:
            if stripped.startswith(prefix):
                blocks.append(Block("heading", level, [Run(stripped[len(prefix):])]))
                break
        else:
            blocks.append(Block("paragraph", runs=parse_inline(stripped)))
    return blocks


def build_docx(title: str, content: str) -> bytes:
    """Render a titled markdown script as DOCX bytes."""
    document = Document()
    document.add_heading(title, level=0)

    for block in parse_markdown(content):
        if block.kind == "heading":
            paragraph = document.add_heading(block.text, level=block.level)
            spacing = _SPACING[f"heading{block.level}"]
        elif block.kind == "spacer":
            paragraph = document.add_paragraph("")
            spacing = _SPACING["spacer"]
        else:
            paragraph = document.add_paragraph()
            for run in block.runs:
                docx_run = paragraph.add_run(run.text)
                docx_run.bold = run.bold or None
                docx_run.italic = run.italic or None
                if run.code:
                    docx_run.font.name = CODE_FONT
            spacing = _SPACING["paragraph"]
        paragraph.paragraph_format.space_after = Pt(spacing)

    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def docx_filename(title: str | None) -> str:
    """``My Script: Part 1`` → ``My_Script_Part_1.docx``."""
    cleaned = re.sub(r"[^\w\s-]", "", title or "Script")
    return re.sub(r"\s+", "_", cleaned) + ".docx"


def is_supported_upload(filename: str | None, content_type: str | None) -> bool:
    name = (filename or "").lower()
    ctype = content_type or ""
    return (
        "officedocument" in ctype
        or "msword" in ctype
        or name.endswith(".docx")
        or name.endswith(".doc")
    )


def clean_text(text: str) -> str:
    text = text.replace("\r\n", "\n")
    text = re.sub(r"\n{3,}", "\n\n", text)
    text = text.replace("\t", " ")
    text = re.sub(r" {2,}", " ", text)
    return text.strip()


def extract_text(data: bytes) -> str:
    """Return the raw paragraph text of a DOCX document.

    Raises DocumentParseError with a user-facing message on unreadable input.
    """
    try:
        document = Document(io.BytesIO(data))
    except (PackageNotFoundError, ValueError) as e:
        raise DocumentParseError(
            "Invalid document format. Please ensure the file is a valid .docx or .doc document."
        ) from e
    except (zipfile.BadZipFile, KeyError, XMLSyntaxError) as e:
        raise DocumentParseError(
            "Document appears to be corrupted. Please try saving it again or use a different document."
        ) from e

    parts = [p.text for p in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            parts.append("\t".join(cell.text for cell in row.cells))
    return "\n\n".join(parts)
