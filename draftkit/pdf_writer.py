"""Minimal PDF Writer

Builds a small multi-page PDF 1.4 file by hand: one Catalog, one Pages tree,
one Helvetica font and a Page/Contents object pair per page. No images, no
font metrics; text is word-wrapped on a fixed character width.

Object layout:
    1        Catalog
    2        Pages
    3        Font (Helvetica)
    4, 5     Page 1, Contents 1
    6, 7     Page 2, Contents 2
    ...
"""
import re
from typing import List

from .config import (
    EMPTY_DOCUMENT_PLACEHOLDER,
    FALLBACK_FILE_NAME,
    MAX_FILE_NAME_LENGTH,
    PDF_FONT_SIZE,
    PDF_LINE_HEIGHT,
    PDF_MARGIN_TOP,
    PDF_MARGIN_X,
    PDF_MAX_CHARS_PER_LINE,
    PDF_MAX_LINES_PER_PAGE,
    PDF_PAGE_HEIGHT,
    PDF_PAGE_WIDTH,
)
from .exceptions import PdfBuildError

PDF_HEADER = b"%PDF-1.4\n"
# Matches the /WinAnsiEncoding declared on the font; unmappable characters become '?'
PDF_TEXT_ENCODING = "cp1252"

CATALOG_ID = 1
PAGES_ID = 2
FONT_ID = 3
FIRST_PAGE_ID = 4

LINE_SPLIT_RE = re.compile(r"\r?\n")
FILE_NAME_INVALID_RE = re.compile(r"[^a-z0-9\-_]+")


def escape_pdf_text(value: str) -> str:
    """Backslash-escape characters with meaning inside a PDF literal string."""
    return value.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def _encode(value: str) -> bytes:
    return value.encode(PDF_TEXT_ENCODING, errors="replace")


def wrap_text_by_width(line: str, max_chars: int = PDF_MAX_CHARS_PER_LINE) -> List[str]:
    """
    Word-wrap one source line to a fixed character width.

    Words are packed while they fit; a word longer than the width is sliced
    into width-sized pieces.

    Args:
        line: Single source line
        max_chars: Maximum characters per output line

    Returns:
        Output lines (at least one)
    """
    if len(line) <= max_chars:
        return [line]

    output = []
    current = ""
    for word in line.split():
        candidate = f"{current} {word}" if current else word
        if len(candidate) <= max_chars:
            current = candidate
            continue
        if current:
            output.append(current)
        if len(word) > max_chars:
            output.extend(word[i:i + max_chars] for i in range(0, len(word), max_chars))
            current = ""
        else:
            current = word

    if current:
        output.append(current)
    return output if output else [""]


def wrap_document_lines(content: str, max_chars: int = PDF_MAX_CHARS_PER_LINE) -> List[str]:
    """Wrap every source line; blank source lines stay one blank line."""
    lines = []
    for line in LINE_SPLIT_RE.split(content):
        if not line.strip():
            lines.append("")
        else:
            lines.extend(wrap_text_by_width(line, max_chars))
    return lines


def paginate_lines(lines: List[str], lines_per_page: int = PDF_MAX_LINES_PER_PAGE) -> List[List[str]]:
    """Chunk wrapped lines into fixed-size pages; never returns zero pages."""
    pages = [lines[i:i + lines_per_page] for i in range(0, len(lines), lines_per_page)]
    return pages if pages else [[EMPTY_DOCUMENT_PLACEHOLDER]]


def _content_stream(title: str, lines: List[str]) -> bytes:
    # Title, a blank line, then one T* per body line
    operators = [
        "BT",
        f"/F1 {PDF_FONT_SIZE} Tf",
        f"{PDF_LINE_HEIGHT} TL",
        f"{PDF_MARGIN_X} {PDF_PAGE_HEIGHT - PDF_MARGIN_TOP} Td",
        f"({escape_pdf_text(title)}) Tj",
        "T*",
        "T*",
        "\nT*\n".join(f"({escape_pdf_text(line)}) Tj" for line in lines),
        "ET",
    ]
    return _encode("\n".join(operators))


def _serialize_object(object_id: int, body: bytes) -> bytes:
    return f"{object_id} 0 obj\n".encode("ascii") + body + b"\nendobj\n"


def _stream_body(stream: bytes) -> bytes:
    return f"<< /Length {len(stream)} >>\nstream\n".encode("ascii") + stream + b"\nendstream"


def _build_objects(pages: List[List[str]], title: str) -> List[bytes]:
    page_ids = [FIRST_PAGE_ID + 2 * index for index in range(len(pages))]
    kids = " ".join(f"{page_id} 0 R" for page_id in page_ids)

    objects = [
        _serialize_object(CATALOG_ID, f"<< /Type /Catalog /Pages {PAGES_ID} 0 R >>".encode("ascii")),
        _serialize_object(
            PAGES_ID,
            f"<< /Type /Pages /Kids [ {kids} ] /Count {len(pages)} >>".encode("ascii"),
        ),
        _serialize_object(FONT_ID, b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica /Encoding /WinAnsiEncoding >>"),
    ]

    for page_id, lines in zip(page_ids, pages):
        contents_id = page_id + 1
        page = (
            f"<< /Type /Page /Parent {PAGES_ID} 0 R "
            f"/MediaBox [0 0 {PDF_PAGE_WIDTH} {PDF_PAGE_HEIGHT}] "
            f"/Resources << /Font << /F1 {FONT_ID} 0 R >> >> "
            f"/Contents {contents_id} 0 R >>"
        )
        objects.append(_serialize_object(page_id, page.encode("ascii")))
        objects.append(_serialize_object(contents_id, _stream_body(_content_stream(title, lines))))

    return objects


def _serialize_file(objects: List[bytes]) -> bytes:
    offsets = []
    cursor = len(PDF_HEADER)
    for obj in objects:
        offsets.append(cursor)
        cursor += len(obj)
    xref_offset = cursor

    xref = [f"xref\n0 {len(objects) + 1}\n", "0000000000 65535 f \n"]
    xref.extend(f"{offset:010d} 00000 n \n" for offset in offsets)
    trailer = (
        f"trailer\n<< /Size {len(objects) + 1} /Root {CATALOG_ID} 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF"
    )

    return PDF_HEADER + b"".join(objects) + "".join(xref).encode("ascii") + trailer.encode("ascii")


def build_pdf(content: str, title: str) -> bytes:
    """
    Build a complete PDF file from plain text.

    Args:
        content: Document text; empty content renders a placeholder line
        title: Title drawn at the top of every page

    Returns:
        PDF file bytes

    Raises:
        PdfBuildError: If the file cannot be assembled
    """
    try:
        source = content if (content or "").strip() else EMPTY_DOCUMENT_PLACEHOLDER
        pages = paginate_lines(wrap_document_lines(source))
        return _serialize_file(_build_objects(pages, title or ""))
    except Exception as e:
        raise PdfBuildError(str(e)) from e


def pdf_file_name(title: str) -> str:
    """
    Download file name for an export title.

    Lowercases, collapses runs of characters outside [a-z0-9-_] into '-',
    trims leading/trailing '-', truncates to 80 characters and falls back to
    a fixed name when nothing is left.

    Returns:
        File name ending in .pdf
    """
    value = (title or "").strip() or FALLBACK_FILE_NAME
    value = FILE_NAME_INVALID_RE.sub("-", value.lower())
    value = re.sub(r"-+", "-", value).strip("-")[:MAX_FILE_NAME_LENGTH]
    return f"{value or FALLBACK_FILE_NAME}.pdf"
