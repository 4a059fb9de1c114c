"""Paginator

Splits a flat Markdown/plain-text buffer into page-sized chunks.

Pipeline per document:
1. Split on the manual page break token into independent segments
2. Hard-wrap long non-image lines in each segment
3. Split the wrapped segment into blank-line delimited blocks
4. Greedily pack blocks into pages under an approximate character budget,
   cutting blocks that alone exceed the budget

All functions are pure: the same content and budget always give the same pages.
"""
import re
from typing import List

from .config import (
    MAX_PREVIEW_PAGES,
    MIN_PREVIEW_PAGES,
    PAGE_BREAK_TOKEN,
    THUMBNAIL_CHARS_PER_PAGE,
    WRAP_WIDTH,
)
from .markdown_images import is_image_line

BLOCK_SEPARATOR = "\n\n"
BLOCK_SPLIT_RE = re.compile(r"\n{2,}")
PAGE_BREAK_RE = re.compile(r"\s*" + re.escape(PAGE_BREAK_TOKEN) + r"\s*")


def _check_budget(approx_chars_per_page: int) -> None:
    if isinstance(approx_chars_per_page, bool) or not isinstance(approx_chars_per_page, int):
        raise ValueError(
            f"approx_chars_per_page must be an integer, got {approx_chars_per_page!r}"
        )
    if approx_chars_per_page <= 0:
        raise ValueError(
            f"approx_chars_per_page must be positive, got {approx_chars_per_page}"
        )


def split_segments(content: str) -> List[str]:
    """
    Split content on the manual page break token.

    Whitespace around each token belongs to the split point. Empty segments
    are dropped, so content made only of tokens has no segments; content
    without tokens is a single segment.

    Args:
        content: Trimmed document content

    Returns:
        List of non-empty, trimmed segments
    """
    segments = [part.strip() for part in PAGE_BREAK_RE.split(content)]
    return [segment for segment in segments if segment]


def wrap_long_lines(segment: str, width: int = WRAP_WIDTH) -> str:
    """
    Hard-wrap every non-image line longer than ``width`` characters.

    Slicing is fixed-width with no word-boundary awareness. Image reference
    lines pass through untouched so their URLs are never cut.
    """
    wrapped = []
    for line in segment.split("\n"):
        if is_image_line(line) or len(line) <= width:
            wrapped.append(line)
            continue
        wrapped.append("\n".join(line[i:i + width] for i in range(0, len(line), width)))
    return "\n".join(wrapped)


def split_blocks(text: str) -> List[str]:
    """Split text into blocks on runs of blank lines, dropping whitespace-only blocks."""
    return [block for block in BLOCK_SPLIT_RE.split(text) if block.strip()]


def split_oversized_block(block: str, approx_chars_per_page: int) -> List[str]:
    """
    Cut a block that alone exceeds the page budget into pieces.

    Each cut prefers the last newline before the budget offset, then the
    last space, as long as the cut lands past half the budget; otherwise the
    block is hard-cut at the budget offset. No text is dropped apart from
    whitespace at the cut points.

    Args:
        block: Block text
        approx_chars_per_page: Page budget in characters

    Returns:
        Ordered list of pieces
    """
    _check_budget(approx_chars_per_page)
    half = approx_chars_per_page * 0.5
    pieces = []
    rest = block.strip()

    while len(rest) > approx_chars_per_page:
        cut = rest.rfind("\n", 0, approx_chars_per_page + 1)
        if cut < half:
            cut = rest.rfind(" ", 0, approx_chars_per_page + 1)
        if cut < half:
            cut = approx_chars_per_page
        pieces.append(rest[:cut].strip())
        rest = rest[cut:].strip()

    if rest:
        pieces.append(rest)
    return pieces if pieces else [block]


def _paginate_segment(segment: str, approx_chars_per_page: int) -> List[str]:
    pages = []
    current = ""

    for block in split_blocks(wrap_long_lines(segment)):
        if len(block) > approx_chars_per_page:
            parts = split_oversized_block(block, approx_chars_per_page)
        else:
            parts = [block]

        for part in parts:
            candidate = f"{current}{BLOCK_SEPARATOR}{part}" if current else part
            if len(candidate) > approx_chars_per_page and current:
                pages.append(current)
                current = part
            else:
                current = candidate

    if current:
        pages.append(current)
    return pages


def paginate(content: str, approx_chars_per_page: int) -> List[str]:
    """
    Split document content into page chunks.

    Args:
        content: Raw document text
        approx_chars_per_page: Approximate character budget per page

    Returns:
        Pages in document order; always at least one (possibly empty) page

    Raises:
        ValueError: If the budget is not a positive integer
    """
    _check_budget(approx_chars_per_page)

    source = (content or "").strip()
    if not source:
        return [""]

    pages = []
    for segment in split_segments(source):
        pages.extend(_paginate_segment(segment, approx_chars_per_page))

    return pages if pages else [""]


def count_pages(content: str, approx_chars_per_page: int) -> int:
    """Number of pages the content paginates into."""
    return len(paginate(content, approx_chars_per_page))


def preview_pages(content: str, approx_chars_per_page: int, target_pages: int) -> List[str]:
    """
    Pages for a fixed-size preview spread.

    Truncates to ``target_pages`` or pads with empty pages up to it.
    """
    pages = paginate(content, approx_chars_per_page)
    if len(pages) >= target_pages:
        return pages[:target_pages]
    return pages + [""] * (target_pages - len(pages))


def preview_target_pages(full_book: bool, requested_pages: int) -> int:
    """Spread size: two pages, or the clamped requested count in full-book mode."""
    if not full_book:
        return MIN_PREVIEW_PAGES
    return min(max(requested_pages, MIN_PREVIEW_PAGES), MAX_PREVIEW_PAGES)


def first_page_excerpt(content: str) -> str:
    """Trimmed first page at the thumbnail budget."""
    return paginate(content, THUMBNAIL_CHARS_PER_PAGE)[0].strip()
