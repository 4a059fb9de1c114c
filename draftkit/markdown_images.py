"""Markdown Image Parsing

Single source of truth for recognising Markdown image references. The line
wrapper, the paginator, export path selection and preflight all go through
this module.

Accepted shapes (whole trimmed line):
    ![alt](src)
    ![alt](src "title")
    ![alt](src 'title')
    ![alt](<src with spaces>)
"""
import re
from typing import Iterator, NamedTuple, Optional

IMAGE_LINE_RE = re.compile(r"!\[([^\]]*)\]\((.+)\)")
TITLED_BODY_RE = re.compile(r"(.*\S)\s+(\"(?:[^\"\\]|\\.)*\"|'(?:[^'\\]|\\.)*')\s*")
INLINE_IMAGE_RE = re.compile(r"!\[[^\]]*\]\(([^)]*)\)")
LINE_SPLIT_RE = re.compile(r"\r?\n")


class MarkdownImage(NamedTuple):
    """A parsed image reference."""
    alt: str
    src: str
    title: str


def _strip_quotes(token: str) -> str:
    if len(token) >= 2 and token[0] == token[-1] and token[0] in ("'", '"'):
        return token[1:-1]
    return ""


def parse_image_line(line: str) -> Optional[MarkdownImage]:
    """
    Parse a line consisting of exactly one Markdown image reference.

    Args:
        line: Raw source line (surrounding whitespace is ignored)

    Returns:
        MarkdownImage, or None if the line is not an image reference
    """
    trimmed = line.strip()
    if not trimmed:
        return None

    match = IMAGE_LINE_RE.fullmatch(trimmed)
    if not match:
        return None

    alt = match.group(1)
    body = match.group(2).strip()
    if not body:
        return None

    titled = TITLED_BODY_RE.fullmatch(body)
    src_token = (titled.group(1) if titled else body).strip()
    if not src_token:
        return None

    # <...> lets the URL contain spaces
    if src_token.startswith("<") and src_token.endswith(">") and len(src_token) > 2:
        src = src_token[1:-1].strip()
    else:
        src = src_token
    if not src:
        return None

    title = _strip_quotes(titled.group(2)) if titled else ""
    return MarkdownImage(alt=alt, src=src, title=title)


def is_image_line(line: str) -> bool:
    """True if the line is a single Markdown image reference."""
    return parse_image_line(line) is not None


def has_image_markdown(content: str) -> bool:
    """True if any line of the content is an image reference."""
    return any(is_image_line(line) for line in LINE_SPLIT_RE.split(content or ""))


def iter_image_sources(content: str) -> Iterator[str]:
    """Yield the raw parenthesised body of every inline image reference."""
    for match in INLINE_IMAGE_RE.finditer(content or ""):
        yield match.group(1) or ""
