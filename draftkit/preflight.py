"""Preflight Analyzer

Scans document text for conditions that are likely to break the exported
layout and classifies them by severity. The checks are deliberately crude
line/character heuristics, not a Markdown parser: unbalanced punctuation in
ordinary prose is reported as a parse risk too.
"""
import re
from dataclasses import dataclass, field
from typing import List

import pandas as pd

from .config import (
    LARGE_DOCUMENT_CHARS,
    LARGE_DOCUMENT_LINES,
    OVERFLOW_LINE_LENGTH,
    SUPPORTED_FONTS,
)
from .markdown_images import iter_image_sources

FONT_TAG_RE = re.compile(r"\[font:\s*([^\]]+)\]", re.IGNORECASE)

SEVERITY_NONE = "none"
SEVERITY_MINOR = "minor"
SEVERITY_MAJOR = "major"


@dataclass(frozen=True)
class PreflightIssue:
    """A single layout risk found in the document.

    Attributes:
        kind: "parse", "overflow", "missing-font", "image-failure" or "large-document"
        level: "minor" (advisory) or "major" (blocks export until acknowledged)
        title: Short user-facing title
        detail: User-facing hint on how to resolve it
    """
    kind: str
    level: str
    title: str
    detail: str


@dataclass
class PreflightReport:
    """Result of analyzing a document."""
    severity: str = SEVERITY_NONE
    issues: List[PreflightIssue] = field(default_factory=list)
    has_large_document: bool = False

    @property
    def is_blocking(self) -> bool:
        """True if export must be acknowledged or resolved first."""
        return self.severity == SEVERITY_MAJOR

    def kinds(self) -> List[str]:
        return [issue.kind for issue in self.issues]

    def to_dataframe(self) -> pd.DataFrame:
        """Issues as a table for display."""
        return pd.DataFrame(
            [[issue.level, issue.title, issue.detail] for issue in self.issues],
            columns=["Level", "Issue", "Details"],
        )


PARSE_ISSUE = PreflightIssue(
    kind="parse",
    level=SEVERITY_MINOR,
    title="Some content couldn't be formatted",
    detail="Check for unmatched symbols or unsupported formatting in the highlighted section.",
)

OVERFLOW_ISSUE = PreflightIssue(
    kind="overflow",
    level=SEVERITY_MAJOR,
    title="Section exceeds page bounds",
    detail="Try adjusting spacing, reducing font size, or allowing this section to break across pages.",
)

MISSING_FONT_ISSUE = PreflightIssue(
    kind="missing-font",
    level=SEVERITY_MINOR,
    title="Font unavailable",
    detail="The selected font couldn't be loaded. A fallback font is being used for preview and export.",
)

IMAGE_FAILURE_ISSUE = PreflightIssue(
    kind="image-failure",
    level=SEVERITY_MAJOR,
    title="Image couldn't be displayed",
    detail="Check the file path or reinsert the image before exporting.",
)

LARGE_DOCUMENT_ISSUE = PreflightIssue(
    kind="large-document",
    level=SEVERITY_MINOR,
    title="Large document detected",
    detail="Rendering may take a moment. Consider enabling compression before export.",
)


def has_unbalanced_markup(source: str) -> bool:
    """Odd backtick count, or mismatched bracket or parenthesis counts."""
    return (
        source.count("`") % 2 != 0
        or source.count("[") != source.count("]")
        or source.count("(") != source.count(")")
    )


def longest_line_length(source: str) -> int:
    return max((len(line) for line in source.split("\n")), default=0)


def has_unsupported_font(source: str) -> bool:
    """True if the first [font: NAME] tag names a font outside the allowlist."""
    match = FONT_TAG_RE.search(source)
    if not match:
        return False
    return match.group(1).strip().lower() not in SUPPORTED_FONTS


def has_broken_image_reference(source: str) -> bool:
    """True if any image source is empty or looks like a failed upload."""
    for raw_src in iter_image_sources(source):
        src = raw_src.strip().lower()
        if not src or "missing" in src or "404" in src:
            return True
    return False


def is_large_document(source: str) -> bool:
    return len(source) > LARGE_DOCUMENT_CHARS or len(source.split("\n")) > LARGE_DOCUMENT_LINES


def aggregate_severity(issues: List[PreflightIssue]) -> str:
    """Major if any issue is major, else minor if any issue exists, else none."""
    if any(issue.level == SEVERITY_MAJOR for issue in issues):
        return SEVERITY_MAJOR
    if issues:
        return SEVERITY_MINOR
    return SEVERITY_NONE


def analyze_document(content: str) -> PreflightReport:
    """
    Run every preflight check on the raw document text.

    Args:
        content: Raw document text (not wrapped, not paginated)

    Returns:
        PreflightReport; empty or whitespace-only content has no issues
    """
    source = content or ""
    if not source.strip():
        return PreflightReport()

    issues = []
    if has_unbalanced_markup(source):
        issues.append(PARSE_ISSUE)
    if longest_line_length(source) > OVERFLOW_LINE_LENGTH:
        issues.append(OVERFLOW_ISSUE)
    if has_unsupported_font(source):
        issues.append(MISSING_FONT_ISSUE)
    if has_broken_image_reference(source):
        issues.append(IMAGE_FAILURE_ISSUE)

    large = is_large_document(source)
    if large:
        issues.append(LARGE_DOCUMENT_ISSUE)

    return PreflightReport(
        severity=aggregate_severity(issues),
        issues=issues,
        has_large_document=large,
    )
