"""Configuration Constants

Constants for the pagination, preflight and export pipeline.
"""
from reportlab.lib.pagesizes import A4

# Manual page break marker inserted by the editor
PAGE_BREAK_TOKEN = "<!--DK_PAGE_BREAK-->"

# Page Budgets (approximate characters per page)
DEFAULT_CHARS_PER_PAGE = 1800
CATALOGUE_CHARS_PER_PAGE = 1400  # Two-column layout holds less text
THUMBNAIL_CHARS_PER_PAGE = 1300  # Saved document first-page preview

LAYOUT_PAGE_BUDGETS = {
    "book": DEFAULT_CHARS_PER_PAGE,
    "zine": DEFAULT_CHARS_PER_PAGE,
    "catalogue": CATALOGUE_CHARS_PER_PAGE,
    "report": DEFAULT_CHARS_PER_PAGE,
    "custom": DEFAULT_CHARS_PER_PAGE,
}

# Preview spread limits
MIN_PREVIEW_PAGES = 2
MAX_PREVIEW_PAGES = 24

# Line Wrapper
WRAP_WIDTH = 120

# Preflight Thresholds
OVERFLOW_LINE_LENGTH = 360
LARGE_DOCUMENT_CHARS = 20000
LARGE_DOCUMENT_LINES = 900

SUPPORTED_FONTS = frozenset({
    "inter",
    "ibm plex sans",
    "source sans pro",
    "georgia",
    "times new roman",
})

# Minimal PDF Renderer Geometry (points)
PDF_PAGE_WIDTH = round(A4[0])   # 595
PDF_PAGE_HEIGHT = round(A4[1])  # 842
PDF_MARGIN_X = 52
PDF_MARGIN_TOP = 64
PDF_MARGIN_BOTTOM = 60
PDF_LINE_HEIGHT = 15
PDF_FONT_SIZE = 11
PDF_MAX_CHARS_PER_LINE = 92
PDF_MAX_LINES_PER_PAGE = (PDF_PAGE_HEIGHT - PDF_MARGIN_TOP - PDF_MARGIN_BOTTOM) // PDF_LINE_HEIGHT

# Export
DEFAULT_EXPORT_TITLE = "Draft Export"
MAX_TITLE_LENGTH = 120
FALLBACK_FILE_NAME = "draft-export"
MAX_FILE_NAME_LENGTH = 80
EMPTY_DOCUMENT_PLACEHOLDER = "No content available."

# Export Defaults (inspector panel defaults)
DEFAULT_EXPORT_QUALITY = 80
DEFAULT_COMPRESSION = True
DEFAULT_WATERMARK = False
DEFAULT_INCLUDE_METADATA = True

# Print Preview
PRINT_IMAGE_WAIT_SECONDS = 1.8
PRINT_INITIAL_DELAY_MS = 100

# Share Links
SHARE_VIEW_PARAM = "view"
SHARE_VIEW_VALUE = "pdf"
SHARE_PAYLOAD_PARAM = "share"
SHARE_URL_MAX_LENGTH = 7000
DEFAULT_SHARE_BASE_URL = "http://localhost:7860/"

# Progress Steps (for UI progress tracking)
PROGRESS_STEPS = {
    "START": 0.05,
    "ROUTE": 0.15,
    "BUILD": 0.50,
    "FALLBACK": 0.75,
    "COMPLETE": 1.0,
}
