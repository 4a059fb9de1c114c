"""draftkit

Pagination, preflight and export core for a Markdown/plain-text page editor:
- paging: splits a text buffer into page-sized chunks
- preflight: flags layout-breaking conditions before export
- pdf_writer: hand-rolled multi-page PDF for text-only documents
- print_preview: print-styled HTML path for documents with images
- share_link: URL-safe encoding of export payloads
- exporter: routes a document to the right export path
"""

from .paging import (
    paginate,
    count_pages,
    preview_pages,
    preview_target_pages,
    first_page_excerpt,
    split_segments,
    split_blocks,
    split_oversized_block,
    wrap_long_lines,
)
from .preflight import PreflightIssue, PreflightReport, analyze_document
from .pdf_writer import build_pdf, pdf_file_name, wrap_text_by_width, escape_pdf_text
from .print_preview import PrintPreviewExporter, render_printable_html
from .share_link import (
    SharePayload,
    build_share_url,
    read_share_payload,
    strip_share_params,
)
from .markdown_images import MarkdownImage, parse_image_line, is_image_line, has_image_markdown
from .export_options import ExportOptions
from .export_result import ExportResult
from .exporter import DocumentExporter

# Expose public API
__all__ = [
    # Pagination
    'paginate',
    'count_pages',
    'preview_pages',
    'preview_target_pages',
    'first_page_excerpt',
    'split_segments',
    'split_blocks',
    'split_oversized_block',
    'wrap_long_lines',

    # Preflight
    'PreflightIssue',
    'PreflightReport',
    'analyze_document',

    # Export
    'build_pdf',
    'pdf_file_name',
    'wrap_text_by_width',
    'escape_pdf_text',
    'PrintPreviewExporter',
    'render_printable_html',
    'DocumentExporter',
    'ExportOptions',
    'ExportResult',

    # Share links
    'SharePayload',
    'build_share_url',
    'read_share_payload',
    'strip_share_params',

    # Images
    'MarkdownImage',
    'parse_image_line',
    'is_image_line',
    'has_image_markdown',
]
