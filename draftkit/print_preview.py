"""Print Preview Exporter

Used for documents that contain images, which the minimal PDF writer cannot
embed. The document is converted line by line into a self-contained,
print-styled HTML page, opened in a browser, and printed once its images
have loaded (or a short timeout has passed) so the user can save as PDF.
"""
import html
import os
import re
import tempfile
import webbrowser
from concurrent.futures import ThreadPoolExecutor, wait
from pathlib import Path
from typing import Callable, List, Optional

import requests

from .config import (
    EMPTY_DOCUMENT_PLACEHOLDER,
    PRINT_IMAGE_WAIT_SECONDS,
    PRINT_INITIAL_DELAY_MS,
)
from .exceptions import FileWriteError, PrintPreviewBlockedError
from .export_options import ExportOptions
from .markdown_images import LINE_SPLIT_RE, parse_image_line
from .pdf_writer import pdf_file_name

HEADING_RE = re.compile(r"(#{1,6})\s+(.*)")

PRINT_STYLES = """
      @page { size: A4; margin: 18mm; }
      body {
        font-family: Inter, Arial, sans-serif;
        color: #111827;
        background: #ffffff;
        margin: 0;
        padding: 0;
      }
      .page {
        position: relative;
        padding: 0;
        margin: 0 auto;
        max-width: 210mm;
      }
      h1 {
        font-size: 20px;
        margin: 0 0 6px;
      }
      .meta {
        font-size: 12px;
        color: #6b7280;
        margin-bottom: 14px;
      }
      .preflight {
        font-size: 11px;
        color: #6b7280;
        margin-bottom: 14px;
      }
      .content {
        font-size: 13px;
        line-height: 1.55;
      }
      .content p {
        margin: 0 0 10px;
        word-break: break-word;
      }
      .content h1, .content h2, .content h3, .content h4, .content h5, .content h6 {
        margin: 0 0 10px;
        line-height: 1.3;
      }
      .content h1 { font-size: 24px; }
      .content h2 { font-size: 20px; }
      .content h3 { font-size: 18px; }
      .content .spacer {
        height: 10px;
      }
      .content .image-block {
        margin: 0 0 12px;
        break-inside: avoid;
      }
      .content .image-block img {
        max-width: 100%;
        max-height: 720px;
        object-fit: contain;
        border-radius: 4px;
        display: block;
      }
      .watermark {
        position: fixed;
        inset: 0;
        display: flex;
        justify-content: center;
        align-items: center;
        font-size: 48px;
        color: rgba(17, 24, 39, 0.08);
        letter-spacing: 2px;
        transform: rotate(-24deg);
        pointer-events: none;
        user-select: none;
      }
"""

# Browser-side half of the image wait: print when every image has fired
# load/error, or when the timeout elapses, whichever comes first.
PRINT_SCRIPT = """
      (function () {
        var printed = false;
        function printOnce() {
          if (printed) return;
          printed = true;
          window.focus();
          window.print();
        }
        function printWhenReady() {
          var images = Array.prototype.slice.call(document.images);
          var pending = images.length;
          if (pending === 0) { printOnce(); return; }
          function finish() {
            pending -= 1;
            if (pending <= 0) printOnce();
          }
          images.forEach(function (image) {
            if (image.complete) { finish(); return; }
            image.addEventListener('load', finish, { once: true });
            image.addEventListener('error', finish, { once: true });
          });
          window.setTimeout(printOnce, %(timeout_ms)d);
        }
        window.setTimeout(printWhenReady, %(delay_ms)d);
      })();
"""


def escape_html(value: str) -> str:
    return html.escape(value, quote=True)


def render_content_blocks(source: str) -> str:
    """
    Convert source text into print HTML blocks, one per line.

    Image lines become figures, ATX headings become h1-h6, blank lines become
    spacers and everything else becomes a paragraph.
    """
    blocks = []
    for line in LINE_SPLIT_RE.split(source):
        trimmed = line.strip()
        if not trimmed:
            blocks.append('<div class="spacer"></div>')
            continue

        image = parse_image_line(trimmed)
        if image:
            alt = escape_html(image.alt or "image")
            src = escape_html(image.src)
            title = f' title="{escape_html(image.title)}"' if image.title else ""
            blocks.append(
                f'<figure class="image-block"><img src="{src}" alt="{alt}"{title} /></figure>'
            )
            continue

        heading = HEADING_RE.fullmatch(trimmed)
        if heading:
            depth = min(6, len(heading.group(1)))
            blocks.append(f"<h{depth}>{escape_html(heading.group(2))}</h{depth}>")
            continue

        blocks.append(f"<p>{escape_html(trimmed)}</p>")

    return "\n".join(blocks)


def render_printable_html(
    content: str,
    options: ExportOptions,
    auto_print: bool = True,
    timeout_seconds: float = PRINT_IMAGE_WAIT_SECONDS,
) -> str:
    """
    Build the standalone print page for a document.

    Args:
        content: Raw document text
        options: Export options (title, metadata line, watermark, hints)
        auto_print: If True, embed the script that opens the print dialog
        timeout_seconds: Longest wait for images before printing anyway

    Returns:
        Complete HTML document
    """
    title = escape_html(options.resolved_title())
    source = (content or "").strip() or EMPTY_DOCUMENT_PLACEHOLDER

    meta = f'<div class="meta">Title: {title}</div>' if options.include_metadata else ""
    watermark = '<div class="watermark">Draft</div>' if options.watermark else ""
    script = ""
    if auto_print:
        script = "<script>%s</script>" % (
            PRINT_SCRIPT % {
                "timeout_ms": int(round(timeout_seconds * 1000)),
                "delay_ms": PRINT_INITIAL_DELAY_MS,
            }
        )

    return f"""<!doctype html>
<html>
  <head>
    <meta charset="utf-8" />
    <title>{title}</title>
    <style>{PRINT_STYLES}    </style>
  </head>
  <body>
    <div class="page">
      <h1>{title}</h1>
      {meta}
      <div class="preflight">Quality: {options.quality_hint} | Compression: {options.compression_hint}</div>
      <div class="content">{render_content_blocks(source)}</div>
    </div>
    {watermark}
    {script}
  </body>
</html>"""


def image_sources(content: str) -> List[str]:
    """Sources of every image line, in document order."""
    sources = []
    for line in LINE_SPLIT_RE.split(content or ""):
        image = parse_image_line(line)
        if image:
            sources.append(image.src)
    return sources


def probe_image_source(src: str, base_dir: str, timeout: float = PRINT_IMAGE_WAIT_SECONDS) -> bool:
    """
    Resolve one image source the way the print page will load it.

    Relative local paths are resolved against base_dir, the directory the
    print page is written to, not the directory of the source document.

    Returns:
        True if the image is reachable. Failures also count as a finished
        load signal, so the caller only cares that this returned.
    """
    if src.startswith("data:"):
        return True

    if src.startswith(("http://", "https://")):
        try:
            response = requests.head(src, timeout=timeout, allow_redirects=True)
            return response.ok
        except requests.RequestException as e:
            print(f"Warning: Could not reach image {src}: {e}")
            return False

    if src.startswith("file://"):
        src = src[len("file://"):]
    return os.path.exists(os.path.join(base_dir, src))


def wait_for_images(
    sources: List[str],
    probe: Callable[[str], bool],
    timeout: float = PRINT_IMAGE_WAIT_SECONDS,
) -> int:
    """
    Wait until every image has signalled or the timeout elapses.

    Args:
        sources: Image sources to wait for
        probe: Blocking call that returns once a source has loaded or failed
        timeout: Longest wait in seconds

    Returns:
        Number of sources still pending when the wait ended
    """
    if not sources:
        return 0

    executor = ThreadPoolExecutor(max_workers=min(8, len(sources)))
    try:
        futures = [executor.submit(probe, src) for src in sources]
        _, pending = wait(futures, timeout=timeout)
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    if pending:
        print(f"Warning: {len(pending)} image(s) still loading after {timeout}s, printing anyway")
    return len(pending)


class PrintPreviewExporter:
    """Opens a printable HTML rendition of a document in the browser.

    Attributes:
        output_dir: Directory the HTML page is written to
        opener: Callable(url) -> bool that opens a browsing context
        timeout: Longest image wait in seconds before printing anyway
        last_html_path: Path of the most recently written page
    """

    def __init__(
        self,
        output_dir: Optional[str] = None,
        opener: Optional[Callable[[str], bool]] = None,
        image_probe: Optional[Callable[[str], bool]] = None,
        timeout: float = PRINT_IMAGE_WAIT_SECONDS,
    ):
        self.output_dir = output_dir or tempfile.gettempdir()
        self.opener = opener or (lambda url: webbrowser.open(url, new=2))
        self.timeout = timeout
        self.image_probe = image_probe or (
            lambda src: probe_image_source(src, self.output_dir, timeout=self.timeout)
        )
        self.last_html_path: Optional[str] = None

    def write_page(self, content: str, options: ExportOptions) -> str:
        """
        Write the print page to the output directory.

        Raises:
            FileWriteError: If the page cannot be written
        """
        stem = pdf_file_name(options.resolved_title())[:-len(".pdf")]
        path = os.path.join(self.output_dir, f"{stem}-print.html")
        try:
            os.makedirs(self.output_dir, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(render_printable_html(content, options, timeout_seconds=self.timeout))
        except OSError as e:
            raise FileWriteError(path, str(e)) from e
        return path

    def show(self, content: str, options: ExportOptions) -> str:
        """
        Write the page, wait for its images, then open it.

        Returns:
            Path of the opened page

        Raises:
            FileWriteError: If the page cannot be written
            PrintPreviewBlockedError: If the browsing context cannot be opened
        """
        path = self.write_page(content, options)
        self.last_html_path = path

        wait_for_images(image_sources(content), self.image_probe, timeout=self.timeout)

        url = Path(path).resolve().as_uri()
        print(f"DEBUG: Opening print preview at {url}")
        if not self.opener(url):
            raise PrintPreviewBlockedError(url)
        return path

    def open(self, content: str, options: ExportOptions) -> bool:
        """
        Show the print preview.

        Returns:
            True if the preview opened, False if it was blocked or could not
            be written (callers fall back to the text-only PDF)
        """
        try:
            self.show(content, options)
            return True
        except (FileWriteError, PrintPreviewBlockedError) as e:
            print(f"Warning: {e}")
            return False
        except Exception as e:
            print(f"Warning: Print preview failed: {e}")
            return False
