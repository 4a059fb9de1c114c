"""Document Export Pipeline

Routes a document to the right export path and falls back when a path fails.
"""
import os
from typing import Callable, Optional

from .config import PROGRESS_STEPS
from .exceptions import ExportError, FileWriteError
from .export_options import ExportOptions
from .export_result import ExportResult
from .markdown_images import has_image_markdown
from .pdf_writer import build_pdf, pdf_file_name
from .print_preview import PrintPreviewExporter

FAILED_MESSAGE = "Could not generate PDF file."
DOWNLOAD_MESSAGE = "PDF downloaded"
PRINT_MESSAGE = "Print dialog opened with images. Choose Save as PDF."


class DocumentExporter:
    """Export orchestrator.

    Routing:
    - Content with image lines: print preview first (the minimal PDF writer
      cannot embed images), text-only PDF download as fallback
    - Text-only content: PDF download first, print preview as fallback
    - Both paths failing: a failed result with a generic message

    Attributes:
        output_dir: Directory PDF downloads are written to
        print_preview: Print preview exporter used for the image path
        progress_callback: Optional callback for progress updates (progress, desc)
    """

    def __init__(
        self,
        output_dir: str,
        print_preview: Optional[PrintPreviewExporter] = None,
        progress_callback: Optional[Callable[[float, str], None]] = None,
    ):
        """Initialize exporter.

        Args:
            output_dir: Directory for downloaded PDF files
            print_preview: Print preview exporter; defaults to one writing into output_dir
            progress_callback: Optional function(progress: float, desc: str) for progress updates
        """
        self.output_dir = output_dir
        self.print_preview = print_preview or PrintPreviewExporter(output_dir=output_dir)
        self.progress = progress_callback or (lambda p, d: None)

    def write_pdf(self, content: str, options: ExportOptions) -> str:
        """Build the text-only PDF and write it to the output directory.

        Returns:
            Path of the written file

        Raises:
            PdfBuildError: If the PDF cannot be built
            FileWriteError: If the file cannot be written
        """
        title = options.resolved_title()
        data = build_pdf(content, title)

        path = os.path.join(self.output_dir, pdf_file_name(title))
        try:
            os.makedirs(self.output_dir, exist_ok=True)
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            # No partial file left behind
            if os.path.exists(path):
                os.remove(path)
            raise FileWriteError(path, str(e)) from e

        print(f"DEBUG: Wrote {len(data)} bytes to {path}")
        return path

    def download_pdf(self, content: str, options: ExportOptions) -> Optional[str]:
        """Write the text-only PDF.

        Returns:
            Path of the written file, or None if it could not be produced
        """
        try:
            return self.write_pdf(content, options)
        except ExportError as e:
            print(f"Warning: {e}")
            return None

    def _download_result(self, content: str, options: ExportOptions) -> Optional[ExportResult]:
        self.progress(PROGRESS_STEPS["BUILD"], "Building PDF...")
        path = self.download_pdf(content, options)
        if path is None:
            return None
        return ExportResult(status="download", status_message=DOWNLOAD_MESSAGE, pdf_path=path)

    def _print_result(self, content: str, options: ExportOptions) -> Optional[ExportResult]:
        self.progress(PROGRESS_STEPS["BUILD"], "Opening print preview...")
        if not self.print_preview.open(content, options):
            return None
        return ExportResult(
            status="print",
            status_message=PRINT_MESSAGE,
            html_path=self.print_preview.last_html_path,
        )

    def _try_path(self, path, content: str, options: ExportOptions) -> Optional[ExportResult]:
        """Run one export path; any error counts as that path failing."""
        try:
            return path(content, options)
        except Exception as e:
            print(f"Warning: Export path {path.__name__} failed: {e}")
            return None

    def export(self, content: str, options: Optional[ExportOptions] = None) -> ExportResult:
        """Export a document.

        Args:
            content: Raw document text
            options: Export options; defaults are used when None

        Returns:
            ExportResult with status "download", "print" or "failed"

        Raises:
            Does not raise - all errors are captured in ExportResult.error
        """
        options = options or ExportOptions()
        content = content or ""
        self.progress(PROGRESS_STEPS["START"], "Preparing export...")

        try:
            self.progress(PROGRESS_STEPS["ROUTE"], "Checking for images...")
            if has_image_markdown(content):
                paths = (self._print_result, self._download_result)
            else:
                paths = (self._download_result, self._print_result)

            primary, fallback = paths
            result = self._try_path(primary, content, options)
            if result is None:
                print("Info: Primary export path failed, trying fallback")
                self.progress(PROGRESS_STEPS["FALLBACK"], "Trying fallback export...")
                result = self._try_path(fallback, content, options)

            if result is None:
                return ExportResult(status="failed", status_message=FAILED_MESSAGE, error=FAILED_MESSAGE)

            self.progress(PROGRESS_STEPS["COMPLETE"], "Complete!")
            return result

        except Exception as e:
            return ExportResult(status="failed", status_message=FAILED_MESSAGE, error=str(e))
