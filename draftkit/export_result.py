"""Export Result Dataclass

Result outputs from the export pipeline.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class ExportResult:
    """Result from the export pipeline.

    Attributes:
        status: Export status ("download", "print", "failed")
        status_message: Human-readable status message

        # Output Files
        pdf_path: Path to the written PDF (download path only)
        html_path: Path to the printable HTML page (print path only)

        # Error Handling
        error: Error message if export failed (None otherwise)
    """

    # Status
    status: str  # "download", "print", "failed"
    status_message: str

    # Output Files
    pdf_path: Optional[str] = None
    html_path: Optional[str] = None

    # Error Handling
    error: Optional[str] = None

    @property
    def is_download(self) -> bool:
        """True if a PDF file was written."""
        return self.status == "download" and self.pdf_path is not None

    @property
    def is_print(self) -> bool:
        """True if the print preview was opened."""
        return self.status == "print"

    @property
    def is_failed(self) -> bool:
        """True if export failed on every path."""
        return self.status == "failed"

    def to_gradio_outputs(self) -> tuple:
        """Convert to Gradio UI outputs format.

        Returns:
            Tuple of (pdf_file_update, status_message)
        """
        import gradio as gr

        if self.is_download:
            return gr.update(value=self.pdf_path, visible=True), self.status_message

        return gr.update(value=None, visible=False), self.status_message
