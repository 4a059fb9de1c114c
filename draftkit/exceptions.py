"""Custom Exception Hierarchy

Exception hierarchy for draftkit. Most core operations report failures as
values (None, preflight issues, failed export results); these exceptions are
raised internally and by the strict helpers, then converted at the boundary.
"""


class DraftKitError(Exception):
    """Base exception for all draftkit errors.

    Catching this exception will catch all custom exceptions from the package.
    """
    pass


# Validation Errors
class ValidationError(DraftKitError):
    """Raised when input validation fails."""
    pass


class InvalidConfigurationError(ValidationError):
    """Raised when export options are invalid."""
    pass


# Export Errors
class ExportError(DraftKitError):
    """Base class for export-related errors."""
    pass


class PdfBuildError(ExportError):
    """Raised when the minimal PDF serializer cannot produce a file."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Could not build PDF: {reason}")


class FileWriteError(ExportError):
    """Raised when an export file cannot be written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Could not write '{path}': {reason}")


class PrintPreviewError(ExportError):
    """Base class for print preview errors."""
    pass


class PrintPreviewBlockedError(PrintPreviewError):
    """Raised when no browsing context could be opened for the print preview."""

    def __init__(self, target: str):
        self.target = target
        super().__init__(f"Print preview could not be opened: {target}")


# Share Link Errors
class ShareLinkError(DraftKitError):
    """Base class for share link errors."""
    pass


class ShareLinkTooLongError(ShareLinkError):
    """Raised when an encoded share URL exceeds the length ceiling."""

    def __init__(self, length: int, max_length: int):
        self.length = length
        self.max_length = max_length
        super().__init__(
            f"Share URL is {length} characters, maximum is {max_length}"
        )


class ShareLinkDecodeError(ShareLinkError):
    """Raised when a share payload cannot be decoded."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid share payload: {reason}")
