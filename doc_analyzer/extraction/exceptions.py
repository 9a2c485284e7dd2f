class ExtractionError(Exception):
    """Base exception for all text extraction errors."""


class UnsupportedFileTypeError(ExtractionError):
    """Raised when an upload is neither a PDF nor a DOCX document."""


class ExtractionFailedError(ExtractionError):
    """Raised when the underlying decoder cannot read the document."""
