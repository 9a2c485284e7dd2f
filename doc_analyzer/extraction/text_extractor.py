"""Routes an upload to the right format adapter by filename and MIME type."""

from enum import Enum

from doc_analyzer.extraction.base import BaseDocumentExtractor
from doc_analyzer.extraction.exceptions import UnsupportedFileTypeError
from doc_analyzer.logging.logger import Log

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_MARKER = "wordprocessingml"


class DocumentKind(str, Enum):
    PDF = "pdf"
    DOCX = "docx"


def resolve_kind(filename: str, mime_type: str) -> DocumentKind:
    """Resolve the document kind, filename extension first, MIME type second.

    Raises:
        UnsupportedFileTypeError: if neither hints at PDF or DOCX.
    """
    name = (filename or "").lower()
    mime = (mime_type or "").lower()
    if name.endswith(".pdf") or mime == PDF_MIME_TYPE:
        return DocumentKind.PDF
    if name.endswith(".docx") or DOCX_MIME_MARKER in mime:
        return DocumentKind.DOCX
    raise UnsupportedFileTypeError(
        f"Unsupported file type for '{filename or 'file'}': only PDF and DOCX are allowed"
    )


class TextExtractor:
    """Maps uploaded bytes to plain text using per-format adapters."""

    def __init__(
        self,
        pdf_extractor: BaseDocumentExtractor,
        docx_extractor: BaseDocumentExtractor,
    ) -> None:
        self._adapters = {
            DocumentKind.PDF: pdf_extractor,
            DocumentKind.DOCX: docx_extractor,
        }

    def extract(self, data: bytes, filename: str, mime_type: str) -> str:
        """Extract trimmed text from an upload.

        An empty string is a valid result; callers decide whether it is fatal.

        Raises:
            UnsupportedFileTypeError: if the kind cannot be resolved.
            ExtractionFailedError: if the adapter cannot decode the file.
        """
        kind = resolve_kind(filename, mime_type)
        text = self._adapters[kind].extract(data)
        Log.debug(f"Extracted {len(text)} chars from {kind.value} '{filename}'")
        return text
