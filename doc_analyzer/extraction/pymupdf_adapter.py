import pymupdf

from doc_analyzer.extraction.base import BaseDocumentExtractor
from doc_analyzer.extraction.exceptions import ExtractionFailedError


class PyMuPdfAdapter(BaseDocumentExtractor):
    """Extracts embedded PDF text using PyMuPDF."""

    def extract(self, data: bytes) -> str:
        try:
            with pymupdf.open(stream=data, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
        except Exception as exc:
            raise ExtractionFailedError(f"pymupdf could not read PDF: {exc}") from exc
        return "\n".join(pages).strip()
