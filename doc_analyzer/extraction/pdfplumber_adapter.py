import io

import pdfplumber

from doc_analyzer.extraction.base import BaseDocumentExtractor
from doc_analyzer.extraction.exceptions import ExtractionFailedError


class PdfPlumberAdapter(BaseDocumentExtractor):
    """Extracts embedded PDF text using pdfplumber."""

    def extract(self, data: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise ExtractionFailedError(f"pdfplumber could not read PDF: {exc}") from exc
        return "\n".join(pages).strip()
