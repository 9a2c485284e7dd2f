from abc import ABC, abstractmethod


class BaseDocumentExtractor(ABC):
    """Contract for all format-specific text extraction adapters."""

    @abstractmethod
    def extract(self, data: bytes) -> str:
        """Extract plain text from a document's raw bytes.

        Args:
            data: Raw file content.

        Returns:
            Extracted text as a single trimmed string. May be empty.

        Raises:
            ExtractionFailedError: if the document cannot be decoded.
        """
