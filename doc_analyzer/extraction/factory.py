from doc_analyzer.config.settings import Settings
from doc_analyzer.extraction.base import BaseDocumentExtractor
from doc_analyzer.extraction.docx_adapter import DocxAdapter
from doc_analyzer.extraction.pdfplumber_adapter import PdfPlumberAdapter
from doc_analyzer.extraction.pymupdf_adapter import PyMuPdfAdapter
from doc_analyzer.extraction.text_extractor import TextExtractor


class ExtractorFactory:
    """Creates the text extractor with the PDF engine chosen in settings."""

    PDF_ADAPTERS: dict[str, type[BaseDocumentExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create_pdf_extractor(cls, settings: Settings) -> BaseDocumentExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.PDF_ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.PDF_ADAPTERS)}"
            )
        return adapter_cls()

    @classmethod
    def create(cls, settings: Settings) -> TextExtractor:
        return TextExtractor(
            pdf_extractor=cls.create_pdf_extractor(settings),
            docx_extractor=DocxAdapter(),
        )
