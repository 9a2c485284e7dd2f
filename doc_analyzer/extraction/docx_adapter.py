import io

import docx
from docx.table import Table

from doc_analyzer.extraction.base import BaseDocumentExtractor
from doc_analyzer.extraction.exceptions import ExtractionFailedError


class DocxAdapter(BaseDocumentExtractor):
    """Extracts raw DOCX text using python-docx, ignoring formatting.

    Paragraphs and tables are read in document order. Each paragraph is one
    line (empty paragraphs included) and each table row is one line with its
    cells joined by " | ".
    """

    def extract(self, data: bytes) -> str:
        try:
            document = docx.Document(io.BytesIO(data))
        except Exception as exc:
            raise ExtractionFailedError(f"python-docx could not read DOCX: {exc}") from exc

        lines: list[str] = []
        for block in document.iter_inner_content():
            if isinstance(block, Table):
                lines.extend(self._table_rows(block))
            else:
                lines.append(block.text)
        return "\n".join(lines).strip()

    @staticmethod
    def _table_rows(table: Table) -> list[str]:
        rows = []
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells]
            if any(cells):
                rows.append(" | ".join(cells))
        return rows
