"""Renders individual result fields as downloadable files."""

import csv
import io
from dataclasses import dataclass

import docx

from doc_analyzer.presentation.views import ResultView

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
CSV_MEDIA_TYPE = "text/csv"

TODO_CSV_HEADER = ("department", "task", "source_point")


class NothingToExportError(Exception):
    """Raised when the requested field is missing or empty."""


@dataclass(frozen=True)
class ExportFile:
    filename: str
    media_type: str
    content: bytes


def export_translation(view: ResultView) -> ExportFile:
    if not view.translated_text:
        raise NothingToExportError("No translation to export.")
    return ExportFile(
        filename="translation.docx",
        media_type=DOCX_MEDIA_TYPE,
        content=render_docx(view.translated_text, title="Translation"),
    )


def export_template(view: ResultView) -> ExportFile:
    if not view.response_template:
        raise NothingToExportError("No template to export.")
    return ExportFile(
        filename="response-template.docx",
        media_type=DOCX_MEDIA_TYPE,
        content=render_docx(view.response_template),
    )


def export_todos(view: ResultView) -> ExportFile:
    if not any(view.todos_by_department.values()):
        raise NothingToExportError("No to-dos to export.")
    return ExportFile(
        filename="todos.csv",
        media_type=CSV_MEDIA_TYPE,
        content=render_todos_csv(view).encode("utf-8"),
    )


def render_todos_csv(view: ResultView) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(TODO_CSV_HEADER)
    for department, todos in view.todos_by_department.items():
        for todo in todos:
            writer.writerow((department, todo.task, todo.source_point))
    return buf.getvalue()


def render_docx(text: str, title: str = "") -> bytes:
    """Write ``text`` to a DOCX document, one paragraph per line."""
    document = docx.Document()
    if title:
        document.add_heading(title, level=1)
    for line in text.splitlines():
        document.add_paragraph(line)
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()
