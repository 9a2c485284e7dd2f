"""
HTTP endpoints: analysis, result exports and liveness.
"""
from typing import Any

from fastapi import APIRouter, Body, File, Form, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response

from doc_analyzer.analysis.exceptions import AnalysisError
from doc_analyzer.analysis.models import AnalysisRequest, UploadedFile
from doc_analyzer.analysis.orchestrator import AnalysisOrchestrator
from doc_analyzer.api.errors import error_response
from doc_analyzer.extraction.exceptions import ExtractionError
from doc_analyzer.llm.exceptions import LlmError
from doc_analyzer.logging.logger import Log
from doc_analyzer.presentation.export import (
    ExportFile,
    export_template,
    export_todos,
    export_translation,
)
from doc_analyzer.presentation.views import build_result_view

SKIPPED_CROSS_FILES_HEADER = "X-Skipped-Cross-Files"

router = APIRouter()


async def _read_upload(upload: UploadFile) -> UploadedFile:
    return UploadedFile(
        data=await upload.read(),
        filename=upload.filename or "",
        mime_type=upload.content_type or "",
    )


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/api/analyze")
async def analyze(
    request: Request,
    file: UploadFile | None = File(default=None),
    crossFiles: list[UploadFile] | None = File(default=None),  # noqa: N803
    targetLanguage: str = Form(default=""),  # noqa: N803
    outputs: list[str] | None = Form(default=None),
) -> JSONResponse:
    """
    Analyze an uploaded PDF/DOCX and return the model's JSON result.

    Returns:
        The decoded AnalysisResult. Cross files that contributed no text are
        listed by 1-based position in the X-Skipped-Cross-Files header.
    """
    orchestrator: AnalysisOrchestrator = request.app.state.orchestrator
    analysis_request = AnalysisRequest(
        main_file=await _read_upload(file) if file is not None else None,
        target_language=targetLanguage,
        outputs=outputs or [],
        cross_files=[await _read_upload(upload) for upload in crossFiles or []],
    )

    try:
        outcome = await run_in_threadpool(orchestrator.handle, analysis_request)
    except (AnalysisError, ExtractionError, LlmError):
        raise
    except Exception as exc:
        Log.exception(f"Unexpected error while analyzing: {exc}")
        return error_response(500, str(exc) or "Server error")

    headers = {}
    if outcome.skipped_cross_files:
        headers[SKIPPED_CROSS_FILES_HEADER] = ",".join(
            str(skipped.position) for skipped in outcome.skipped_cross_files
        )
    return JSONResponse(content=outcome.result, headers=headers)


def _attachment(export: ExportFile) -> Response:
    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


@router.post("/api/export/translation")
async def export_translation_file(result: Any = Body(default=None)) -> Response:
    return _attachment(export_translation(build_result_view(result)))


@router.post("/api/export/todos")
async def export_todos_file(result: Any = Body(default=None)) -> Response:
    return _attachment(export_todos(build_result_view(result)))


@router.post("/api/export/template")
async def export_template_file(result: Any = Body(default=None)) -> Response:
    return _attachment(export_template(build_result_view(result)))
