from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from doc_analyzer.analysis.exceptions import AnalysisError, NonJsonResponseError
from doc_analyzer.extraction.exceptions import ExtractionError
from doc_analyzer.llm.exceptions import LlmError
from doc_analyzer.logging.logger import Log
from doc_analyzer.presentation.export import NothingToExportError


def error_response(status_code: int, message: str, **extra: object) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


async def handle_analysis_error(request: Request, exc: AnalysisError) -> JSONResponse:
    if isinstance(exc, NonJsonResponseError):
        return error_response(exc.status_code, str(exc), details=exc.details)
    if exc.status_code >= 500:
        Log.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        Log.warning(f"{request.method} {request.url.path} rejected: {exc}")
    return error_response(exc.status_code, str(exc))


async def handle_extraction_error(request: Request, exc: Exception) -> JSONResponse:
    Log.warning(f"{request.method} {request.url.path} rejected: {exc}")
    return error_response(400, str(exc))


async def handle_llm_error(request: Request, exc: Exception) -> JSONResponse:
    Log.error(f"{request.method} {request.url.path} upstream failure: {exc}")
    return error_response(500, str(exc) or "LLM provider error")


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg', 'invalid value')}")
    message = ("Invalid request: " + "; ".join(problems)) if problems else "Invalid request"
    Log.warning(f"{request.method} {request.url.path} rejected: {message}")
    return error_response(400, message)


async def handle_nothing_to_export(request: Request, exc: Exception) -> JSONResponse:
    return error_response(400, str(exc))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AnalysisError, handle_analysis_error)
    app.add_exception_handler(ExtractionError, handle_extraction_error)
    app.add_exception_handler(LlmError, handle_llm_error)
    app.add_exception_handler(NothingToExportError, handle_nothing_to_export)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
