"""
FastAPI application factory.
"""
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from doc_analyzer.analysis.orchestrator import AnalysisOrchestrator, build_orchestrator
from doc_analyzer.api.errors import register_error_handlers
from doc_analyzer.api.routes import SKIPPED_CROSS_FILES_HEADER, router
from doc_analyzer.config.settings import Settings
from doc_analyzer.logging.logger import Log


def create_app(
    settings: Settings,
    orchestrator: AnalysisOrchestrator | None = None,
) -> FastAPI:
    app = FastAPI(title="Document Analyzer")
    app.state.settings = settings
    if orchestrator is None:
        orchestrator = build_orchestrator(settings)
    app.state.orchestrator = orchestrator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.allowed_origin],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=[SKIPPED_CROSS_FILES_HEADER],
    )
    register_error_handlers(app)
    app.include_router(router)

    # Mounted last so API routes take precedence over static files.
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
        Log.info(f"Serving static assets from {static_dir.resolve()}")
    return app
