import uvicorn

from doc_analyzer.api.app import create_app
from doc_analyzer.config.settings import Settings
from doc_analyzer.logging.logger import Log


def main() -> None:
    """Entry point: load settings -> configure logging -> build app -> serve."""
    settings = Settings()
    Log.configure(settings.log_level)
    app = create_app(settings)
    Log.info(
        f"Starting document analyzer on {settings.host}:{settings.port} "
        f"(provider={settings.llm_provider}, env={settings.app_env})"
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
