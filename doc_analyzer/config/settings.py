from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 3000
    allowed_origin: str = "*"
    static_dir: str = "public"

    pdf_engine: str = "pdfplumber"

    max_file_size_bytes: int = 10 * 1024 * 1024
    max_cross_files: int = 10

    llm_provider: str = "anthropic"
    llm_max_tokens: int = 8192
    llm_timeout_seconds: int = 120

    anthropic_api_key: str = ""
    claude_model: str = "claude-sonnet-4-20250514"

    openai_api_key: str = ""
    openai_model_name: str = "gpt-4.1"

    openai_compatible_base_url: str = ""
    openai_compatible_api_key: str = ""
    openai_compatible_model_name: str = ""

    openrouter_api_key: str = ""
    openrouter_model_name: str = "anthropic/claude-sonnet-4"

    ollama_model_name: str = "llama3.1"
