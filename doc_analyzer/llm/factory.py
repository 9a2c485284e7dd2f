from typing import ClassVar

from doc_analyzer.config.settings import Settings
from doc_analyzer.llm.client_base import BaseLlmClient
from doc_analyzer.llm.example_client_adapter import ExampleClientAdapter
from doc_analyzer.llm.gateway import LlmGateway
from doc_analyzer.llm.openai_client_adapter import OpenAIClientAdapter


class LlmClientFactory:
    """Creates the LLM gateway for the configured provider."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "anthropic": "https://api.anthropic.com/v1/",
        "openrouter": "https://openrouter.ai/api/v1",
        "ollama": "http://localhost:11434/v1",
    }

    # Providers that run locally and accept any key.
    KEYLESS_PROVIDERS: ClassVar[frozenset[str]] = frozenset({"example", "ollama"})

    CREDENTIAL_NAMES: ClassVar[dict[str, str]] = {
        "anthropic": "ANTHROPIC_API_KEY",
        "openai": "OPENAI_API_KEY",
        "openai_compatible": "OPENAI_COMPATIBLE_API_KEY",
        "openrouter": "OPENROUTER_API_KEY",
    }

    @classmethod
    def create(cls, settings: Settings) -> LlmGateway:
        """Create a configured gateway from application settings.

        A missing API key does not fail here; the gateway reports it per request
        so the rest of the service (health, static assets) stays available.
        """
        provider = settings.llm_provider.lower()
        api_key = cls._resolve_api_key(provider, settings)
        missing = ""
        if not api_key and provider not in cls.KEYLESS_PROVIDERS:
            missing = cls.CREDENTIAL_NAMES.get(provider, "API key")
        return LlmGateway(
            client=cls._create_client(provider, settings, api_key),
            model=cls._resolve_model_name(provider, settings),
            max_tokens=settings.llm_max_tokens,
            provider=provider,
            missing_credential=missing,
        )

    @classmethod
    def _create_client(cls, provider: str, settings: Settings, api_key: str) -> BaseLlmClient:
        if provider == "example":
            return ExampleClientAdapter()
        return OpenAIClientAdapter(
            # The SDK refuses to build without a key; the gateway reports it instead.
            api_key=api_key or "unset",
            timeout_seconds=settings.llm_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "openai_compatible_base_url is required for llm_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown LLM provider '{provider}'. Choose from: {supported}")

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "anthropic": settings.anthropic_api_key,
            "openai": settings.openai_api_key,
            "openai_compatible": settings.openai_compatible_api_key,
            "openrouter": settings.openrouter_api_key,
        }
        return (key_map.get(provider) or "").strip()

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "example": "example",
            "anthropic": settings.claude_model,
            "openai": settings.openai_model_name,
            "openai_compatible": settings.openai_compatible_model_name,
            "openrouter": settings.openrouter_model_name,
            "ollama": settings.ollama_model_name,
        }
        return key_map.get(provider, "") or ""
