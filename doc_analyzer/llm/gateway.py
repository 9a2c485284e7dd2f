from doc_analyzer.analysis.exceptions import ConfigurationError
from doc_analyzer.llm.client_base import BaseLlmClient
from doc_analyzer.logging.logger import Log


class LlmGateway:
    """Sends one prompt to the configured provider and returns the raw reply.

    Model and output size are fixed at construction; callers only supply the
    prompt. There is no retry: provider errors propagate to the caller.
    """

    def __init__(
        self,
        *,
        client: BaseLlmClient,
        model: str,
        max_tokens: int,
        provider: str = "",
        missing_credential: str = "",
    ) -> None:
        self._client = client
        self._model = model
        self._max_tokens = max_tokens
        self._provider = provider
        self._missing_credential = missing_credential

    @property
    def model(self) -> str:
        return self._model

    def ensure_configured(self) -> None:
        """Raise ConfigurationError if the provider's credential is not set."""
        if self._missing_credential:
            raise ConfigurationError(f"{self._missing_credential} is not set")

    def complete(self, prompt: str) -> str:
        Log.info(
            f"Calling LLM provider '{self._provider}' model '{self._model}' "
            f"with {len(prompt)} prompt chars"
        )
        raw = self._client.create_chat_completion(
            model=self._model,
            max_tokens=self._max_tokens,
            user_prompt=prompt,
        )
        Log.info(f"LLM returned {len(raw)} chars")
        Log.debug(f"LLM raw response:\n{raw}")
        return raw
