import httpx
import openai

from doc_analyzer.llm.client_base import BaseLlmClient
from doc_analyzer.llm.exceptions import ProviderError, ProviderUnavailableError


class OpenAIClientAdapter(BaseLlmClient):
    """Completion client built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        max_tokens: int,
        user_prompt: str,
        system_prompt: str = "",
    ) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})

        try:
            response = self._client.chat.completions.create(
                model=model,
                max_tokens=max_tokens,
                messages=messages,
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ProviderUnavailableError(f"LLM provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ProviderError(f"LLM provider API error: {exc}") from exc

        if not response.choices:
            raise ProviderError("LLM returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise ProviderError("LLM returned empty response")
        return content
