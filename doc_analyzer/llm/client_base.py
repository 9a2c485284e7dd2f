from abc import ABC, abstractmethod


class BaseLlmClient(ABC):
    """Contract for provider-specific completion clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        max_tokens: int,
        user_prompt: str,
        system_prompt: str = "",
    ) -> str:
        """Return the provider's generated text for a single-turn prompt."""
