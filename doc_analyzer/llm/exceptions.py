class LlmError(Exception):
    """Base exception for all LLM provider failures."""


class ProviderError(LlmError):
    """Raised when the provider rejects the call or returns an unusable reply."""


class ProviderUnavailableError(LlmError):
    """Raised when the provider cannot be reached (network, timeout)."""
