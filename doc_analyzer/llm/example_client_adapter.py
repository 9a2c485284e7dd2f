"""Offline completion client.

Returns a canned analysis so the service can run without provider credentials.
Implement BaseLlmClient and register the provider in LlmClientFactory to add
a real one.
"""

import json
from typing import ClassVar

from doc_analyzer.llm.client_base import BaseLlmClient


class ExampleClientAdapter(BaseLlmClient):
    """Adapter that returns a fixed, fenced JSON reply. No network calls."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "summary": "Example summary produced without calling a provider.",
        "key_points": [],
        "todos_by_department": {},
    }

    def create_chat_completion(
        self,
        *,
        model: str,
        max_tokens: int,
        user_prompt: str,
        system_prompt: str = "",
    ) -> str:
        _ = model, max_tokens, user_prompt, system_prompt
        return "```json\n" + json.dumps(self.DEFAULT_RESPONSE) + "\n```"
