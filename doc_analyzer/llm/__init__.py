from doc_analyzer.llm.client_base import BaseLlmClient
from doc_analyzer.llm.factory import LlmClientFactory
from doc_analyzer.llm.gateway import LlmGateway

__all__ = ["BaseLlmClient", "LlmClientFactory", "LlmGateway"]
