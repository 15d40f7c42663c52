"""Chat-completion client."""

from xlagent.llm.client import CompletionClient

__all__ = ["CompletionClient"]
