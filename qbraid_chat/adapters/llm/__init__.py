"""LLM adapters."""

from qbraid_chat.adapters.llm.qbraid_llm import QbraidLLMAdapter

__all__ = ["QbraidLLMAdapter"]
