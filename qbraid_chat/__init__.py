"""qBraid Chat — natural-language front end for the qBraid job service."""

from qbraid_chat.config import CONFIG, DEFAULT_MODEL, DEFAULT_CHAT_MODEL, AppConfig, __version__
from qbraid_chat.domain.models import ActionKind, ApiError, AuthenticationError, Plan
from qbraid_chat.domain.orchestrator import Orchestrator
from qbraid_chat.adapters.qbraid.client import QbraidClient
from qbraid_chat.adapters.llm.qbraid_llm import QbraidLLMAdapter

__all__ = [
    "CONFIG",
    "DEFAULT_MODEL",
    "DEFAULT_CHAT_MODEL",
    "AppConfig",
    "__version__",
    "ActionKind",
    "ApiError",
    "AuthenticationError",
    "Plan",
    "Orchestrator",
    "QbraidClient",
    "QbraidLLMAdapter",
]
