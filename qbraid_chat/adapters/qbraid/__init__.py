"""qBraid transport adapter."""

from qbraid_chat.adapters.qbraid.client import QbraidClient

__all__ = ["QbraidClient"]
