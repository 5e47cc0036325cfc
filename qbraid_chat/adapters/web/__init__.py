"""Web adapter — FastAPI chat page and websocket session."""

from qbraid_chat.adapters.web.server import create_app
from qbraid_chat.adapters.web.session import ChatSession

__all__ = ["create_app", "ChatSession"]
