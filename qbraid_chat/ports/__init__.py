"""Port interfaces (Hexagonal Architecture)."""

from qbraid_chat.ports.inbound import IncomingMessage
from qbraid_chat.ports.outbound import CredentialPort, LLMPort, QbraidPort, UIPort

__all__ = [
    "IncomingMessage",
    "CredentialPort",
    "LLMPort",
    "QbraidPort",
    "UIPort",
]
