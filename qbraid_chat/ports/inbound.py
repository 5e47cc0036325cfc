"""Inbound port — UI-agnostic message representation."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

FETCH_MODELS = "fetchModels"
SEND_MESSAGE = "sendMessage"


@dataclass
class IncomingMessage:
    """Message sent by the chat UI to the core."""

    type: str
    content: str = ""
    model: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IncomingMessage":
        content = data.get("content")
        model = data.get("model")
        return cls(
            type=str(data.get("type", "")),
            content=content if isinstance(content, str) else "",
            model=model if isinstance(model, str) and model.strip() else None,
        )
