"""ResponseFormatter — turns an action outcome into the narration prompt.

Three strategies, picked from the originating action and outcome:

1. chat passthrough: a successful sendChat reply is embedded verbatim
2. model catalog: a successful getModels result is rendered per model
3. generic outline: everything else, including failures, is rendered as a
   nested HTML list with every string escaped

No network access happens here.
"""

import html
from dataclasses import asdict, is_dataclass
from typing import Any, List

from qbraid_chat.domain.models import ActionKind, ActionOutcome, ChatModel, Success
from qbraid_chat.domain.prompts import FALLBACK_RULES, LISTING_RULES, MODEL_EXAMPLE, STYLE_RULES


def escape_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return html.escape(value, quote=True)
    return str(value)


def _to_plain(obj: Any) -> Any:
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    return obj


def render_outline(obj: Any) -> str:
    """Render nested dicts/lists as an HTML outline: key -> value."""
    obj = _to_plain(obj)
    if isinstance(obj, dict):
        items = obj.items()
    elif isinstance(obj, (list, tuple)):
        items = ((str(i), v) for i, v in enumerate(obj))
    else:
        return escape_value(obj)

    parts = ["<ul>"]
    for key, value in items:
        parts.append(f"<li><strong>{escape_value(str(key))}:</strong> ")
        parts.append(render_outline(value))
        parts.append("</li>")
    parts.append("</ul>")
    return "".join(parts)


def render_models(models: List[ChatModel]) -> str:
    blocks = []
    for m in models:
        m = m if isinstance(m, ChatModel) else ChatModel.from_dict(m)
        blocks.append(
            f"<strong>{escape_value(m.model)}</strong>\n"
            "<ul>\n"
            f"  <li>Description: {escape_value(m.description)}</li>\n"
            f"  <li>Pricing: {m.pricing.input} input tokens, {m.pricing.output} output tokens"
            f" ({escape_value(m.pricing.units)})</li>\n"
            "</ul>\n"
        )
    return "\n".join(blocks)


class ResponseFormatter:
    """Builds the second-stage prompt for the narration model call."""

    def format(self, user_prompt: str, action: ActionKind, outcome: ActionOutcome) -> str:
        header = (
            f'You are a helpful assistant. The user asked: "{user_prompt}".\n'
            f"We performed the action: {action.value}.\n"
            "Here is the raw API result:\n"
        )

        if isinstance(outcome, Success) and action is ActionKind.SEND_CHAT:
            return header + f"{outcome.payload}\n" + STYLE_RULES

        if isinstance(outcome, Success) and action is ActionKind.GET_MODELS:
            return header + render_models(outcome.payload) + MODEL_EXAMPLE + STYLE_RULES

        body = render_outline(outcome.payload)
        prompt = header + body + "\n" + STYLE_RULES
        if isinstance(outcome, Success):
            return prompt + LISTING_RULES
        return prompt + FALLBACK_RULES

