"""Plan extraction from the planning model's reply.

Pure Python, no framework dependencies.
"""

import json
import re
import sys

from qbraid_chat.domain.models import ActionKind, Plan

# Fenced plan block: ```json ... ```
PLAN_RE = re.compile(r"```json([\s\S]*?)```")


def _log(msg: str):
    print(msg, file=sys.stderr)


def extract_plan_text(text: str):
    """Return the body of the first ```json block, or None."""
    if not isinstance(text, str):
        return None
    match = PLAN_RE.search(text)
    if not match:
        return None
    return match.group(1).strip()


def parse_plan(text: str) -> Plan:
    """Parse a planning reply into a Plan.

    A missing block, malformed JSON or a non-object payload all degrade to
    the no-op plan. The degradation is logged so a formatting slip by the
    model can be told apart from "no action requested".
    """
    plan_text = extract_plan_text(text)
    if plan_text is None:
        _log("[plan] no ```json block in planning reply, using no-op plan")
        return Plan()

    _log(f"[plan] parsed action plan from LLM: {plan_text}")
    try:
        data = json.loads(plan_text)
    except ValueError as e:
        _log(f"[plan] failed to parse action plan JSON: {e}")
        return Plan()

    if not isinstance(data, dict):
        _log(f"[plan] plan is {type(data).__name__}, expected an object")
        return Plan()

    params = dict(data)
    raw_action = params.pop("action", None)
    action = ActionKind.parse(raw_action)
    if action is ActionKind.NONE and raw_action not in (None, ActionKind.NONE.value):
        _log(f"[plan] unknown action {raw_action!r}")
    return Plan(
        action=action,
        params=params,
        raw_action=raw_action if isinstance(raw_action, str) else None,
    )
