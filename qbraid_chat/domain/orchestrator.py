"""Orchestrator — routes UI messages and runs the two-stage pipeline.

sendMessage: planning call -> parse plan -> dispatch -> format -> narration
call -> answer. Every stage runs under the request's ErrorRecoveryController,
so a rejected credential retries only the stage that failed.
"""

import sys
from datetime import datetime
from typing import Optional

from qbraid_chat.config import DEFAULT_MODEL
from qbraid_chat.domain.dispatcher import ActionDispatcher
from qbraid_chat.domain.formatter import ResponseFormatter
from qbraid_chat.domain.models import (
    ActionKind,
    ActionOutcome,
    ApiError,
    Plan,
    Success,
    TransportError,
)
from qbraid_chat.domain.plan_parser import parse_plan
from qbraid_chat.domain.prompts import build_planning_prompt
from qbraid_chat.domain.recovery import ErrorRecoveryController
from qbraid_chat.ports.inbound import FETCH_MODELS, SEND_MESSAGE, IncomingMessage
from qbraid_chat.ports.outbound import CredentialPort, LLMPort, QbraidPort, UIPort

API_KEY_MISSING = "API key not found. Please configure the qBraid API key."


def _log(msg: str):
    print(f"[{datetime.now().isoformat()}] {msg}", file=sys.stderr)


class Orchestrator:
    """Core request handler. No web framework imports, testable with mock ports."""

    def __init__(
        self,
        llm: LLMPort,
        api: QbraidPort,
        credentials: CredentialPort,
        ui: UIPort,
        default_model: str = DEFAULT_MODEL,
        formatter: Optional[ResponseFormatter] = None,
    ):
        self.llm = llm
        self.credentials = credentials
        self.ui = ui
        self.default_model = default_model
        self.dispatcher = ActionDispatcher(api)
        self.formatter = formatter or ResponseFormatter()

    async def handle_message(self, msg: IncomingMessage):
        """Entry point for one inbound UI message. Never raises."""
        try:
            if msg.type == FETCH_MODELS:
                await self.fetch_models()
            elif msg.type == SEND_MESSAGE:
                await self.send_message(msg.content, msg.model)
            else:
                _log(f"Unhandled message type: {msg.type}")
                await self._error(f"Unhandled message type: {msg.type}")
        except Exception as e:
            _log(f"Error handling message: {e!r}")
            await self._error(f"An unexpected error occurred: {e}")

    # -- Stages --

    async def plan(self, user_text: str, model: str, api_key: str) -> Plan:
        """First model call: ask for a plan and parse it."""
        reply = await self.llm.complete(api_key, model, build_planning_prompt(user_text))
        _log(f"LLM planning reply: {reply}")
        return parse_plan(reply)

    async def narrate(self, prompt: str, model: str, api_key: str) -> str:
        """Second model call: turn the formatted result into prose."""
        answer = await self.llm.complete(api_key, model, prompt)
        _log(f"Final answer from LLM: {answer}")
        return answer

    # -- Handlers --

    async def fetch_models(self):
        """Run getModels directly, without a planning call."""
        api_key = await self.credentials.get()
        if not api_key:
            await self._error(API_KEY_MISSING)
            return

        recovery = ErrorRecoveryController(self.credentials, api_key)
        plan = Plan(action=ActionKind.GET_MODELS)
        outcome = await recovery.run(
            lambda key: self.dispatcher.dispatch(plan, key), "fetchModels"
        )
        if not isinstance(outcome, Success):
            await self._error(outcome.payload["error"])
            return

        models = [m.to_dict() for m in outcome.payload]
        _log(f"Fetched models: {', '.join(m['model'] for m in models)}")
        await self.ui.post({"type": "clearError"})
        await self.ui.post({"type": "models", "models": models})

    async def send_message(self, content: str, model: Optional[str] = None):
        api_key = await self.credentials.get()
        if not api_key:
            await self._error(API_KEY_MISSING)
            return

        model = model or self.default_model
        _log(f"Received user message: {content} using model: {model}")
        await self.ui.post({"type": "typing"})

        recovery = ErrorRecoveryController(self.credentials, api_key)
        try:
            plan = await recovery.run(
                lambda key: self.plan(content, model, key), "planning"
            )
            outcome: ActionOutcome = await recovery.run(
                lambda key: self.dispatcher.dispatch(plan, key), "dispatch"
            )
            if isinstance(outcome, TransportError):
                # Validation failures get narrated, transport failures are terminal
                await self._error(outcome.detail)
                return
            prompt = self.formatter.format(content, plan.action, outcome)
            answer = await recovery.run(
                lambda key: self.narrate(prompt, model, key), "narration"
            )
        except ApiError as e:
            _log(f"Error handling send message: {e}")
            await self._error(str(e))
            return

        if recovery.retries:
            _log(f"Request completed after {recovery.retries} credential refresh(es)")
        await self.ui.post({"type": "clearError"})
        await self.ui.post({"type": "answer", "content": answer})

    async def _error(self, text: str):
        await self.ui.post({"type": "clearError"})
        await self.ui.post({"type": "error", "content": text})
