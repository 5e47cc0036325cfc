"""ChatSession: one connected chat page, created on connect, closed on disconnect."""

import asyncio
import sys
from typing import Any, Dict, Optional

from qbraid_chat.adapters.credentials import CredentialManager
from qbraid_chat.adapters.storage.credential_store import CredentialStore
from qbraid_chat.domain.orchestrator import Orchestrator
from qbraid_chat.ports.inbound import FETCH_MODELS, SEND_MESSAGE, IncomingMessage
from qbraid_chat.ports.outbound import LLMPort, QbraidPort, UIPort

API_KEY = "apiKey"
API_KEY_DISMISSED = "apiKeyDismissed"
API_KEY_PROMPT = "apiKeyPrompt"

REQUEST_IN_PROGRESS = "A request is already in progress."


def _log(msg: str):
    print(msg, file=sys.stderr)


class ChatSession:
    """Per-connection state: orchestrator, in-flight request, pending key prompt.

    At most one fetchModels/sendMessage runs at a time; a second one while
    the first is still running is rejected with an error message.
    """

    def __init__(
        self,
        ui: UIPort,
        llm: LLMPort,
        api: QbraidPort,
        store: CredentialStore,
        default_model: str,
    ):
        self.ui = ui
        self.credentials = CredentialManager(store, prompter=self.prompt_for_api_key)
        self.orchestrator = Orchestrator(
            llm, api, self.credentials, ui, default_model=default_model
        )
        self.closed = False
        self._request_task: Optional[asyncio.Task] = None
        self._pending_key: Optional[asyncio.Future] = None

    @property
    def busy(self) -> bool:
        return self._request_task is not None and not self._request_task.done()

    async def receive(self, data: Dict[str, Any]):
        """Handle one JSON message from the page."""
        msg_type = data.get("type")
        if msg_type == API_KEY:
            self._resolve_prompt(data.get("apiKey"))
            return
        if msg_type == API_KEY_DISMISSED:
            self._resolve_prompt(None)
            return

        msg = IncomingMessage.from_dict(data)
        if msg.type not in (FETCH_MODELS, SEND_MESSAGE):
            await self.orchestrator.handle_message(msg)
            return
        if self.busy:
            _log(f"Rejected {msg.type}: request in flight")
            await self.ui.post({"type": "clearError"})
            await self.ui.post({"type": "error", "content": REQUEST_IN_PROGRESS})
            return
        # Runs as a task so key replies can still be received meanwhile
        self._request_task = asyncio.create_task(self.orchestrator.handle_message(msg))

    async def wait_idle(self):
        """Wait for the in-flight request, if any."""
        if self._request_task is not None:
            await asyncio.wait([self._request_task])

    async def prompt_for_api_key(self, message: str) -> Optional[str]:
        """Ask the page for an API key; None when dismissed or disconnected."""
        if self.closed:
            return None
        self._pending_key = asyncio.get_running_loop().create_future()
        try:
            await self.ui.post({"type": API_KEY_PROMPT, "content": message})
            return await self._pending_key
        finally:
            self._pending_key = None

    def _resolve_prompt(self, value: Any):
        if self._pending_key is None or self._pending_key.done():
            _log("Ignoring API key reply: no prompt pending")
            return
        self._pending_key.set_result(value if isinstance(value, str) else None)

    async def close(self):
        """Dismiss any pending prompt and cancel the in-flight request."""
        self.closed = True
        if self._pending_key is not None and not self._pending_key.done():
            self._pending_key.set_result(None)
        if self.busy:
            self._request_task.cancel()
            await asyncio.wait([self._request_task])
        task = self._request_task
        if task is not None and task.done() and not task.cancelled():
            error = task.exception()
            if error is not None:
                _log(f"Request ended with an error after disconnect: {error!r}")
