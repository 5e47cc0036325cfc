"""Credential manager implementing CredentialPort on top of a store and a prompt."""

import sys
from typing import Awaitable, Callable, Optional

from qbraid_chat.adapters.storage.credential_store import CredentialStore

ENTER_KEY_PROMPT = "Enter your qBraid API Key"
UPDATE_KEY_PROMPT = "Invalid qBraid API Key. Please update your API key."

# Asks the user for a key; returns None when the prompt is dismissed
Prompter = Callable[[str], Awaitable[Optional[str]]]


def _log(msg: str):
    print(msg, file=sys.stderr)


class CredentialManager:
    """Reads the stored key and drives the interactive refresh."""

    def __init__(self, store: CredentialStore, prompter: Optional[Prompter] = None):
        self.store = store
        self.prompter = prompter

    async def _ask(self, message: str) -> Optional[str]:
        if self.prompter is None:
            return None
        value = await self.prompter(message)
        if not value or not value.strip():
            return None
        value = value.strip()
        self.store.store(value)
        return value

    async def get(self) -> Optional[str]:
        """Stored key, or ask for one when nothing is stored yet."""
        api_key = self.store.get()
        if api_key:
            return api_key
        return await self._ask(ENTER_KEY_PROMPT)

    async def refresh(self) -> Optional[str]:
        """Ask for a replacement key after the current one was rejected."""
        api_key = await self._ask(UPDATE_KEY_PROMPT)
        if api_key:
            _log("API key updated.")
        return api_key

    def clear(self):
        self.store.clear()
