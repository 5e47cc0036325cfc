"""Storage adapters."""

from qbraid_chat.adapters.storage.credential_store import CredentialStore

__all__ = ["CredentialStore"]
