"""Outbound ports — interfaces for external system adapters."""

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from qbraid_chat.domain.models import ChatModel


@runtime_checkable
class LLMPort(Protocol):
    """Interface for the language model backend."""

    async def complete(self, api_key: str, model: str, prompt: str) -> str: ...


@runtime_checkable
class QbraidPort(Protocol):
    """Transport collaborator: one coroutine per action.

    Implementations raise AuthenticationError when the credential is
    rejected and ApiError for any other transport failure.
    """

    async def create_job(
        self,
        api_key: str,
        device_id: str,
        shots: int,
        bitcode: Optional[str] = None,
        open_qasm: Optional[str] = None,
    ) -> Dict[str, Any]: ...

    async def list_jobs(self, api_key: str) -> List[Dict[str, Any]]: ...

    async def cancel_job(self, api_key: str, job_id: str) -> Dict[str, Any]: ...

    async def delete_job(self, api_key: str, job_id: str) -> Dict[str, Any]: ...

    async def get_devices(
        self, api_key: str, filters: Optional[Dict[str, str]] = None
    ) -> List[Dict[str, Any]]: ...

    async def send_chat(
        self, api_key: str, prompt: str, model: str, stream: bool = False
    ) -> str: ...

    async def fetch_models(self, api_key: str) -> List["ChatModel"]: ...


@runtime_checkable
class CredentialPort(Protocol):
    """Interface for credential retrieval and interactive refresh."""

    async def get(self) -> Optional[str]: ...

    async def refresh(self) -> Optional[str]: ...


@runtime_checkable
class UIPort(Protocol):
    """Interface for posting messages back to the chat UI."""

    async def post(self, message: Dict[str, Any]) -> None: ...
