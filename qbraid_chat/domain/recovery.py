"""ErrorRecoveryController — one-shot credential refresh for auth failures.

States: IDLE -> AWAITING_CREDENTIAL_REFRESH -> RETRIED | ABANDONED

Only authentication failures enter the state machine. Each guarded step
is retried at most once, with the refreshed credential; a failing retry
is terminal. Everything else propagates untouched.
"""

import sys
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, TypeVar, Union

from qbraid_chat.domain.models import (
    ApiError,
    AuthenticationError,
    FailureKind,
    TransportError,
)
from qbraid_chat.ports.outbound import CredentialPort

T = TypeVar("T")

Step = Callable[[str], Awaitable[T]]


def _log(msg: str):
    print(msg, file=sys.stderr)


class RecoveryState(str, Enum):
    IDLE = "idle"
    AWAITING_CREDENTIAL_REFRESH = "awaiting_credential_refresh"
    RETRIED = "retried"
    ABANDONED = "abandoned"


def classify(failure: Union[BaseException, TransportError, Any]) -> Optional[FailureKind]:
    """Return AUTH / OTHER for a failure, None when it is not one."""
    if isinstance(failure, TransportError):
        return failure.kind
    if isinstance(failure, AuthenticationError):
        return FailureKind.AUTH
    if isinstance(failure, ApiError):
        return FailureKind.OTHER
    return None


class ErrorRecoveryController:
    """Guards the steps of one request against a rejected credential.

    Holds the request's live credential; after a successful refresh the new
    value is used for the retried step and every step after it.
    """

    def __init__(self, credentials: CredentialPort, api_key: str):
        self.credentials = credentials
        self.api_key = api_key
        self.state = RecoveryState.IDLE
        self.retries = 0

    async def run(self, step: Step, name: str = "step"):
        """Run step(api_key); on an auth failure refresh and retry once.

        A step signals auth failure either by raising AuthenticationError or
        by returning a TransportError outcome of kind AUTH. When the refresh
        is declined the original failure is raised or returned unchanged.
        """
        self.state = RecoveryState.IDLE
        failure = None
        try:
            result = await step(self.api_key)
        except AuthenticationError as e:
            failure = e
        else:
            if classify(result) is not FailureKind.AUTH:
                return result
            failure = result

        _log(f"[recovery] {name}: credential rejected, asking for a new one")
        self.state = RecoveryState.AWAITING_CREDENTIAL_REFRESH
        new_key = await self.credentials.refresh()
        if not new_key:
            self.state = RecoveryState.ABANDONED
            _log(f"[recovery] {name}: credential refresh declined")
            if isinstance(failure, BaseException):
                raise failure
            return failure

        self.state = RecoveryState.RETRIED
        self.api_key = new_key
        self.retries += 1
        _log(f"[recovery] {name}: retrying with refreshed credential")
        return await step(new_key)
