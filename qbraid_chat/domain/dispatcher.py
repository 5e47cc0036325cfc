"""ActionDispatcher — validates a Plan and runs its executor."""

import sys

from qbraid_chat.domain.catalog import ACTION_CATALOG
from qbraid_chat.domain.models import (
    NO_RECOGNIZED_ACTION,
    ActionOutcome,
    ApiError,
    AuthenticationError,
    FailureKind,
    Plan,
    PlanValidationError,
    Success,
    TransportError,
    ValidationFailure,
)
from qbraid_chat.ports.outbound import QbraidPort


def _log(msg: str):
    print(msg, file=sys.stderr)


class ActionDispatcher:
    """Turns a Plan into exactly one outcome.

    At most one QbraidPort call is made per dispatch: none for the no-op
    plan or a failed validation, one otherwise. Results are never cached.
    """

    def __init__(self, api: QbraidPort):
        self.api = api

    async def dispatch(self, plan: Plan, api_key: str) -> ActionOutcome:
        spec = ACTION_CATALOG.get(plan.action)
        if spec is None:
            _log("[dispatch] no recognized action")
            return ValidationFailure(NO_RECOGNIZED_ACTION)

        try:
            args = spec.validate(plan.params)
        except PlanValidationError as e:
            _log(f"[dispatch] {plan.action.value} rejected: {e}")
            return ValidationFailure(str(e))

        _log(f"[dispatch] executing {plan.action.value}")
        try:
            payload = await spec.execute(self.api, api_key, args)
        except AuthenticationError as e:
            _log(f"[dispatch] {plan.action.value} credential rejected: {e}")
            return TransportError(FailureKind.AUTH, str(e))
        except ApiError as e:
            _log(f"[dispatch] {plan.action.value} failed: {e}")
            return TransportError(FailureKind.OTHER, str(e))

        _log(f"[dispatch] {plan.action.value} completed")
        return Success(payload)
