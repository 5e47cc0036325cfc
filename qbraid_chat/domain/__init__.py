"""Domain layer — pure Python, no framework dependencies."""

from qbraid_chat.domain.models import (
    ActionKind,
    ActionOutcome,
    ApiError,
    AuthenticationError,
    ChatModel,
    FailureKind,
    Plan,
    PlanValidationError,
    Success,
    TransportError,
    ValidationFailure,
)
from qbraid_chat.domain.plan_parser import parse_plan
from qbraid_chat.domain.catalog import ACTION_CATALOG
from qbraid_chat.domain.dispatcher import ActionDispatcher
from qbraid_chat.domain.formatter import ResponseFormatter
from qbraid_chat.domain.recovery import ErrorRecoveryController, RecoveryState
from qbraid_chat.domain.orchestrator import Orchestrator

__all__ = [
    "ActionKind",
    "ActionOutcome",
    "ApiError",
    "AuthenticationError",
    "ChatModel",
    "FailureKind",
    "Plan",
    "PlanValidationError",
    "Success",
    "TransportError",
    "ValidationFailure",
    "parse_plan",
    "ACTION_CATALOG",
    "ActionDispatcher",
    "ResponseFormatter",
    "ErrorRecoveryController",
    "RecoveryState",
    "Orchestrator",
]
