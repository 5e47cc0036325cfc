"""Domain data models — pure Python dataclasses."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union


class ActionKind(str, Enum):
    """Closed set of operations a plan can request."""

    CREATE_JOB = "createJob"
    LIST_JOBS = "listJobs"
    CANCEL_JOB = "cancelJob"
    DELETE_JOB = "deleteJob"
    GET_DEVICES = "getDevices"
    SEND_CHAT = "sendChat"
    GET_MODELS = "getModels"
    NONE = "none"

    @classmethod
    def parse(cls, value: Any) -> "ActionKind":
        """Map a free-form action name to a kind; anything unknown is NONE."""
        if isinstance(value, str):
            for kind in cls:
                if kind.value == value.strip():
                    return kind
        return cls.NONE


@dataclass
class Plan:
    """Structured intent extracted from the planning model's reply."""

    action: ActionKind = ActionKind.NONE
    params: Dict[str, Any] = field(default_factory=dict)
    # Action name as written by the model, kept for logging unknown names
    raw_action: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"action": self.raw_action if self.raw_action is not None else self.action.value}
        data.update(self.params)
        return data


# ── Errors ──────────────────────────────────────


class ApiError(Exception):
    """Transport-level failure: non-success status or unparseable body."""


class AuthenticationError(ApiError):
    """The qBraid API rejected the credential."""


class PlanValidationError(ValueError):
    """A recognized action is missing or has contradictory parameters."""


# ── Outcomes ──────────────────────────────────────


class FailureKind(str, Enum):
    AUTH = "auth"
    OTHER = "other"


@dataclass
class Success:
    payload: Any


@dataclass
class ValidationFailure:
    description: str

    @property
    def payload(self) -> Dict[str, str]:
        return {"error": self.description}


@dataclass
class TransportError:
    kind: FailureKind
    detail: str

    @property
    def is_auth(self) -> bool:
        return self.kind is FailureKind.AUTH

    @property
    def payload(self) -> Dict[str, str]:
        return {"error": self.detail}


ActionOutcome = Union[Success, ValidationFailure, TransportError]

NO_RECOGNIZED_ACTION = "no recognized action"


# ── Payloads ──────────────────────────────────────


@dataclass
class ModelPricing:
    units: str
    input: float
    output: float


@dataclass
class ChatModel:
    """A language model offered by the qBraid chat service."""

    model: str
    description: str
    pricing: ModelPricing

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChatModel":
        pricing = data.get("pricing") or {}
        return cls(
            model=data["model"],
            description=data.get("description", ""),
            pricing=ModelPricing(
                units=pricing.get("units", ""),
                input=pricing.get("input", 0),
                output=pricing.get("output", 0),
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
