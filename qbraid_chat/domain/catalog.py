"""Action catalog — supported actions, their validators and executors.

Each entry binds an ActionKind to:
- a validator that checks the plan's parameters and returns the cleaned
  arguments, raising PlanValidationError on missing or contradictory input
- an executor that makes exactly one call into the QbraidPort
"""

import sys
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict

from qbraid_chat.config import DEFAULT_CHAT_MODEL
from qbraid_chat.domain.models import ActionKind, PlanValidationError
from qbraid_chat.ports.outbound import QbraidPort

DEVICE_FILTERS = ("provider", "type", "status", "isAvailable")

Validator = Callable[[Dict[str, Any]], Dict[str, Any]]
Executor = Callable[[QbraidPort, str, Dict[str, Any]], Awaitable[Any]]


def _log(msg: str):
    print(msg, file=sys.stderr)


@dataclass(frozen=True)
class ActionSpec:
    kind: ActionKind
    description: str
    validate: Validator
    execute: Executor


def _present(params: Dict[str, Any], key: str) -> bool:
    value = params.get(key)
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def _require(params: Dict[str, Any], key: str, action: ActionKind) -> Any:
    if not _present(params, key):
        raise PlanValidationError(f"Invalid {action.value} request: missing {key}.")
    return params[key]


def _require_id(params: Dict[str, Any], key: str, action: ActionKind) -> str:
    value = _require(params, key, action)
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise PlanValidationError(f"Invalid {action.value} request: {key} must be a string.")
    return str(value).strip()


def _parse_shots(value: Any) -> int:
    error = PlanValidationError("Invalid createJob request: shots must be a positive integer.")
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise error
    try:
        shots = int(value)
    except (TypeError, ValueError):
        raise error
    if shots <= 0:
        raise error
    return shots


# ── Validators ──────────────────────────────────────


def validate_create_job(params: Dict[str, Any]) -> Dict[str, Any]:
    device_id = _require_id(params, "qbraidDeviceId", ActionKind.CREATE_JOB)
    shots = _parse_shots(_require(params, "shots", ActionKind.CREATE_JOB))
    has_bitcode = _present(params, "bitcode")
    has_qasm = _present(params, "openQasm")
    if has_bitcode and has_qasm:
        raise PlanValidationError(
            "Invalid createJob request: provide either bitcode or openQasm, not both."
        )
    if not has_bitcode and not has_qasm:
        raise PlanValidationError(
            "Invalid createJob request: missing code (bitcode or openQasm)."
        )
    code = params["bitcode"] if has_bitcode else params["openQasm"]
    if not isinstance(code, str):
        raise PlanValidationError(
            "Invalid createJob request: bitcode/openQasm must be a string."
        )
    return {
        "device_id": device_id,
        "shots": shots,
        "bitcode": params["bitcode"] if has_bitcode else None,
        "open_qasm": params["openQasm"] if has_qasm else None,
    }


def validate_job_id(action: ActionKind) -> Validator:
    def _validate(params: Dict[str, Any]) -> Dict[str, Any]:
        return {"job_id": _require_id(params, "jobId", action)}
    return _validate


def validate_no_params(params: Dict[str, Any]) -> Dict[str, Any]:
    return {}


def validate_get_devices(params: Dict[str, Any]) -> Dict[str, Any]:
    """Merge flat and nested filters, dropping keys outside the allow-list."""
    candidates = {k: v for k, v in params.items() if k != "filters"}
    nested = params.get("filters")
    if isinstance(nested, dict):
        candidates.update(nested)

    filters: Dict[str, str] = {}
    for key, value in candidates.items():
        if key not in DEVICE_FILTERS:
            _log(f"[catalog] ignoring invalid device filter: {key}")
            continue
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        filters[key] = str(value)
    return {"filters": filters}


def validate_send_chat(params: Dict[str, Any]) -> Dict[str, Any]:
    prompt = _require(params, "prompt", ActionKind.SEND_CHAT)
    model = params.get("model")
    stream = params.get("stream")
    return {
        "prompt": str(prompt),
        "model": model if isinstance(model, str) and model.strip() else DEFAULT_CHAT_MODEL,
        "stream": stream if isinstance(stream, bool) else False,
    }


# ── Executors ──────────────────────────────────────


async def _create_job(api: QbraidPort, api_key: str, args: Dict[str, Any]):
    return await api.create_job(
        api_key, args["device_id"], args["shots"], args["bitcode"], args["open_qasm"]
    )


async def _list_jobs(api: QbraidPort, api_key: str, args: Dict[str, Any]):
    return await api.list_jobs(api_key)


async def _cancel_job(api: QbraidPort, api_key: str, args: Dict[str, Any]):
    return await api.cancel_job(api_key, args["job_id"])


async def _delete_job(api: QbraidPort, api_key: str, args: Dict[str, Any]):
    return await api.delete_job(api_key, args["job_id"])


async def _get_devices(api: QbraidPort, api_key: str, args: Dict[str, Any]):
    return await api.get_devices(api_key, args["filters"])


async def _send_chat(api: QbraidPort, api_key: str, args: Dict[str, Any]):
    return await api.send_chat(api_key, args["prompt"], args["model"], args["stream"])


async def _get_models(api: QbraidPort, api_key: str, args: Dict[str, Any]):
    return await api.fetch_models(api_key)


ACTION_CATALOG: Dict[ActionKind, ActionSpec] = {
    spec.kind: spec
    for spec in (
        ActionSpec(
            ActionKind.CREATE_JOB,
            'requires "qbraidDeviceId", "shots", and either "bitcode" or "openQasm"',
            validate_create_job,
            _create_job,
        ),
        ActionSpec(
            ActionKind.LIST_JOBS,
            "no parameters needed",
            validate_no_params,
            _list_jobs,
        ),
        ActionSpec(
            ActionKind.CANCEL_JOB,
            'needs "jobId"',
            validate_job_id(ActionKind.CANCEL_JOB),
            _cancel_job,
        ),
        ActionSpec(
            ActionKind.DELETE_JOB,
            'needs "jobId"',
            validate_job_id(ActionKind.DELETE_JOB),
            _delete_job,
        ),
        ActionSpec(
            ActionKind.GET_DEVICES,
            'can include optional filters like "provider", "type", "status", "isAvailable"',
            validate_get_devices,
            _get_devices,
        ),
        ActionSpec(
            ActionKind.SEND_CHAT,
            f'requires "prompt", optional "model" (default: "{DEFAULT_CHAT_MODEL}"), '
            'and "stream" (boolean, default: false)',
            validate_send_chat,
            _send_chat,
        ),
        ActionSpec(
            ActionKind.GET_MODELS,
            "no parameters needed",
            validate_no_params,
            _get_models,
        ),
    )
}


def describe_actions() -> str:
    """One line per action, used in the planning prompt."""
    return "\n".join(
        f'- "{spec.kind.value}": {spec.description}' for spec in ACTION_CATALOG.values()
    )
