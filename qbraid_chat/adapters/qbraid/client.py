"""qBraid REST client using aiohttp — implements QbraidPort."""

import asyncio
import json
import re
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

import aiohttp

from qbraid_chat.config import CONFIG, ApiConfig
from qbraid_chat.domain.catalog import DEVICE_FILTERS
from qbraid_chat.domain.models import ApiError, AuthenticationError, ChatModel

INVALID_API_KEY = "Invalid API key. Please update your qBraid API key."
INVALID_FORMAT = "Invalid response format"

QUBIT_RE = re.compile(r"qubit\[(\d+)\]")

JOB_FIELDS = ("_id", "qbraidJobId", "status", "provider")


def _log(msg: str):
    print(msg, file=sys.stderr)


def is_quantum_job(data: Any) -> bool:
    return isinstance(data, dict) and all(k in data for k in JOB_FIELDS)


def is_quantum_device(data: Any) -> bool:
    return (
        isinstance(data, dict)
        and isinstance(data.get("name"), str)
        and isinstance(data.get("provider"), str)
        and "deviceDescription" in data
        and (data["deviceDescription"] is None or isinstance(data["deviceDescription"], str))
    )


def count_qubits(source: str) -> int:
    """Qubit count from the first `qubit[N]` declaration, 1 when absent."""
    match = QUBIT_RE.search(source)
    return int(match.group(1)) if match else 1


class QbraidClient:
    """Async qBraid API client: chat, chat models, quantum jobs and devices.

    Every call raises AuthenticationError on HTTP 401 and ApiError on any
    other non-2xx status, connection failure or malformed body.
    """

    def __init__(self, config: Optional[ApiConfig] = None):
        self.config = config or ApiConfig(
            base_url=CONFIG["api_base_url"],
            device_limit=CONFIG["device_limit"],
            request_timeout=CONFIG["request_timeout"],
        )

    async def _request(
        self,
        method: str,
        url: str,
        api_key: str,
        operation: str,
        **kwargs,
    ) -> Any:
        headers = {"api-key": api_key}
        if "json" in kwargs:
            headers["Content-Type"] = "application/json"
        timeout = aiohttp.ClientTimeout(total=self.config.request_timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.request(method, url, headers=headers, **kwargs) as resp:
                    if resp.status == 401:
                        raise AuthenticationError(INVALID_API_KEY)
                    if not 200 <= resp.status < 300:
                        body = await resp.text()
                        raise ApiError(f"{operation} failed: {resp.status} - {body}")
                    text = await resp.text()
        except asyncio.TimeoutError:
            raise ApiError(f"{operation} failed: timeout ({self.config.request_timeout}s)")
        except aiohttp.ClientError as e:
            raise ApiError(f"{operation} failed: {e}")

        try:
            return json.loads(text)
        except ValueError:
            raise ApiError(INVALID_FORMAT)

    # -- Chat --

    async def call_llm(self, api_key: str, model: str, prompt: str) -> str:
        """Send a prompt to a chat model and return the reply text."""
        _log(f"[{datetime.now().isoformat()}] LLM call - model: {model}")
        data = await self._request(
            "POST",
            self.config.chat_endpoint,
            api_key,
            "callLLM",
            json={"model": model, "prompt": prompt, "stream": False},
        )
        if not isinstance(data, dict) or "content" not in data:
            raise ApiError(INVALID_FORMAT)
        reply = data["content"] or ""
        _log(f"[{datetime.now().isoformat()}] LLM reply: {len(reply)} chars")
        return reply

    async def send_chat(
        self, api_key: str, prompt: str, model: str = "gpt-4o-mini", stream: bool = False
    ) -> str:
        data = await self._request(
            "POST",
            self.config.chat_endpoint,
            api_key,
            "Send chat",
            json={"prompt": prompt, "model": model, "stream": stream},
        )
        if not isinstance(data, dict) or not isinstance(data.get("content"), str):
            raise ApiError(INVALID_FORMAT)
        return data["content"]

    async def fetch_models(self, api_key: str) -> List[ChatModel]:
        data = await self._request(
            "GET", self.config.chat_models_endpoint, api_key, "Fetch models"
        )
        if not isinstance(data, list):
            raise ApiError(INVALID_FORMAT)
        try:
            models = [ChatModel.from_dict(item) for item in data]
        except (KeyError, TypeError, AttributeError):
            raise ApiError(INVALID_FORMAT)
        _log(f"Fetch models response: {[m.model for m in models]}")
        return models

    # -- Quantum jobs --

    async def create_job(
        self,
        api_key: str,
        device_id: str,
        shots: int,
        bitcode: Optional[str] = None,
        open_qasm: Optional[str] = None,
    ) -> Dict[str, Any]:
        if bool(bitcode) == bool(open_qasm):
            raise ApiError("Provide either bitcode OR openQasm (but not both) for createJob.")

        body: Dict[str, Any] = {"qbraidDeviceId": device_id, "shots": shots, "tags": {}}
        if bitcode:
            body["bitcode"] = bitcode
            body["circuitNumQubits"] = count_qubits(bitcode)
        else:
            body["openQasm"] = open_qasm
            body["circuitNumQubits"] = count_qubits(open_qasm)

        data = await self._request(
            "POST", self.config.jobs_endpoint, api_key, "Create job", json=body
        )
        if not isinstance(data, dict):
            raise ApiError(INVALID_FORMAT)
        _log(f"Create job response: {data}")
        return data

    async def list_jobs(self, api_key: str) -> List[Dict[str, Any]]:
        data = await self._request("GET", self.config.jobs_endpoint, api_key, "List jobs")
        jobs = data.get("jobsArray") if isinstance(data, dict) else None
        if not isinstance(jobs, list) or not all(is_quantum_job(j) for j in jobs):
            raise ApiError(INVALID_FORMAT)
        return jobs

    async def cancel_job(self, api_key: str, job_id: str) -> Dict[str, Any]:
        data = await self._request(
            "PUT", f"{self.config.jobs_endpoint}/cancel/{job_id}", api_key, "Cancel job"
        )
        if not isinstance(data, dict) or not isinstance(data.get("message"), str):
            raise ApiError(INVALID_FORMAT)
        return {"message": data["message"], "jobId": job_id}

    async def delete_job(self, api_key: str, job_id: str) -> Dict[str, Any]:
        data = await self._request(
            "DELETE", f"{self.config.jobs_endpoint}/{job_id}", api_key, "Delete job"
        )
        if not isinstance(data, dict) or "data" not in data or "message" not in data:
            raise ApiError(INVALID_FORMAT)
        if not is_quantum_job(data["data"]):
            raise ApiError("Invalid job data format")
        return {"message": data["message"], "job": data["data"]}

    # -- Devices --

    async def get_devices(
        self, api_key: str, filters: Optional[Dict[str, str]] = None
    ) -> List[Dict[str, Any]]:
        params = {}
        for key, value in (filters or {}).items():
            if key in DEVICE_FILTERS:
                params[key] = str(value)
            else:
                _log(f"Ignoring invalid filter: {key}")

        data = await self._request(
            "GET", self.config.devices_endpoint, api_key, "Get devices", params=params
        )
        if not isinstance(data, list) or not all(is_quantum_device(d) for d in data):
            raise ApiError("Invalid response format from getQuantumDevices API.")
        return data[: self.config.device_limit]
