"""Unit tests for QbraidClient."""

import json

import aiohttp
import pytest
from unittest.mock import patch

from qbraid_chat.adapters.llm.qbraid_llm import QbraidLLMAdapter
from qbraid_chat.adapters.qbraid.client import (
    INVALID_API_KEY,
    INVALID_FORMAT,
    QbraidClient,
    count_qubits,
    is_quantum_device,
    is_quantum_job,
)
from qbraid_chat.config import ApiConfig
from qbraid_chat.domain.models import ApiError, AuthenticationError, ChatModel
from qbraid_chat.ports.outbound import LLMPort

BASE = "https://api.test/api"

JOB = {"_id": "j1", "qbraidJobId": "aws_sv1-abc", "status": "COMPLETED", "provider": "AWS"}
DEVICE = {"name": "SV1", "provider": "AWS", "deviceDescription": None, "status": "ONLINE"}


def _mock_aiohttp_session(responses):
    """Return a mock that replaces aiohttp.ClientSession.

    responses: list of (status, body) tuples, consumed in order by
    successive request() calls; a dict/list body is JSON-encoded, an
    exception instance is raised instead of responding.
    """
    requests = []

    class FakeResponse:
        def __init__(self, status, body):
            self.status = status
            self._body = body if isinstance(body, str) else json.dumps(body)

        async def text(self):
            return self._body

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

    class FakeSession:
        def __init__(self, *args, **kwargs):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

        def request(self, method, url, **kwargs):
            requests.append({"method": method, "url": url, **kwargs})
            reply = responses[len(requests) - 1]
            if isinstance(reply, Exception):
                raise reply
            return FakeResponse(*reply)

    return FakeSession, requests


@pytest.fixture
def client():
    return QbraidClient(ApiConfig(base_url=BASE, device_limit=10, request_timeout=5))


def _patch(session_cls):
    return patch("qbraid_chat.adapters.qbraid.client.aiohttp.ClientSession", session_cls)


class TestHelpers:
    def test_count_qubits(self):
        assert count_qubits("OPENQASM 3;\nqubit[4] q;\nh q[0];") == 4

    def test_count_qubits_default(self):
        assert count_qubits("OPENQASM 2.0;\nqreg q[2];") == 1

    def test_is_quantum_job(self):
        assert is_quantum_job(JOB)
        assert not is_quantum_job({"_id": "x"})
        assert not is_quantum_job("x")

    def test_is_quantum_device(self):
        assert is_quantum_device(DEVICE)
        assert is_quantum_device({**DEVICE, "deviceDescription": "state vector"})
        assert not is_quantum_device({"name": "SV1", "provider": "AWS"})
        assert not is_quantum_device({**DEVICE, "deviceDescription": 5})


class TestRequestErrors:
    @pytest.mark.asyncio
    async def test_401_raises_authentication_error(self, client):
        session, _ = _mock_aiohttp_session([(401, "unauthorized")])
        with _patch(session):
            with pytest.raises(AuthenticationError, match="Invalid API key"):
                await client.list_jobs("bad")

    @pytest.mark.asyncio
    async def test_401_message(self, client):
        session, _ = _mock_aiohttp_session([(401, "")])
        with _patch(session):
            with pytest.raises(AuthenticationError) as exc_info:
                await client.fetch_models("bad")
        assert str(exc_info.value) == INVALID_API_KEY

    @pytest.mark.asyncio
    async def test_non_2xx_includes_status_and_body(self, client):
        session, _ = _mock_aiohttp_session([(500, "server exploded")])
        with _patch(session):
            with pytest.raises(ApiError, match="List jobs failed: 500 - server exploded"):
                await client.list_jobs("key")

    @pytest.mark.asyncio
    async def test_unparseable_body(self, client):
        session, _ = _mock_aiohttp_session([(200, "<html>oops</html>")])
        with _patch(session):
            with pytest.raises(ApiError, match=INVALID_FORMAT):
                await client.list_jobs("key")

    @pytest.mark.asyncio
    async def test_connection_error(self, client):
        session, _ = _mock_aiohttp_session([aiohttp.ClientConnectionError("refused")])
        with _patch(session):
            with pytest.raises(ApiError, match="Get devices failed"):
                await client.get_devices("key")

    @pytest.mark.asyncio
    async def test_api_key_header(self, client):
        session, requests = _mock_aiohttp_session([(200, {"jobsArray": []})])
        with _patch(session):
            await client.list_jobs("secret")
        assert requests[0]["headers"]["api-key"] == "secret"


class TestChat:
    @pytest.mark.asyncio
    async def test_call_llm(self, client):
        session, requests = _mock_aiohttp_session([(200, {"content": "hello"})])
        with _patch(session):
            reply = await client.call_llm("key", "gpt-4o", "hi")
        assert reply == "hello"
        assert requests[0]["method"] == "POST"
        assert requests[0]["url"] == f"{BASE}/chat"
        assert requests[0]["json"] == {"model": "gpt-4o", "prompt": "hi", "stream": False}

    @pytest.mark.asyncio
    async def test_call_llm_without_content(self, client):
        session, _ = _mock_aiohttp_session([(200, {"text": "hello"})])
        with _patch(session):
            with pytest.raises(ApiError, match=INVALID_FORMAT):
                await client.call_llm("key", "gpt-4o", "hi")

    @pytest.mark.asyncio
    async def test_send_chat(self, client):
        session, requests = _mock_aiohttp_session([(200, {"content": "42"})])
        with _patch(session):
            reply = await client.send_chat("key", "meaning?", "gpt-4o-mini", False)
        assert reply == "42"
        assert requests[0]["json"] == {"prompt": "meaning?", "model": "gpt-4o-mini", "stream": False}

    @pytest.mark.asyncio
    async def test_fetch_models(self, client):
        body = [{
            "model": "gpt-4o",
            "description": "OpenAI",
            "pricing": {"units": "tokens", "input": 2.5, "output": 10},
        }]
        session, requests = _mock_aiohttp_session([(200, body)])
        with _patch(session):
            models = await client.fetch_models("key")
        assert requests[0]["url"] == f"{BASE}/chat/models"
        assert models == [ChatModel.from_dict(body[0])]
        assert models[0].pricing.output == 10

    @pytest.mark.asyncio
    async def test_fetch_models_not_a_list(self, client):
        session, _ = _mock_aiohttp_session([(200, {"models": []})])
        with _patch(session):
            with pytest.raises(ApiError, match=INVALID_FORMAT):
                await client.fetch_models("key")


class TestJobs:
    @pytest.mark.asyncio
    async def test_create_job_with_qasm(self, client):
        qasm = "OPENQASM 3;\nqubit[2] q;\nh q[0];"
        session, requests = _mock_aiohttp_session([(200, {"qbraidJobId": "aws_sv1-1"})])
        with _patch(session):
            result = await client.create_job("key", "aws_sv1", 100, open_qasm=qasm)
        assert result == {"qbraidJobId": "aws_sv1-1"}
        assert requests[0]["url"] == f"{BASE}/quantum-jobs"
        assert requests[0]["json"] == {
            "qbraidDeviceId": "aws_sv1",
            "shots": 100,
            "tags": {},
            "openQasm": qasm,
            "circuitNumQubits": 2,
        }

    @pytest.mark.asyncio
    async def test_create_job_with_bitcode(self, client):
        session, requests = _mock_aiohttp_session([(200, {"qbraidJobId": "q-1"})])
        with _patch(session):
            await client.create_job("key", "qir_sim", 10, bitcode="BC")
        body = requests[0]["json"]
        assert body["bitcode"] == "BC"
        assert body["circuitNumQubits"] == 1
        assert "openQasm" not in body

    @pytest.mark.asyncio
    async def test_create_job_rejects_both_encodings(self, client):
        session, requests = _mock_aiohttp_session([])
        with _patch(session):
            with pytest.raises(ApiError, match="not both"):
                await client.create_job("key", "d", 1, bitcode="b", open_qasm="q")
        assert requests == []

    @pytest.mark.asyncio
    async def test_list_jobs(self, client):
        session, requests = _mock_aiohttp_session([(200, {"jobsArray": [JOB]})])
        with _patch(session):
            jobs = await client.list_jobs("key")
        assert jobs == [JOB]
        assert requests[0]["method"] == "GET"

    @pytest.mark.asyncio
    async def test_list_jobs_malformed_entry(self, client):
        session, _ = _mock_aiohttp_session([(200, {"jobsArray": [{"_id": "x"}]})])
        with _patch(session):
            with pytest.raises(ApiError, match=INVALID_FORMAT):
                await client.list_jobs("key")

    @pytest.mark.asyncio
    async def test_cancel_job(self, client):
        session, requests = _mock_aiohttp_session([(200, {"message": "Cancel job request validated"})])
        with _patch(session):
            result = await client.cancel_job("key", "abc123")
        assert result == {"message": "Cancel job request validated", "jobId": "abc123"}
        assert requests[0]["method"] == "PUT"
        assert requests[0]["url"] == f"{BASE}/quantum-jobs/cancel/abc123"

    @pytest.mark.asyncio
    async def test_delete_job(self, client):
        session, requests = _mock_aiohttp_session([(200, {"message": "Deleted", "data": JOB})])
        with _patch(session):
            result = await client.delete_job("key", "j1")
        assert result == {"message": "Deleted", "job": JOB}
        assert requests[0]["method"] == "DELETE"
        assert requests[0]["url"] == f"{BASE}/quantum-jobs/j1"

    @pytest.mark.asyncio
    async def test_delete_job_bad_job_data(self, client):
        session, _ = _mock_aiohttp_session([(200, {"message": "Deleted", "data": {}})])
        with _patch(session):
            with pytest.raises(ApiError, match="Invalid job data format"):
                await client.delete_job("key", "j1")


class TestDevices:
    @pytest.mark.asyncio
    async def test_filters_sent_as_params(self, client):
        session, requests = _mock_aiohttp_session([(200, [DEVICE])])
        with _patch(session):
            devices = await client.get_devices("key", {"provider": "AWS", "bogus": "x"})
        assert devices == [DEVICE]
        assert requests[0]["url"] == f"{BASE}/quantum-devices"
        assert requests[0]["params"] == {"provider": "AWS"}

    @pytest.mark.asyncio
    async def test_truncated_to_device_limit(self, client):
        many = [{**DEVICE, "name": f"dev{i}"} for i in range(15)]
        session, _ = _mock_aiohttp_session([(200, many)])
        with _patch(session):
            devices = await client.get_devices("key")
        assert len(devices) == 10
        assert devices[0]["name"] == "dev0"

    @pytest.mark.asyncio
    async def test_malformed_device(self, client):
        session, _ = _mock_aiohttp_session([(200, [{"name": "x"}])])
        with _patch(session):
            with pytest.raises(ApiError, match="getQuantumDevices"):
                await client.get_devices("key")


class TestLLMAdapter:
    @pytest.mark.asyncio
    async def test_complete_goes_through_chat_endpoint(self, client):
        session, requests = _mock_aiohttp_session([(200, {"content": "plan"})])
        adapter = QbraidLLMAdapter(client)
        with _patch(session):
            assert await adapter.complete("key", "gpt-4o", "prompt") == "plan"
        assert requests[0]["url"] == f"{BASE}/chat"
        assert isinstance(adapter, LLMPort)
