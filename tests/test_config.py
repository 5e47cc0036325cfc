"""Tests for the typed AppConfig / ApiConfig dataclasses."""

from qbraid_chat.config import CONFIG, ApiConfig, AppConfig, _int_env


class TestApiConfig:
    def test_defaults(self):
        c = ApiConfig()
        assert c.base_url == "https://api.qbraid.com/api"
        assert c.device_limit == 10
        assert c.request_timeout == 60

    def test_endpoints(self):
        c = ApiConfig(base_url="http://localhost:8080/api")
        assert c.chat_endpoint == "http://localhost:8080/api/chat"
        assert c.chat_models_endpoint == "http://localhost:8080/api/chat/models"
        assert c.jobs_endpoint == "http://localhost:8080/api/quantum-jobs"
        assert c.devices_endpoint == "http://localhost:8080/api/quantum-devices"


class TestAppConfig:
    def test_defaults(self):
        c = AppConfig()
        assert c.host == "127.0.0.1"
        assert c.port == 3000
        assert c.api_key == ""
        assert isinstance(c.api, ApiConfig)

    def test_api_not_shared(self):
        a = AppConfig()
        b = AppConfig()
        a.api.device_limit = 3
        assert b.api.device_limit == 10

    def test_from_env(self):
        c = AppConfig.from_env()
        assert c.host == CONFIG["host"]
        assert c.port == CONFIG["port"]
        assert c.default_model == CONFIG["default_model"]
        assert c.api.base_url == CONFIG["api_base_url"]
        assert c.api.device_limit == CONFIG["device_limit"]


class TestIntEnv:
    def test_unset(self, monkeypatch):
        monkeypatch.delenv("QBRAID_TEST_INT", raising=False)
        assert _int_env("QBRAID_TEST_INT", 7) == 7

    def test_valid(self, monkeypatch):
        monkeypatch.setenv("QBRAID_TEST_INT", " 42 ")
        assert _int_env("QBRAID_TEST_INT", 7) == 42

    def test_invalid_falls_back(self, monkeypatch):
        monkeypatch.setenv("QBRAID_TEST_INT", "lots")
        assert _int_env("QBRAID_TEST_INT", 7) == 7
