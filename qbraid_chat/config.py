"""Configuration and shared settings."""

__version__ = "0.1.0"

import os
import sys
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        _stderr_print(f"Invalid {name}={raw!r}, falling back to {default}")
        return default


QBRAID_API_BASE_URL = os.getenv("QBRAID_API_BASE_URL", "https://api.qbraid.com/api").rstrip("/")

# Model used for the planning and narration calls when the UI sends none
DEFAULT_MODEL = os.getenv("QBRAID_DEFAULT_MODEL", "gpt-4o").strip() or "gpt-4o"
# Model used by the sendChat action when the plan names none
DEFAULT_CHAT_MODEL = os.getenv("QBRAID_CHAT_MODEL", "gpt-4o-mini").strip() or "gpt-4o-mini"

CONFIG = {
    "host": os.getenv("HOST", "127.0.0.1"),
    "port": _int_env("PORT", 3000),
    "api_base_url": QBRAID_API_BASE_URL,
    "api_key": os.getenv("QBRAID_API_KEY", ""),
    "credential_file": os.getenv("QBRAID_CREDENTIAL_FILE", "memory/credentials.json"),
    "default_model": DEFAULT_MODEL,
    "default_chat_model": DEFAULT_CHAT_MODEL,
    # getDevices returns at most this many devices
    "device_limit": _int_env("QBRAID_DEVICE_LIMIT", 10),
    "request_timeout": _int_env("QBRAID_REQUEST_TIMEOUT", 60),
}


# ── Typed config ──────────────────────────────────────


@dataclass
class ApiConfig:
    base_url: str = "https://api.qbraid.com/api"
    device_limit: int = 10
    request_timeout: int = 60

    @property
    def chat_endpoint(self) -> str:
        return f"{self.base_url}/chat"

    @property
    def chat_models_endpoint(self) -> str:
        return f"{self.base_url}/chat/models"

    @property
    def jobs_endpoint(self) -> str:
        return f"{self.base_url}/quantum-jobs"

    @property
    def devices_endpoint(self) -> str:
        return f"{self.base_url}/quantum-devices"


@dataclass
class AppConfig:
    """Typed configuration used to wire the application."""

    host: str = "127.0.0.1"
    port: int = 3000
    api_key: str = ""
    credential_file: str = "memory/credentials.json"
    default_model: str = "gpt-4o"
    default_chat_model: str = "gpt-4o-mini"
    api: ApiConfig = field(default_factory=ApiConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        return cls(
            host=CONFIG["host"],
            port=CONFIG["port"],
            api_key=CONFIG["api_key"],
            credential_file=CONFIG["credential_file"],
            default_model=CONFIG["default_model"],
            default_chat_model=CONFIG["default_chat_model"],
            api=ApiConfig(
                base_url=CONFIG["api_base_url"],
                device_limit=CONFIG["device_limit"],
                request_timeout=CONFIG["request_timeout"],
            ),
        )
