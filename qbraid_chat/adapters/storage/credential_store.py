"""JSON file-backed credential storage."""

import json
import os
import sys
import tempfile
from pathlib import Path
from typing import Optional

_KEY = "api_key"


def _log(msg: str):
    print(msg, file=sys.stderr)


class CredentialStore:
    """Keeps a single qBraid API key in a JSON file.

    An optional seed key (e.g. from QBRAID_API_KEY) is returned while no key
    has been stored; a stored key always wins over the seed.
    """

    def __init__(self, path: str = "memory/credentials.json", seed: str = ""):
        self._path = Path(path)
        self._seed = seed

    def get(self) -> Optional[str]:
        if self._path.exists():
            try:
                raw = json.loads(self._path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                _log(f"Credential file unreadable ({e}), ignoring it")
                raw = {}
            value = raw.get(_KEY) if isinstance(raw, dict) else None
            if isinstance(value, str) and value:
                return value
        return self._seed or None

    def store(self, api_key: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        content = json.dumps({_KEY: api_key}, indent=2)
        # Atomic write
        fd, tmp_path = tempfile.mkstemp(dir=str(self._path.parent), suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_path, str(self._path))
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
        _log("API key stored.")

    def clear(self) -> None:
        """Forget the stored key and the seed."""
        self._seed = ""
        try:
            self._path.unlink()
        except FileNotFoundError:
            pass
        _log("API key cleared.")
