"""Named secret storage in a private JSON file under the app config root."""

from __future__ import annotations

import json
import os
from pathlib import Path

from .config import app_root
from .logging_setup import get_logger

KEYCHAIN_SERVICE = "QuoteWallAI"
KEYCHAIN_ACCOUNT = "OpenAI_API_Key"
OPENAI_API_KEY = f"{KEYCHAIN_SERVICE}/{KEYCHAIN_ACCOUNT}"

logger = get_logger("secrets")


def secrets_path() -> Path:
    return app_root() / "secrets.json"


class SecretStore:
    def __init__(self, path: Path | None = None) -> None:
        self.path = path or secrets_path()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("secret store unreadable, treating as empty", extra={"event": "secrets_unreadable"})
            return {}
        if not isinstance(raw, dict):
            return {}
        return {str(k): str(v) for k, v in raw.items()}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2, sort_keys=True)
        os.replace(tmp, self.path)

    def set(self, name: str, value: str) -> None:
        if not value:
            raise ValueError("secret value must not be empty")
        data = self._read()
        data[name] = value
        self._write(data)
        logger.info("secret stored name=%s", name, extra={"event": "secret_stored"})

    def get(self, name: str) -> str | None:
        return self._read().get(name)

    def delete(self, name: str) -> bool:
        data = self._read()
        if data.pop(name, None) is not None:
            self._write(data)
            logger.info("secret deleted name=%s", name, extra={"event": "secret_deleted"})
        return True

    def has(self, name: str) -> bool:
        return self.get(name) is not None
