"""Doctor payload: environment, redacted settings, credential and font status."""

from __future__ import annotations

import platform
import re
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any

from PIL import __version__ as pillow_version

from quotewall_renderer import FontLibrary, FontWeight

from .config import AppConfig, config_path
from .logging_setup import log_dir
from .secret_store import OPENAI_API_KEY, SecretStore

_SECRET_RE = re.compile(r"(token|secret|password|apikey|api_key|auth)", re.IGNORECASE)


def redact(value: Any) -> Any:
    if isinstance(value, dict):
        out: dict[str, Any] = {}
        for k, v in value.items():
            if _SECRET_RE.search(k):
                out[k] = "***REDACTED***"
            else:
                out[k] = redact(v)
        return out
    if isinstance(value, list):
        return [redact(v) for v in value]
    return value


def build_doctor_payload(cfg: AppConfig, secrets: SecretStore | None = None) -> dict[str, Any]:
    secrets = secrets or SecretStore()
    fonts = FontLibrary(cfg.editor.font_path)
    return {
        "ts_utc": datetime.now(timezone.utc).isoformat(),
        "platform": platform.platform(),
        "python": platform.python_version(),
        "pillow": pillow_version,
        "config_path": str(config_path()),
        "log_dir": str(log_dir()),
        "config": redact(asdict(cfg)),
        "openai_api_key_configured": secrets.has(OPENAI_API_KEY),
        "fonts": {w.name.lower(): (fonts.resolve(w) or "pillow-default") for w in FontWeight},
    }
