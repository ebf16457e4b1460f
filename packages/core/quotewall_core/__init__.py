"""Core app services for settings, logging, secrets, and AI backgrounds."""

from .config import AppConfig, load_config, save_config, style_from_config
from .diagnostics import build_doctor_payload, redact
from .imagegen import ImageGenerationError, OpenAIImageProvider, build_prompt
from .secret_store import OPENAI_API_KEY, SecretStore

__all__ = [
    "AppConfig",
    "ImageGenerationError",
    "OPENAI_API_KEY",
    "OpenAIImageProvider",
    "SecretStore",
    "build_doctor_payload",
    "build_prompt",
    "load_config",
    "redact",
    "save_config",
    "style_from_config",
]
