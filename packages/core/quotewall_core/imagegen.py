"""AI background images from the OpenAI images API.

One best-effort round trip per request: generate, then download the first
returned URL. Failures surface as ``ImageGenerationError`` subclasses and are
never retried.
"""

from __future__ import annotations

import http.client
import json
import os
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from io import BytesIO
from typing import Any

import certifi
from PIL import Image, UnidentifiedImageError

from quotewall_quotes.models import Quote

from .config import ImageGenerationConfig
from .logging_setup import get_logger
from .secret_store import OPENAI_API_KEY, SecretStore

logger = get_logger("imagegen")

_BASE_STYLE = "Beautiful, artistic wallpaper background, abstract, modern, high quality, no text, "


class ImageGenerationError(Exception):
    pass


class MissingAPIKey(ImageGenerationError):
    def __init__(self) -> None:
        super().__init__("No OpenAI API key found. Add one with `quotewall api-key set`.")


class InvalidResponse(ImageGenerationError):
    def __init__(self, detail: str = "") -> None:
        super().__init__(f"Invalid response from OpenAI API{': ' + detail if detail else ''}")


class NoImageURL(ImageGenerationError):
    def __init__(self) -> None:
        super().__init__("No image URL in response")


class InvalidImageData(ImageGenerationError):
    def __init__(self) -> None:
        super().__init__("Invalid image data received")


class APIError(ImageGenerationError):
    def __init__(self, message: str) -> None:
        super().__init__(f"OpenAI API Error: {message}")
        self.api_message = message


class HTTPStatusError(ImageGenerationError):
    def __init__(self, status: int) -> None:
        super().__init__(f"HTTP Error: {status}")
        self.status = status


@dataclass(frozen=True)
class ImageGenerationRequest:
    prompt: str
    model: str = "dall-e-3"
    n: int = 1
    size: str = "1024x1792"
    quality: str = "standard"
    style: str = "vivid"

    def to_json(self) -> bytes:
        payload = {
            "model": self.model,
            "prompt": self.prompt,
            "n": self.n,
            "size": self.size,
            "quality": self.quality,
            "style": self.style,
        }
        return json.dumps(payload).encode("utf-8")


def build_prompt(quote: Quote) -> str:
    categories = " ".join(quote.categories).lower()
    text = quote.text.lower()

    if "motivation" in categories or "success" in categories:
        mood, colors = ["inspiring", "energetic"], "warm colors, golden hour lighting"
    elif "peace" in categories or "wisdom" in categories:
        mood, colors = ["serene", "calming"], "cool blues and purples, soft lighting"
    elif "love" in categories or "friendship" in categories:
        mood, colors = ["warm", "heartfelt"], "soft pinks and warm tones"
    elif "nature" in categories or "nature" in text:
        mood, colors = ["natural", "organic"], "nature-inspired greens and earth tones"
    else:
        mood, colors = ["elegant", "sophisticated"], "gradient colors, professional"

    elements = []
    if "sky" in text or "cloud" in text:
        elements.append("clouds")
    if "ocean" in text or "sea" in text or "water" in text:
        elements.append("flowing water")
    if "mountain" in text or "peak" in text:
        elements.append("mountain silhouettes")
    if "light" in text or "sun" in text:
        elements.append("rays of light")
    if "star" in text or "night" in text:
        elements.append("starry patterns")

    featuring = ", ".join(elements) if elements else "abstract flowing shapes"
    return (
        f"{_BASE_STYLE}{', '.join(mood)}, {colors}, featuring {featuring}, "
        "minimalist, professional wallpaper quality, 4K resolution"
    )


def _build_ssl_context() -> ssl.SSLContext:
    ca_bundle = os.environ.get("QUOTEWALL_CA_BUNDLE", "").strip()
    if ca_bundle:
        return ssl.create_default_context(cafile=ca_bundle)
    return ssl.create_default_context(cafile=certifi.where())


def _error_message(body: bytes) -> str | None:
    try:
        payload = json.loads(body.decode("utf-8"))
        return str(payload["error"]["message"])
    except (ValueError, KeyError, TypeError):
        return None


class OpenAIImageProvider:
    def __init__(self, secrets: SecretStore | None = None, config: ImageGenerationConfig | None = None) -> None:
        self.secrets = secrets or SecretStore()
        self.config = config or ImageGenerationConfig()

    @property
    def available(self) -> bool:
        return self.secrets.has(OPENAI_API_KEY)

    def build_request(self, quote: Quote) -> ImageGenerationRequest:
        return ImageGenerationRequest(
            prompt=build_prompt(quote),
            model=self.config.model,
            size=self.config.size,
            quality=self.config.quality,
            style=self.config.style,
        )

    def generate_background(self, quote: Quote) -> Image.Image:
        api_key = self.secrets.get(OPENAI_API_KEY)
        if not api_key:
            raise MissingAPIKey()

        request = self.build_request(quote)
        logger.info("requesting background quote_id=%s", quote.id, extra={"event": "imagegen_request"})
        try:
            payload = self._post_generation(request, api_key)
            url = self._first_url(payload)
            image = self._download(url)
        except ImageGenerationError as exc:
            logger.warning("background generation failed: %s", exc, extra={"event": "imagegen_failed"})
            raise
        logger.info("background received size=%sx%s", *image.size, extra={"event": "imagegen_success"})
        return image

    def _post_generation(self, request: ImageGenerationRequest, api_key: str) -> dict[str, Any]:
        req = urllib.request.Request(
            f"{self.config.base_url.rstrip('/')}/images/generations",
            data=request.to_json(),
            method="POST",
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
        )
        try:
            with urllib.request.urlopen(req, timeout=self.config.timeout_s, context=_build_ssl_context()) as resp:
                body = resp.read()
        except urllib.error.HTTPError as exc:
            message = _error_message(exc.read())
            if message:
                raise APIError(message) from exc
            raise HTTPStatusError(exc.code) from exc
        except urllib.error.URLError as exc:
            raise InvalidResponse(str(exc.reason)) from exc
        except (OSError, http.client.HTTPException) as exc:
            raise InvalidResponse(str(exc) or type(exc).__name__) from exc

        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as exc:
            raise InvalidResponse("body is not JSON") from exc
        if not isinstance(payload, dict):
            raise InvalidResponse("unexpected JSON shape")
        return payload

    @staticmethod
    def _first_url(payload: dict[str, Any]) -> str:
        data = payload.get("data")
        if not isinstance(data, list) or not data:
            raise NoImageURL()
        url = data[0].get("url") if isinstance(data[0], dict) else None
        if not url:
            raise NoImageURL()
        return str(url)

    def _download(self, url: str) -> Image.Image:
        try:
            with urllib.request.urlopen(url, timeout=self.config.timeout_s, context=_build_ssl_context()) as resp:
                data = resp.read()
        except urllib.error.HTTPError as exc:
            raise HTTPStatusError(exc.code) from exc
        except urllib.error.URLError as exc:
            raise InvalidResponse(str(exc.reason)) from exc
        except (OSError, http.client.HTTPException) as exc:
            raise InvalidResponse(str(exc) or type(exc).__name__) from exc

        try:
            image = Image.open(BytesIO(data))
            image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            raise InvalidImageData() from exc
        return image
