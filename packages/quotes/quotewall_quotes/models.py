"""Quote record and load error types."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class QuoteErrorKind(str, Enum):
    FILE_NOT_FOUND = "file_not_found"
    INVALID_DATA = "invalid_data"
    DECODING_ERROR = "decoding_error"


_MESSAGES = {
    QuoteErrorKind.FILE_NOT_FOUND: "Quotes file not found",
    QuoteErrorKind.INVALID_DATA: "Invalid quote data format",
    QuoteErrorKind.DECODING_ERROR: "Failed to decode quotes from JSON",
}


class QuoteError(Exception):
    def __init__(self, kind: QuoteErrorKind, detail: str | None = None) -> None:
        message = _MESSAGES[kind] if not detail else f"{_MESSAGES[kind]}: {detail}"
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True)
class Quote:
    text: str
    author: str | None = None
    categories: tuple[str, ...] = ()
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self) -> None:
        if not self.text or not self.text.strip():
            raise QuoteError(QuoteErrorKind.INVALID_DATA, "quote text is empty")

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Quote":
        if not isinstance(raw, dict) or not isinstance(raw.get("text"), str):
            raise QuoteError(QuoteErrorKind.INVALID_DATA, f"bad record {raw!r}")
        author = raw.get("author")
        categories = raw.get("categories") or []
        if not isinstance(categories, list) or not all(isinstance(c, str) for c in categories):
            raise QuoteError(QuoteErrorKind.INVALID_DATA, f"bad categories in {raw.get('id')!r}")
        kwargs: dict[str, Any] = {
            "text": raw["text"],
            "author": author if isinstance(author, str) and author else None,
            "categories": tuple(categories),
        }
        if raw.get("id"):
            kwargs["id"] = str(raw["id"])
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "author": self.author,
            "categories": list(self.categories),
        }
