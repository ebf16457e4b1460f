"""Read-only quote list loaded once from bundled JSON, with a fixed fallback."""

from __future__ import annotations

import json
import logging
import random
from collections import Counter
from pathlib import Path

from .models import Quote, QuoteError, QuoteErrorKind

BUNDLED_QUOTES_PATH = Path(__file__).resolve().parent / "data" / "quotes.json"

logger = logging.getLogger("quotewall.quotes")

FALLBACK_QUOTES: tuple[Quote, ...] = (
    Quote(
        id="fallback-1",
        text="The only way to do great work is to love what you do.",
        author="Steve Jobs",
        categories=("Success", "Motivation", "Work"),
    ),
    Quote(
        id="fallback-2",
        text="Innovation distinguishes between a leader and a follower.",
        author="Steve Jobs",
        categories=("Innovation", "Leadership", "Success"),
    ),
    Quote(
        id="fallback-3",
        text="Your time is limited, don't waste it living someone else's life.",
        author="Steve Jobs",
        categories=("Life", "Wisdom", "Authenticity"),
    ),
    Quote(
        id="fallback-4",
        text="The future belongs to those who believe in the beauty of their dreams.",
        author="Eleanor Roosevelt",
        categories=("Dreams", "Future", "Belief"),
    ),
    Quote(
        id="fallback-5",
        text="Success is not final, failure is not fatal: it is the courage to continue that counts.",
        author="Winston Churchill",
        categories=("Success", "Courage", "Perseverance"),
    ),
)


def read_quotes(path: Path) -> list[Quote]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise QuoteError(QuoteErrorKind.FILE_NOT_FOUND, str(path)) from exc
    except OSError as exc:
        raise QuoteError(QuoteErrorKind.FILE_NOT_FOUND, f"{path}: {exc.strerror or exc}") from exc
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise QuoteError(QuoteErrorKind.DECODING_ERROR, str(exc)) from exc

    if not isinstance(raw, dict) or not isinstance(raw.get("quotes"), list):
        raise QuoteError(QuoteErrorKind.INVALID_DATA, "expected an object with a 'quotes' list")
    return [Quote.from_dict(item) for item in raw["quotes"]]


def _contains(haystack: str | None, needle: str) -> bool:
    return haystack is not None and needle.casefold() in haystack.casefold()


class QuoteSource:
    """Loads quotes once; a failed load substitutes ``FALLBACK_QUOTES``."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or BUNDLED_QUOTES_PATH
        self.error_message: str | None = None
        self._quotes: list[Quote] | None = None

    def load(self) -> list[Quote]:
        self.error_message = None
        try:
            self._quotes = read_quotes(self.path)
        except QuoteError as exc:
            self.error_message = f"Failed to load quotes: {exc}"
            logger.warning(self.error_message, extra={"event": "quotes_fallback"})
            self._quotes = list(FALLBACK_QUOTES)
        return list(self._quotes)

    @property
    def quotes(self) -> list[Quote]:
        if self._quotes is None:
            self.load()
        return list(self._quotes or [])

    def get(self, quote_id: str) -> Quote | None:
        for quote in self.quotes:
            if quote.id == quote_id:
                return quote
        return None

    def search(self, text: str) -> list[Quote]:
        if not text:
            return self.quotes
        return [
            q
            for q in self.quotes
            if _contains(q.text, text) or _contains(q.author, text) or any(_contains(c, text) for c in q.categories)
        ]

    def by_category(self, category: str) -> list[Quote]:
        return [q for q in self.quotes if any(_contains(c, category) for c in q.categories)]

    def random_quote(self, rng: random.Random | None = None) -> Quote | None:
        quotes = self.quotes
        if not quotes:
            return None
        return (rng or random).choice(quotes)

    def all_categories(self) -> list[str]:
        return sorted({c for q in self.quotes for c in q.categories})

    def top_categories(self, limit: int = 10) -> list[str]:
        counts = Counter(c for q in self.quotes for c in q.categories)
        ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return [name for name, _ in ranked[:limit]]
