"""Quote records and the read-only quote source."""

from .models import Quote, QuoteError, QuoteErrorKind
from .source import BUNDLED_QUOTES_PATH, FALLBACK_QUOTES, QuoteSource, read_quotes

__all__ = [
    "BUNDLED_QUOTES_PATH",
    "FALLBACK_QUOTES",
    "Quote",
    "QuoteError",
    "QuoteErrorKind",
    "QuoteSource",
    "read_quotes",
]
