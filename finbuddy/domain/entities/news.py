"""
Domain entities for financial news headlines.
Zero external dependencies: pure Python dataclasses only.

A NewsDraft is what a provider hands back; a NewsRecord is what the store
persisted. Records are never mutated once created.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

MAX_HEADLINE_LENGTH = 500

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class NewsDraft:
    headline: str
    source: str
    url: Optional[str] = None
    published_at: Optional[str] = None


@dataclass(frozen=True)
class NewsRecord:
    id: int
    headline: str
    source: str
    published_at: str
    created_at: datetime
    url: Optional[str] = None


def sanitize_headline(headline: str) -> str:
    """Trim, collapse inner whitespace and cap the headline length."""
    return _WHITESPACE_RE.sub(" ", (headline or "").strip())[:MAX_HEADLINE_LENGTH]
