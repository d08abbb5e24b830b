"""Post-processing of raw model output before it reaches the user."""

import re
from typing import Any

from finbuddy.application.chat.prompts import FALLBACK_RESPONSE

MAX_RESPONSE_LENGTH = 1500
TRUNCATE_AT = 1400
MIN_SENTENCE_CUT = 1000

_ROLE_ECHO_RE = re.compile(r"^(System|Assistant|FinBuddy Response):\s*", re.IGNORECASE)
_EXTRA_NEWLINES_RE = re.compile(r"\n{3,}")
_EXTRA_SPACES_RE = re.compile(r"[ \t]{2,}")
_TERMINAL_RE = re.compile(r"[.!?]$")


def clean_response(response: Any) -> str:
    """Normalize model output; never returns an empty string."""
    if not response or not isinstance(response, str):
        return FALLBACK_RESPONSE

    cleaned = _ROLE_ECHO_RE.sub("", response.strip())
    cleaned = _EXTRA_NEWLINES_RE.sub("\n\n", cleaned)
    cleaned = _EXTRA_SPACES_RE.sub(" ", cleaned).strip()

    if len(cleaned) > MAX_RESPONSE_LENGTH:
        cut = max(cleaned.rfind(mark, 0, TRUNCATE_AT + 1) for mark in ".!?")
        if cut > MIN_SENTENCE_CUT:
            cleaned = cleaned[: cut + 1]
        else:
            cleaned = cleaned[:TRUNCATE_AT] + "..."

    if cleaned and not _TERMINAL_RE.search(cleaned):
        cleaned += "."

    return cleaned or FALLBACK_RESPONSE
