"""
Message validation: the first gate of the chat pipeline.
Pure function of the input text; no side effects and no external calls.
"""

import re
from typing import Any

from finbuddy.domain.entities.chat import ValidationResult

MAX_MESSAGE_LENGTH = 1000

ERROR_REQUIRED = "Message is required and must be a string"
ERROR_EMPTY = "Message cannot be empty"
ERROR_TOO_LONG = f"Message is too long (maximum {MAX_MESSAGE_LENGTH} characters)"
ERROR_INVALID_CONTENT = "Message contains invalid content"

# Role markers and instruction-override phrases used for prompt injection.
INJECTION_PATTERNS = (
    re.compile(r"system\s*:", re.IGNORECASE),
    re.compile(r"assistant\s*:", re.IGNORECASE),
    re.compile(r"ignore\s+(all\s+)?previous", re.IGNORECASE),
    re.compile(r"forget\s+(all\s+|your\s+|previous\s+)?instructions", re.IGNORECASE),
)


def validate_message(message: Any) -> ValidationResult:
    """Validate a raw user message; the first failing rule wins."""
    if message is None or not isinstance(message, str):
        return ValidationResult(is_valid=False, error=ERROR_REQUIRED)

    trimmed = message.strip()
    if not trimmed:
        return ValidationResult(is_valid=False, error=ERROR_EMPTY)

    if len(trimmed) > MAX_MESSAGE_LENGTH:
        return ValidationResult(is_valid=False, error=ERROR_TOO_LONG)

    if any(pattern.search(trimmed) for pattern in INJECTION_PATTERNS):
        return ValidationResult(is_valid=False, error=ERROR_INVALID_CONTENT)

    return ValidationResult(is_valid=True)
