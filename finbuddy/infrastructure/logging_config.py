"""
Logging configuration: one stream handler, text or JSON output, and a filter
that masks credentials before anything is written.
"""

import json
import logging
import re
import sys
from datetime import datetime, timezone


class SensitiveDataFilter(logging.Filter):
    """Mask API keys and tokens in log messages and their arguments."""

    SENSITIVE_PATTERNS = [
        (re.compile(r"(apikey|api_key|token)=[^&\s\"']+", re.IGNORECASE), r"\1=***"),
        (re.compile(r"Bearer\s+[^\s\"]+", re.IGNORECASE), "Bearer ***"),
    ]

    def _mask(self, text: str) -> str:
        for pattern, replacement in self.SENSITIVE_PATTERNS:
            text = pattern.sub(replacement, text)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self._mask(record.msg)
        if record.args and isinstance(record.args, tuple):
            record.args = tuple(
                self._mask(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Install the FinBuddy handler on the root logger (idempotent)."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT))
    handler.addFilter(SensitiveDataFilter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, "_finbuddy", False):
            root.removeHandler(existing)
    handler._finbuddy = True
    root.addHandler(handler)
    root.setLevel(level.upper())

    # httpx logs full request URLs, which carry provider credentials.
    logging.getLogger("httpx").setLevel(logging.WARNING)
