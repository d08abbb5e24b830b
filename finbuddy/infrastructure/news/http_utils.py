"""
Shared httpx helpers for the headline providers.
"""

import json
import re
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from finbuddy.domain.errors import ProviderUnavailable

# Strips API keys from URLs before they reach logs or error messages.
_APIKEY_RE = re.compile(r"(apikey|api_key|token)=[^&\s]+", re.IGNORECASE)

_PLAIN_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def sanitize_url(url: str) -> str:
    return _APIKEY_RE.sub(r"\1=***", url)


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def get_json(client: httpx.Client, provider: str, url: str, params: dict) -> Any:
    """GET *url* and decode JSON; every failure becomes ProviderUnavailable."""
    try:
        response = client.get(url, params=params, headers={"Accept": "application/json"})
    except httpx.TimeoutException as exc:
        raise ProviderUnavailable(f"{provider} API timeout: {exc}") from exc
    except httpx.HTTPError as exc:
        raise ProviderUnavailable(
            f"{provider} API request failed: {sanitize_url(str(exc))}"
        ) from exc

    if response.is_error:
        raise ProviderUnavailable(
            f"{provider} API error: {response.status_code} {response.reason_phrase}"
        )
    try:
        return response.json()
    except (json.JSONDecodeError, ValueError) as exc:
        raise ProviderUnavailable(
            f"{provider} returned non-JSON (status={response.status_code}, "
            f"url={sanitize_url(str(response.url))})"
        ) from exc


def normalize_timestamp(value: Optional[str]) -> str:
    """Return an ISO-8601 timestamp; unknown formats pass through, blanks become now."""
    if not value or not isinstance(value, str):
        return utcnow_iso()
    try:
        parsed = datetime.strptime(value.strip(), _PLAIN_TIMESTAMP_FORMAT)
    except ValueError:
        return value.strip()
    return parsed.replace(tzinfo=timezone.utc).isoformat()


def epoch_to_iso(value: Any) -> str:
    try:
        return datetime.fromtimestamp(float(value), tz=timezone.utc).isoformat()
    except (TypeError, ValueError, OverflowError, OSError):
        return utcnow_iso()
