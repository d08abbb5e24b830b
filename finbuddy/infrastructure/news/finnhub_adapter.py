"""
Infrastructure adapter: Finnhub.io general news → INewsProvider.

Fallback source. Finnhub returns a bare JSON list with epoch-second
timestamps, which are converted to ISO-8601 here.
"""

from typing import Optional

import httpx

from finbuddy.domain.entities.news import NewsDraft
from finbuddy.domain.errors import ProviderUnavailable
from finbuddy.domain.ports.news_provider_port import INewsProvider
from finbuddy.infrastructure.news.http_utils import epoch_to_iso, get_json


class FinnhubProvider(INewsProvider):
    """Fetches general market headlines from Finnhub.io."""

    name = "Finnhub.io"
    BASE_URL = "https://finnhub.io/api/v1"
    MAX_ARTICLES = 10

    def __init__(
        self,
        api_key: Optional[str],
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._api_key = api_key
        self._client = client or httpx.Client(timeout=timeout)

    def is_configured(self) -> bool:
        return bool(self._api_key)

    def fetch(self) -> list[NewsDraft]:
        if not self._api_key:
            raise ProviderUnavailable("Finnhub API key missing")

        data = get_json(
            self._client,
            "Finnhub",
            f"{self.BASE_URL}/news",
            params={"category": "general", "token": self._api_key},
        )
        if not isinstance(data, list):
            raise ProviderUnavailable("Finnhub API returned invalid data format")

        articles = [a for a in data if isinstance(a, dict) and a.get("headline")]
        return [
            NewsDraft(
                headline=article["headline"],
                url=article.get("url") or None,
                published_at=epoch_to_iso(article.get("datetime")),
                source=article.get("source") or self.name,
            )
            for article in articles[: self.MAX_ARTICLES]
        ]
