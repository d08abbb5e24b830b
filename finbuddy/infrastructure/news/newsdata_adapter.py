"""
Infrastructure adapter: NewsData.io → INewsProvider.

Primary source. Filtering happens server-side (Indian business news in
English), so the adapter only maps the response schema into NewsDraft.
"""

import logging
from typing import Optional

import httpx

from finbuddy.domain.entities.news import NewsDraft
from finbuddy.domain.errors import ProviderUnavailable
from finbuddy.domain.ports.news_provider_port import INewsProvider
from finbuddy.infrastructure.news.http_utils import get_json, normalize_timestamp

logger = logging.getLogger(__name__)


class NewsDataProvider(INewsProvider):
    """Fetches Indian business headlines from NewsData.io."""

    name = "NewsData.io"
    BASE_URL = "https://newsdata.io/api/1/news"
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
            raise ProviderUnavailable("NewsData API key missing")

        data = get_json(
            self._client,
            "NewsData",
            self.BASE_URL,
            params={
                "apikey": self._api_key,
                "country": "in",
                "category": "business",
                "language": "en",
                "size": str(self.MAX_ARTICLES),
            },
        )
        if not isinstance(data, dict) or data.get("status") != "success":
            message = data.get("message") if isinstance(data, dict) else None
            raise ProviderUnavailable(f"NewsData API returned error: {message or 'Unknown error'}")

        results = data.get("results") or []
        drafts = [
            NewsDraft(
                headline=article.get("title") or "No title available",
                url=article.get("link") or None,
                published_at=normalize_timestamp(article.get("pubDate")),
                source=article.get("source_id") or self.name,
            )
            for article in results
            if isinstance(article, dict)
        ]
        logger.debug("NewsData returned %d articles", len(drafts))
        return drafts[: self.MAX_ARTICLES]
