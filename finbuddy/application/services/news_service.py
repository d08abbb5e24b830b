"""
Application service: keep the news window fresh and serve it as chat context.

Business decisions owned here:
  - MAX_STORED_NEWS: size of the retained window after each refresh.
  - MAX_CONTEXT_NEWS: how many headlines a chat request may receive.
  - Store failures never break a chat request; they read as "no news".
"""

import logging
from typing import Optional

from finbuddy.application.services.news_fetcher import NewsFetcher
from finbuddy.domain.entities.chat import HealthStatus, RefreshResult
from finbuddy.domain.entities.news import NewsRecord
from finbuddy.domain.errors import StoreFailure
from finbuddy.domain.ports.news_repository_port import INewsRepository

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "No news API keys configured"
FETCH_FAILED = "Failed to fetch news from external API"


class NewsService:
    MAX_STORED_NEWS: int = 10
    MAX_CONTEXT_NEWS: int = 3

    def __init__(
        self,
        fetcher: NewsFetcher,
        repository: INewsRepository,
        max_stored_news: Optional[int] = None,
        max_context_news: Optional[int] = None,
    ) -> None:
        self._fetcher = fetcher
        self._repository = repository
        self.max_stored_news = max_stored_news or self.MAX_STORED_NEWS
        self.max_context_news = max_context_news or self.MAX_CONTEXT_NEWS

    def refresh(self) -> RefreshResult:
        """Run one fetch → ingest → trim cycle."""
        if not self._fetcher.is_configured():
            return RefreshResult(success=False, error=NOT_CONFIGURED)

        fetched = self._fetcher.fetch_latest()
        if not fetched.success:
            return RefreshResult(success=False, error=fetched.error or FETCH_FAILED)

        try:
            ingested = self._repository.ingest(fetched.articles, self.max_stored_news)
            total = len(self._repository.get_latest(self.max_stored_news))
        except StoreFailure as exc:
            logger.error("News storage update failed: %s", exc)
            return RefreshResult(success=False, error=str(exc))

        logger.info(
            "News refresh stored %d new, removed %d, window now %d",
            ingested.inserted,
            ingested.deleted,
            total,
        )
        return RefreshResult(
            success=True,
            inserted=ingested.inserted,
            deleted=ingested.deleted,
            total_stored=total,
        )

    def get_latest_for_context(self, limit: Optional[int] = None) -> list[NewsRecord]:
        try:
            return self._repository.get_latest(
                self.max_context_news if limit is None else limit
            )
        except StoreFailure as exc:
            logger.warning("Failed to get news for context: %s", exc)
            return []

    def get_health_status(self) -> HealthStatus:
        api_configured = self._fetcher.is_configured()
        try:
            database_healthy = self._repository.health_check()
            window = self._repository.get_latest(self.max_stored_news)
        except StoreFailure as exc:
            logger.error("Health check failed: %s", exc)
            return HealthStatus(database_healthy=False, news_count=0, api_configured=api_configured)

        return HealthStatus(
            database_healthy=database_healthy,
            news_count=len(window),
            api_configured=api_configured,
            last_update=window[0].created_at if window else None,
        )
