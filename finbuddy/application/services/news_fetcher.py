"""
Application service: fetch headlines through an ordered provider fallback chain.

Providers are tried in priority order; the first one returning at least one
article wins. Unconfigured providers are skipped. The fetcher never persists
anything; drafts are handed to the NewsService for ingestion.
"""

import logging

from finbuddy.application.services.rate_limiter import RateLimiter
from finbuddy.domain.entities.chat import FetchResult
from finbuddy.domain.ports.news_provider_port import INewsProvider

logger = logging.getLogger(__name__)

ALL_SOURCES_UNAVAILABLE = "All news API sources are unavailable"


class NewsFetcher:
    MAX_ARTICLES_PER_PROVIDER: int = 10

    def __init__(self, providers: list[INewsProvider], rate_limiter: RateLimiter) -> None:
        self._providers = list(providers)
        self._rate_limiter = rate_limiter

    def is_configured(self) -> bool:
        return any(provider.is_configured() for provider in self._providers)

    def fetch_latest(self) -> FetchResult:
        waited = self._rate_limiter.await_turn()
        if waited:
            logger.info("Rate limiter delayed news fetch by %.1fs", waited)

        empty_success = False
        for provider in self._providers:
            if not provider.is_configured():
                continue
            try:
                articles = provider.fetch()[: self.MAX_ARTICLES_PER_PROVIDER]
            except Exception as exc:
                logger.warning("News provider %s failed: %s", provider.name, exc)
                continue

            if articles:
                logger.info("Fetched %d articles from %s", len(articles), provider.name)
                return FetchResult(success=True, articles=articles)

            logger.warning("News provider %s returned no articles, trying fallback", provider.name)
            empty_success = True

        if empty_success:
            return FetchResult(success=True, articles=[])
        return FetchResult(success=False, articles=[], error=ALL_SOURCES_UNAVAILABLE)
