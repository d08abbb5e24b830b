"""
Composition helpers shared by the entrypoints.

Each entrypoint loads .env and the optional secret first, then calls these
factories with the resulting Settings; nothing here runs at import time.
"""

from typing import Optional

from finbuddy.application.services.news_fetcher import NewsFetcher
from finbuddy.application.services.news_service import NewsService
from finbuddy.application.services.rate_limiter import RateLimiter
from finbuddy.application.services.response_generator import ResponseGenerator
from finbuddy.domain.ports.observability_port import IObservabilityHandler
from finbuddy.infrastructure.config import Settings
from finbuddy.infrastructure.llm.bedrock_adapter import BedrockTextGenerator
from finbuddy.infrastructure.news.finnhub_adapter import FinnhubProvider
from finbuddy.infrastructure.news.newsdata_adapter import NewsDataProvider
from finbuddy.infrastructure.persistence.database import create_session_factory
from finbuddy.infrastructure.persistence.news_repository import SqlAlchemyNewsRepository


def build_news_service(settings: Settings) -> NewsService:
    # Provider order is fallback priority.
    providers = [
        NewsDataProvider(settings.news_api_key, timeout=settings.news_fetch_timeout),
        FinnhubProvider(settings.finnhub_api_key, timeout=settings.news_fetch_timeout),
    ]
    fetcher = NewsFetcher(providers, RateLimiter(settings.news_requests_per_hour))
    repository = SqlAlchemyNewsRepository(
        create_session_factory(settings.database_url),
        retry_attempts=settings.store_retry_attempts,
        retry_delay=settings.store_retry_delay,
    )
    return NewsService(
        fetcher,
        repository,
        max_stored_news=settings.max_stored_news,
        max_context_news=settings.max_context_news,
    )


def build_observability(settings: Settings) -> Optional[IObservabilityHandler]:
    if not settings.langfuse_enabled:
        return None
    from finbuddy.infrastructure.observability.langfuse_adapter import LangfuseTracer
    return LangfuseTracer()


def build_response_generator(
    settings: Settings,
    news_service: NewsService,
    observability: Optional[IObservabilityHandler] = None,
) -> ResponseGenerator:
    text_generator = BedrockTextGenerator(
        model_id=settings.bedrock_model_id,
        region=settings.aws_default_region,
        max_tokens=settings.generation_max_tokens,
        temperature=settings.generation_temperature,
    )
    return ResponseGenerator(
        text_generator,
        news_service=news_service,
        observability=observability,
        generation_timeout=settings.generation_timeout,
    )
