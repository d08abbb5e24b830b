"""
Domain entities for a single chat exchange and its transient analysis.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from finbuddy.domain.entities.news import NewsDraft


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class ChatResponse:
    success: bool
    message: str
    error: Optional[str] = None


@dataclass(frozen=True)
class RelevanceSignal:
    is_market_query: bool = False
    is_educational_query: bool = False
    is_news_query: bool = False
    is_company_specific: bool = False
    confidence: float = 0.0


@dataclass(frozen=True)
class PromptContext:
    system_prompt: str
    user_message: str
    news_context: Optional[str] = None


@dataclass(frozen=True)
class TokenUsage:
    system_prompt_tokens: int
    user_message_tokens: int
    total_tokens: int
    within_limit: bool


@dataclass(frozen=True)
class IngestResult:
    inserted: int
    deleted: int


@dataclass(frozen=True)
class FetchResult:
    success: bool
    articles: list[NewsDraft] = field(default_factory=list)
    error: Optional[str] = None


@dataclass(frozen=True)
class RefreshResult:
    success: bool
    inserted: int = 0
    deleted: int = 0
    total_stored: int = 0
    error: Optional[str] = None


@dataclass(frozen=True)
class HealthStatus:
    database_healthy: bool
    news_count: int
    api_configured: bool
    last_update: Optional[datetime] = None
