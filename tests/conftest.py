"""
Pytest configuration and fixtures
"""
from datetime import datetime, timedelta, timezone

import pytest

from finbuddy.domain.entities.news import NewsDraft, NewsRecord
from finbuddy.domain.ports.llm_port import ITextGenerator
from finbuddy.infrastructure.persistence.database import create_session_factory
from finbuddy.infrastructure.persistence.news_repository import SqlAlchemyNewsRepository


class FakeClock:
    """Returns a strictly increasing UTC timestamp on every call."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


class FakeTextGenerator(ITextGenerator):
    def __init__(self, reply: str = "Happy to help with your finances!", error: Exception = None):
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    def generate_text(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


def make_record(record_id: int, headline: str, source: str = "Economic Times") -> NewsRecord:
    return NewsRecord(
        id=record_id,
        headline=headline,
        source=source,
        published_at="2024-01-01T00:00:00+00:00",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def make_draft(headline: str, source: str = "Economic Times") -> NewsDraft:
    return NewsDraft(headline=headline, source=source, url="https://example.com/news")


@pytest.fixture
def session_factory():
    """Fresh in-memory SQLite database per test."""
    return create_session_factory("sqlite://")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def repository(session_factory, clock, sleeps):
    return SqlAlchemyNewsRepository(
        session_factory,
        retry_attempts=3,
        retry_delay=1.0,
        clock=clock,
        sleep=sleeps.append,
    )


@pytest.fixture
def text_generator():
    return FakeTextGenerator()
