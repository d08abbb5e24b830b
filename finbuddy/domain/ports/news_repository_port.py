"""
Port (interface) for the persisted news window.
Infrastructure adapters (e.g. SqlAlchemyNewsRepository) must implement this interface.
"""

from abc import ABC, abstractmethod

from finbuddy.domain.entities.chat import IngestResult
from finbuddy.domain.entities.news import NewsDraft, NewsRecord


class INewsRepository(ABC):
    @abstractmethod
    def ingest(self, drafts: list[NewsDraft], keep_count: int) -> IngestResult:
        """Insert unseen headlines, then trim the table to *keep_count* newest rows.

        Raises:
            StoreFailure: once the bounded retries are exhausted.
        """
        ...

    @abstractmethod
    def get_latest(self, limit: int) -> list[NewsRecord]:
        """Newest-first records; a non-positive or non-numeric *limit* yields []."""
        ...

    @abstractmethod
    def health_check(self) -> bool: ...
