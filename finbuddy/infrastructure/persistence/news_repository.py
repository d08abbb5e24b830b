"""
Infrastructure adapter: SQLAlchemy relational table → INewsRepository.

Every store operation is retried with tenacity (fixed delay, bounded attempts)
and surfaces as StoreFailure once the attempts are used up. Dedup check,
insert and cleanup run as separate operations; a concurrent duplicate that
slips between them is trimmed by a later count-based cleanup.
"""

import logging
import math
import time
from datetime import datetime, timezone
from typing import Callable, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from finbuddy.domain.entities.chat import IngestResult
from finbuddy.domain.entities.news import NewsDraft, NewsRecord, sanitize_headline
from finbuddy.domain.errors import StoreFailure
from finbuddy.domain.ports.news_repository_port import INewsRepository
from finbuddy.infrastructure.persistence.models import NewsRow

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SqlAlchemyNewsRepository(INewsRepository):
    RETRY_ATTEMPTS: int = 3
    RETRY_DELAY: float = 1.0

    def __init__(
        self,
        session_factory: sessionmaker,
        retry_attempts: Optional[int] = None,
        retry_delay: Optional[float] = None,
        clock: Callable[[], datetime] = _utcnow,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Args:
            session_factory: sessionmaker bound to the news database.
            retry_attempts:  Retries after the first failed attempt.
            retry_delay:     Fixed seconds between attempts.
            clock:           Source of created_at timestamps.
            sleep:           Used between retries; replaceable in tests.
        """
        self._session_factory = session_factory
        self._retry_attempts = self.RETRY_ATTEMPTS if retry_attempts is None else retry_attempts
        self._retry_delay = self.RETRY_DELAY if retry_delay is None else retry_delay
        self._clock = clock
        self._sleep = sleep

    # ------------------------------------------------------------------
    # INewsRepository interface
    # ------------------------------------------------------------------

    def ingest(self, drafts: list[NewsDraft], keep_count: int) -> IngestResult:
        unique: list[NewsDraft] = []
        seen: set[str] = set()
        for draft in drafts:
            headline = sanitize_headline(draft.headline)
            if not headline or headline in seen:
                continue
            seen.add(headline)
            if self._retry("duplicate check", lambda: self._headline_exists(headline)):
                continue
            unique.append(
                NewsDraft(
                    headline=headline,
                    source=draft.source,
                    url=draft.url,
                    published_at=draft.published_at,
                )
            )

        inserted = self._retry("insert", lambda: self._insert(unique)) if unique else 0
        deleted = self._retry("cleanup", lambda: self._cleanup(max(keep_count, 0)))
        return IngestResult(inserted=inserted, deleted=deleted)

    def get_latest(self, limit: int) -> list[NewsRecord]:
        if isinstance(limit, bool) or not isinstance(limit, (int, float)):
            return []
        if not math.isfinite(limit):
            return []
        limit = int(limit)
        if limit <= 0:
            return []
        return self._retry("get latest", lambda: self._select_latest(limit))

    def health_check(self) -> bool:
        try:
            with self._session_factory() as session:
                session.query(NewsRow.id).limit(1).all()
            return True
        except SQLAlchemyError as exc:
            logger.warning("News store health check failed: %s", exc)
            return False

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _retry(self, operation: str, fn: Callable[[], T]) -> T:
        retryer = Retrying(
            stop=stop_after_attempt(self._retry_attempts + 1),
            wait=wait_fixed(self._retry_delay),
            retry=retry_if_exception_type(SQLAlchemyError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            sleep=self._sleep,
            reraise=True,
        )
        try:
            return retryer(fn)
        except SQLAlchemyError as exc:
            raise StoreFailure(f"News store {operation} failed: {exc}") from exc

    def _headline_exists(self, headline: str) -> bool:
        with self._session_factory() as session:
            return (
                session.query(NewsRow.id).filter(NewsRow.headline == headline).first()
                is not None
            )

    def _insert(self, drafts: list[NewsDraft]) -> int:
        with self._session_factory() as session:
            for draft in drafts:
                now = self._clock()
                session.add(
                    NewsRow(
                        headline=draft.headline,
                        url=draft.url,
                        published_at=draft.published_at or now.isoformat(),
                        source=draft.source,
                        created_at=now,
                    )
                )
            session.commit()
        return len(drafts)

    def _cleanup(self, keep_count: int) -> int:
        with self._session_factory() as session:
            keep_ids = [
                row_id
                for (row_id,) in session.query(NewsRow.id)
                .order_by(NewsRow.created_at.desc(), NewsRow.id.desc())
                .limit(keep_count)
                .all()
            ]
            query = session.query(NewsRow)
            if keep_ids:
                query = query.filter(NewsRow.id.not_in(keep_ids))
            deleted = query.delete(synchronize_session=False)
            session.commit()
        return deleted

    def _select_latest(self, limit: int) -> list[NewsRecord]:
        with self._session_factory() as session:
            rows = (
                session.query(NewsRow)
                .order_by(NewsRow.created_at.desc(), NewsRow.id.desc())
                .limit(limit)
                .all()
            )
            return [self._to_record(row) for row in rows]

    @staticmethod
    def _to_record(row: NewsRow) -> NewsRecord:
        return NewsRecord(
            id=row.id,
            headline=row.headline,
            url=row.url,
            published_at=row.published_at,
            source=row.source,
            created_at=row.created_at,
        )
