"""
SQLAlchemy model for the latest_news table.
"""

from sqlalchemy import Column, DateTime, Index, Integer, String, Text

from finbuddy.infrastructure.persistence.database import Base


class NewsRow(Base):
    __tablename__ = "latest_news"

    id = Column(Integer, primary_key=True, autoincrement=True)
    headline = Column(String(500), nullable=False, index=True)
    url = Column(Text, nullable=True)
    published_at = Column(String(64), nullable=False)
    source = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (Index("ix_latest_news_created_at_id", "created_at", "id"),)

    def __repr__(self) -> str:
        return f"<NewsRow(id={self.id}, source={self.source!r}, headline={self.headline[:40]!r})>"
