"""
Database engine and session factory for the news window.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def create_session_factory(database_url: str, echo: bool = False) -> sessionmaker:
    """Build an engine for *database_url*, create missing tables and return a sessionmaker.

    In-memory SQLite URLs share one connection so every session sees the same data.
    """
    kwargs: dict = {"echo": echo, "future": True}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    engine = create_engine(database_url, **kwargs)

    # Registers NewsRow on Base.metadata.
    from finbuddy.infrastructure.persistence import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
