"""
api.deps
========

FastAPI dependency providers.

`get_session` yields a SQLModel session per request; `get_now` is the
single place the HTTP layer reads the wall clock, so tests can pin it via
``app.dependency_overrides``.
"""

from datetime import datetime
from functools import lru_cache
from typing import Iterator

from sqlmodel import Session

from milestones.db import SessionLocal
from milestones.settings import Settings, settings


@lru_cache
def get_settings() -> Settings:
    """Return application settings."""
    return settings


def get_now() -> datetime:
    """Current local time."""
    return datetime.now()


def get_session() -> Iterator[Session]:
    """Request‑scoped database session."""
    with SessionLocal() as session:
        yield session
