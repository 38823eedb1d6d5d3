"""
Shared fixtures for the sales import test suite.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

import db.models  # noqa: F401 registers ORM models on Base.metadata
from db.base import Base
from db.session import build_session_factory


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    """In-memory SQLite shared across threads for TestClient requests."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture()
def session(engine: Engine) -> Generator[Session, None, None]:
    db = build_session_factory(engine)()
    try:
        yield db
    finally:
        db.close()
