#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests can be run with standard Python tools:

    # Run all tests
    python -m pytest tests/ -v

    # Using unittest
    python -m unittest discover tests -v

Database tests use an in-memory SQLite database, so no server is needed.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


def create_test_engine():
    """
    In-memory SQLite engine with every table created.

    StaticPool keeps a single connection so the schema survives across
    sessions and the TestClient's worker thread.
    """
    from database.models import Base

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    return engine


def create_test_sessionmaker(engine=None):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine or create_test_engine())


def create_test_client(clock=None):
    """
    TestClient for the API wired to a fresh in-memory database.

    Returns (client, Session). Rate limiting is switched off; tests that
    exercise it turn it back on.
    """
    from fastapi.testclient import TestClient
    from web.backend.app import app
    from web.backend.dependencies import get_db, get_clock
    from web.backend.routers.confessions import limiter

    Session = create_test_sessionmaker()

    def override_get_db():
        session = Session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    if clock is not None:
        app.dependency_overrides[get_clock] = lambda: clock
    else:
        app.dependency_overrides.pop(get_clock, None)

    limiter.enabled = False
    limiter.reset()
    return TestClient(app), Session


def reset_test_client():
    from web.backend.app import app
    from web.backend.routers.confessions import limiter

    app.dependency_overrides.clear()
    limiter.enabled = True
