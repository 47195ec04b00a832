"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import os

# database.database creates its engine at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring database (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def db_session():
    """Fresh in-memory database session per test."""
    from tests import create_test_sessionmaker

    Session = create_test_sessionmaker()
    session = Session()
    try:
        yield session
    finally:
        session.close()
