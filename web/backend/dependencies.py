#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from datetime import datetime
from typing import Callable, Generator
from sqlalchemy.orm import Session

from database import database


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @router.get("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...
    """
    yield from database.get_db()


def get_clock() -> Callable[[], datetime]:
    """Wall clock used for alert evaluation; overridden in tests."""
    return datetime.now
