#!/usr/bin/env python3
"""
Utility functions for the web application.
"""

import uuid
from typing import Optional
from datetime import datetime

from .exceptions import NotFoundException


def safe_datetime_iso(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    return dt.isoformat()


def parse_uuid(value: str, label: str) -> uuid.UUID:
    """Parse a path id; malformed ids are reported as missing records."""
    try:
        return uuid.UUID(value)
    except (ValueError, TypeError):
        raise NotFoundException(f"{label} {value} not found")
