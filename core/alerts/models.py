#!/usr/bin/env python3
"""
Alert Models - Timetable entries and proactive alerts.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any, Mapping

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class AlertType(Enum):
    CLASS_REMINDER = "class_reminder"
    ATTENDANCE_WARNING = "attendance_warning"
    UPCOMING_DEADLINE = "upcoming_deadline"


class AlertPriority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return {"low": 1, "medium": 2, "high": 3}[self.value]


def parse_clock_time(value: str) -> int:
    """
    Convert "HH:MM" to minutes since midnight.

    Raises:
        ValueError: If the value is not a valid 24h clock time
    """
    if not isinstance(value, str) or ":" not in value:
        raise ValueError(f"Invalid clock time: {value!r}")
    hours_str, minutes_str = value.strip().split(":", 1)
    hours, minutes = int(hours_str), int(minutes_str)
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"Clock time out of range: {value!r}")
    return hours * 60 + minutes


@dataclass
class TimetableEntry:
    """One weekly class slot."""
    day: str  # Monday..Sunday
    start_time: str  # "HH:MM"
    end_time: str  # "HH:MM"
    subject: str
    room: Optional[str] = None
    id: Optional[str] = None
    subject_code: Optional[str] = None
    faculty: Optional[str] = None
    batch: Optional[str] = None
    entry_type: Optional[str] = "lecture"

    @property
    def start_minutes(self) -> int:
        return parse_clock_time(self.start_time)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TimetableEntry":
        """Build from a dict; raises KeyError when required fields are missing."""
        return cls(
            day=data["day"],
            start_time=data["start_time"],
            end_time=data.get("end_time") or "",
            subject=data["subject"],
            room=data.get("room"),
            id=data.get("id"),
            subject_code=data.get("subject_code"),
            faculty=data.get("faculty"),
            batch=data.get("batch"),
            entry_type=data.get("entry_type") or "lecture",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "day": self.day,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "subject": self.subject,
            "room": self.room,
            "subject_code": self.subject_code,
            "faculty": self.faculty,
            "batch": self.batch,
            "entry_type": self.entry_type,
        }


@dataclass
class ProactiveAlert:
    """A time-sensitive notice; recomputed on every evaluation pass."""
    type: AlertType
    title: str
    message: str
    priority: AlertPriority
    timestamp: datetime
    action_url: Optional[str] = None

    @property
    def dedup_key(self) -> str:
        """Stable identity across polling intervals."""
        return f"{self.type.value}:{self.title}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "priority": self.priority.value,
            "timestamp": self.timestamp.isoformat(),
            "action_url": self.action_url,
        }
