"""
Alerts Module - Proactive class reminders and attendance warnings.
"""

from core.alerts.models import (
    AlertType,
    AlertPriority,
    ProactiveAlert,
    TimetableEntry,
    WEEKDAYS,
    parse_clock_time,
)
from core.alerts.store import KeyValueStore, InMemoryKeyValueStore
from core.alerts.evaluator import (
    AlertEvaluator,
    check_upcoming_classes,
    check_attendance_warning,
    sort_alerts,
    days_since,
)

__all__ = [
    'AlertType',
    'AlertPriority',
    'ProactiveAlert',
    'TimetableEntry',
    'WEEKDAYS',
    'parse_clock_time',
    'KeyValueStore',
    'InMemoryKeyValueStore',
    'AlertEvaluator',
    'check_upcoming_classes',
    'check_attendance_warning',
    'sort_alerts',
    'days_since',
]
