#!/usr/bin/env python3
"""
Alert Evaluator - Class reminders and attendance staleness warnings.

The check_* functions are pure: given the same inputs and clock reading they
return the same alerts. AlertEvaluator wraps them with a KeyValueStore for
the timestamps that have to survive between polls.

Usage:
    from core.alerts import AlertEvaluator, InMemoryKeyValueStore

    evaluator = AlertEvaluator(InMemoryKeyValueStore())
    alerts = evaluator.evaluate("user123", timetable_entries)
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

from core.config_loader import AlertsConfig
from core.alerts.models import (
    WEEKDAYS,
    AlertPriority,
    AlertType,
    ProactiveAlert,
    TimetableEntry,
    parse_clock_time,
)
from core.alerts.store import KeyValueStore

logger = logging.getLogger(__name__)

NO_CHECK_RECORDED_DAYS = 999

ATTENDANCE_TITLE = "Time to check your attendance"
ATTENDANCE_MESSAGE = (
    "It's been a while since you last checked your attendance. "
    "Make sure you're on track!"
)

TimetableItem = Union[TimetableEntry, Mapping[str, Any]]


def _coerce_entry(item: TimetableItem) -> TimetableEntry:
    if isinstance(item, TimetableEntry):
        return item
    return TimetableEntry.from_mapping(item)


def check_upcoming_classes(
    timetable: Iterable[TimetableItem],
    now: datetime,
    config: Optional[AlertsConfig] = None
) -> List[ProactiveAlert]:
    """
    Build reminders for today's classes starting within the reminder window.

    Malformed entries (missing fields, bad start time) are skipped.

    Args:
        timetable: TimetableEntry objects or equivalent dicts
        now: Current local wall-clock time
        config: Window sizes, defaults to AlertsConfig()

    Returns:
        One class_reminder per class starting in (0, window] minutes
    """
    config = config or AlertsConfig()
    current_day = WEEKDAYS[now.weekday()]
    current_minutes = now.hour * 60 + now.minute

    todays: List[tuple] = []
    for item in timetable or []:
        try:
            entry = _coerce_entry(item)
            if entry.day != current_day:
                continue
            todays.append((entry.start_minutes, entry))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed timetable entry {item!r}: {e}")

    todays.sort(key=lambda pair: pair[0])

    alerts: List[ProactiveAlert] = []
    for start_minutes, entry in todays:
        minutes_until = start_minutes - current_minutes
        if not 0 < minutes_until <= config.reminder_window_minutes:
            continue

        priority = (
            AlertPriority.HIGH
            if minutes_until <= config.high_priority_minutes
            else AlertPriority.MEDIUM
        )
        alerts.append(ProactiveAlert(
            type=AlertType.CLASS_REMINDER,
            title=f"Class starting soon: {entry.subject}",
            message=(
                f"{entry.subject} starts in {minutes_until} minutes "
                f"at {entry.start_time} in {entry.room or 'TBA'}"
            ),
            priority=priority,
            timestamp=now,
            action_url="/schedule",
        ))

    return alerts


def days_since(last_check: Optional[datetime], now: datetime) -> int:
    """Whole days elapsed since last_check; 999 when nothing was recorded."""
    if last_check is None:
        return NO_CHECK_RECORDED_DAYS
    return int((now - last_check).total_seconds() // 86400)


def check_attendance_warning(
    last_check: Optional[datetime],
    last_shown: Optional[datetime],
    now: datetime,
    config: Optional[AlertsConfig] = None
) -> Optional[ProactiveAlert]:
    """
    Warn when attendance has not been checked for a week.

    Requires both genuine staleness and that the warning was not already
    shown within attendance_renotify_hours.
    """
    config = config or AlertsConfig()

    if days_since(last_check, now) < config.attendance_stale_days:
        return None

    if last_shown is not None and now - last_shown < timedelta(hours=config.attendance_renotify_hours):
        return None

    return ProactiveAlert(
        type=AlertType.ATTENDANCE_WARNING,
        title=ATTENDANCE_TITLE,
        message=ATTENDANCE_MESSAGE,
        priority=AlertPriority.MEDIUM,
        timestamp=now,
        action_url="/academics?section=attendance",
    )


def sort_alerts(alerts: Iterable[ProactiveAlert]) -> List[ProactiveAlert]:
    """Priority descending, then oldest first."""
    return sorted(alerts, key=lambda a: (-a.priority.rank, a.timestamp))


class AlertEvaluator:
    """
    Evaluates alerts for one user per call.

    Timestamps are stored as epoch seconds under per-user keys. The time the
    attendance warning was last shown is kept per channel, so the polling
    worker and the app each gate their own copy. The evaluator does not
    deduplicate across calls; see notification.tracker.
    """

    LAST_CHECK_KEY = "attendance_last_check:{user_id}"
    LAST_SHOWN_KEY = "attendance_alert_shown:{channel}:{user_id}"
    DEFAULT_CHANNEL = "app"

    def __init__(
        self,
        store: KeyValueStore,
        clock: Optional[Callable[[], datetime]] = None,
        config: Optional[AlertsConfig] = None,
        channel: str = DEFAULT_CHANNEL
    ):
        self.store = store
        self.clock = clock or datetime.now
        self.config = config or AlertsConfig()
        self.channel = channel

    def _read_timestamp(self, key: str, now: datetime) -> Optional[datetime]:
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return datetime.fromtimestamp(float(raw), tz=now.tzinfo)
        except (TypeError, ValueError, OverflowError, OSError):
            logger.warning(f"Ignoring unreadable timestamp under {key}: {raw!r}")
            return None

    def _write_timestamp(self, key: str, when: datetime) -> None:
        self.store.set(key, repr(when.timestamp()))

    def record_attendance_check(self, user_id: str) -> datetime:
        """Mark attendance as checked now."""
        now = self.clock()
        self._write_timestamp(self.LAST_CHECK_KEY.format(user_id=user_id), now)
        return now

    def evaluate(self, user_id: str, timetable: Iterable[TimetableItem]) -> List[ProactiveAlert]:
        """Run every check for a user and return the sorted alerts."""
        now = self.clock()
        alerts = check_upcoming_classes(timetable, now, self.config)

        last_check = self._read_timestamp(self.LAST_CHECK_KEY.format(user_id=user_id), now)
        shown_key = self.LAST_SHOWN_KEY.format(channel=self.channel, user_id=user_id)
        last_shown = self._read_timestamp(shown_key, now)

        attendance = check_attendance_warning(last_check, last_shown, now, self.config)
        if attendance is not None:
            alerts.append(attendance)
            self._write_timestamp(shown_key, now)

        result = sort_alerts(alerts)
        logger.info(f"Evaluated {len(result)} alerts for {user_id}")
        return result
