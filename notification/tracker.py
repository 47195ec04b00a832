#!/usr/bin/env python3
"""
Alert Tracker - Deduplication Service

Suppresses repeated alerts across polling intervals. An alert is identified
by (user, type, title); the evaluator recomputes alerts on every pass, so
this tracker decides which of them are new enough to deliver.

Usage:
    from notification.tracker import AlertTracker

    tracker = AlertTracker(store)

    for alert in tracker.filter_dismissed("user123", alerts):
        if tracker.should_deliver("user123", alert):
            deliver(alert)
            tracker.record_delivery("user123", alert)
"""

import hashlib
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, Iterable, List, Optional

from core.alerts.models import ProactiveAlert
from core.alerts.store import KeyValueStore

# Constants
RESEND_INTERVAL_NEVER = 999999  # Effectively never

logger = logging.getLogger(__name__)


@dataclass
class DeliveryRecord:
    """Last delivery of one alert identity."""
    dedup_hash: str
    last_sent_at: datetime
    send_count: int = 1

    def to_json(self) -> str:
        return json.dumps({
            "dedup_hash": self.dedup_hash,
            "last_sent_at": self.last_sent_at.timestamp(),
            "send_count": self.send_count,
        })

    @classmethod
    def from_json(cls, raw: str, tz=None) -> "DeliveryRecord":
        data = json.loads(raw)
        return cls(
            dedup_hash=data["dedup_hash"],
            last_sent_at=datetime.fromtimestamp(float(data["last_sent_at"]), tz=tz),
            send_count=int(data.get("send_count", 1)),
        )


class DeduplicationStrategy(ABC):
    """
    Abstract strategy for deduplication logic.

    Allows different deduplication policies to be implemented
    without changing the core tracker code.
    """

    @abstractmethod
    def should_allow(
        self,
        existing: Optional[DeliveryRecord],
        alert: ProactiveAlert,
        now: datetime
    ) -> bool:
        """
        Determine if an alert should be delivered.

        Args:
            existing: Previous delivery record (if any)
            alert: Alert about to be delivered
            now: Current time

        Returns:
            True if the alert should be delivered, False otherwise
        """
        pass

    @abstractmethod
    def get_resend_interval(self) -> int:
        """Get minimum hours between resends."""
        pass


class DefaultDeduplicationStrategy(DeduplicationStrategy):
    """
    Default deduplication strategy.

    - Deliver an alert the first time it is seen
    - Suppress it until the resend interval has passed
    """

    def __init__(self, default_interval_hours: int = 24):
        self.default_interval_hours = default_interval_hours

    def should_allow(
        self,
        existing: Optional[DeliveryRecord],
        alert: ProactiveAlert,
        now: datetime
    ) -> bool:
        if existing is None:
            return True

        time_since_last = now - existing.last_sent_at
        if time_since_last < timedelta(hours=self.default_interval_hours):
            logger.info(f"Too soon to resend '{alert.title}' (sent {time_since_last} ago)")
            return False

        return True

    def get_resend_interval(self) -> int:
        return self.default_interval_hours


class AggressiveDeduplicationStrategy(DeduplicationStrategy):
    """Aggressive deduplication - never resend, only deliver once per alert."""

    def should_allow(
        self,
        existing: Optional[DeliveryRecord],
        alert: ProactiveAlert,
        now: datetime
    ) -> bool:
        return existing is None

    def get_resend_interval(self) -> int:
        return RESEND_INTERVAL_NEVER


def build_strategy(name: str, resend_interval_hours: int = 24) -> DeduplicationStrategy:
    """Strategy factory for NotificationConfig.strategy."""
    if name == "aggressive":
        return AggressiveDeduplicationStrategy()
    if name != "default":
        logger.warning(f"Unknown deduplication strategy '{name}', using default")
    return DefaultDeduplicationStrategy(resend_interval_hours)


class AlertTracker:
    """
    Tracks delivered and dismissed alerts per user.

    Depends on the KeyValueStore abstraction so the same logic works with
    the in-memory store and the database-backed one.
    """

    DELIVERY_KEY = "alert_delivery:{dedup_hash}"
    DISMISSED_KEY = "alerts_dismissed:{user_id}"

    def __init__(
        self,
        store: KeyValueStore,
        strategy: Optional[DeduplicationStrategy] = None,
        clock: Optional[Callable[[], datetime]] = None,
        enabled: bool = True,
        dismiss_expiry_hours: int = 24
    ):
        """
        Initialize tracker.

        Args:
            store: Key-value store for delivery and dismissal state
            strategy: Deduplication strategy (defaults to DefaultDeduplicationStrategy)
            clock: Time source, defaults to datetime.now
            enabled: If False, every alert is delivered
            dismiss_expiry_hours: How long a dismissal hides its alert
        """
        self.store = store
        self.strategy = strategy or DefaultDeduplicationStrategy()
        self.clock = clock or datetime.now
        self.enabled = enabled
        self.dismiss_expiry_hours = dismiss_expiry_hours

    @staticmethod
    def generate_dedup_hash(user_id: str, alert_type: str, title: str) -> str:
        """
        Generate deduplication hash for an alert.

        This hash uniquely identifies an alert for a user across polls.
        """
        key = f"{user_id}:{alert_type}:{title}"
        return hashlib.sha256(key.encode('utf-8')).hexdigest()[:32]

    def _hash_for(self, user_id: str, alert: ProactiveAlert) -> str:
        return self.generate_dedup_hash(user_id, alert.type.value, alert.title)

    def _get_record(self, dedup_hash: str, now: datetime) -> Optional[DeliveryRecord]:
        raw = self.store.get(self.DELIVERY_KEY.format(dedup_hash=dedup_hash))
        if raw is None:
            return None
        try:
            return DeliveryRecord.from_json(raw, tz=now.tzinfo)
        except (ValueError, KeyError, TypeError):
            logger.warning(f"Discarding unreadable delivery record {dedup_hash}")
            return None

    def should_deliver(self, user_id: str, alert: ProactiveAlert) -> bool:
        """
        Check if an alert should be delivered (not a duplicate).

        Returns:
            True if the alert should be delivered, False if duplicate
        """
        if not self.enabled:
            return True

        now = self.clock()
        existing = self._get_record(self._hash_for(user_id, alert), now)
        should_send = self.strategy.should_allow(existing, alert, now)

        if not should_send:
            logger.info(f"Suppressing duplicate alert: {alert.type.value} for {user_id}")

        return should_send

    def record_delivery(self, user_id: str, alert: ProactiveAlert) -> DeliveryRecord:
        """Record that an alert was delivered."""
        now = self.clock()
        dedup_hash = self._hash_for(user_id, alert)
        existing = self._get_record(dedup_hash, now)

        if existing:
            existing.last_sent_at = now
            existing.send_count += 1
            record = existing
            logger.info(f"Updated delivery record (send count: {record.send_count})")
        else:
            record = DeliveryRecord(dedup_hash=dedup_hash, last_sent_at=now)
            logger.info(f"Created delivery record for {alert.type.value}")

        self.store.set(self.DELIVERY_KEY.format(dedup_hash=dedup_hash), record.to_json())
        return record

    def select_new(self, user_id: str, alerts: Iterable[ProactiveAlert]) -> List[ProactiveAlert]:
        """Non-dismissed alerts that pass deduplication; records their delivery."""
        delivered = []
        for alert in self.filter_dismissed(user_id, alerts):
            if self.should_deliver(user_id, alert):
                self.record_delivery(user_id, alert)
                delivered.append(alert)
        return delivered

    # --- Dismissed alerts ---

    def _dismissed(self, user_id: str, now: datetime) -> Dict[str, float]:
        """Unexpired dismissal times (epoch seconds) keyed by alert type and title."""
        raw = self.store.get(self.DISMISSED_KEY.format(user_id=user_id))
        if not raw:
            return {}
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise TypeError(f"expected an object, got {type(data).__name__}")
            dismissed = {key: float(at) for key, at in data.items()}
        except (ValueError, TypeError):
            logger.warning(f"Resetting unreadable dismissed alerts for {user_id}")
            return {}

        cutoff = (now - timedelta(hours=self.dismiss_expiry_hours)).timestamp()
        return {key: at for key, at in dismissed.items() if at > cutoff}

    def dismiss(self, user_id: str, alert_type: str, title: str) -> None:
        """
        Hide the current occurrence of an alert.

        The dismissal lapses after dismiss_expiry_hours, so next week's class
        or a still-stale attendance record is shown again.
        """
        now = self.clock()
        dismissed = self._dismissed(user_id, now)
        dismissed[f"{alert_type}:{title}"] = now.timestamp()
        self.store.set(self.DISMISSED_KEY.format(user_id=user_id), json.dumps(dismissed, sort_keys=True))

    def is_dismissed(self, user_id: str, alert: ProactiveAlert) -> bool:
        return alert.dedup_key in self._dismissed(user_id, self.clock())

    def filter_dismissed(self, user_id: str, alerts: Iterable[ProactiveAlert]) -> List[ProactiveAlert]:
        dismissed = self._dismissed(user_id, self.clock())
        return [a for a in alerts if a.dedup_key not in dismissed]
