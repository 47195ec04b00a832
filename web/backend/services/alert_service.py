#!/usr/bin/env python3
"""
Alert service - evaluates proactive alerts on demand for the API.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional
from sqlalchemy.orm import Session

from core.config_loader import AppConfig
from core.alerts import AlertEvaluator, ProactiveAlert
from database.repositories import SqlKeyValueStore
from notification import AlertTracker, build_strategy
from .schedule_service import ScheduleService

logger = logging.getLogger(__name__)


class AlertService:
    """
    Wires the evaluator and tracker to the database-backed key-value store.

    Reading alerts through the API does not record deliveries; only the
    polling worker in main.py deduplicates across intervals.
    """

    def __init__(
        self,
        db: Session,
        config: Optional[AppConfig] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.db = db
        self.config = config or AppConfig()
        self.store = SqlKeyValueStore(db)
        self.evaluator = AlertEvaluator(self.store, clock=clock, config=self.config.alerts)
        self.tracker = AlertTracker(
            self.store,
            strategy=build_strategy(
                self.config.notifications.strategy,
                self.config.notifications.resend_interval_hours
            ),
            clock=clock,
            enabled=self.config.notifications.deduplication_enabled,
            dismiss_expiry_hours=self.config.notifications.dismiss_expiry_hours
        )
        self.schedule = ScheduleService(db)

    def get_alerts(self, user_id: str) -> List[ProactiveAlert]:
        timetable = self.schedule.get_timetable(user_id)
        alerts = self.evaluator.evaluate(user_id, timetable)
        visible = self.tracker.filter_dismissed(user_id, alerts)
        # evaluate() may have stamped the attendance warning as shown
        self.db.commit()
        return visible

    def dismiss(self, user_id: str, alert_type: str, title: str) -> None:
        self.tracker.dismiss(user_id, alert_type, title)
        self.db.commit()
        logger.info(f"Dismissed {alert_type} alert for {user_id}")

    def record_attendance_check(self, user_id: str) -> datetime:
        checked_at = self.evaluator.record_attendance_check(user_id)
        self.db.commit()
        return checked_at
