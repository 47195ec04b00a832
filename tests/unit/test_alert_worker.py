#!/usr/bin/env python3
"""
Tests for the alert polling worker in main.py.
"""

import unittest
from datetime import datetime
from unittest.mock import patch

from core.alerts import AlertType, TimetableEntry
from core.config_loader import AppConfig
from database.repositories import ScheduleRepository
from tests import create_test_sessionmaker
from web.backend.services.alert_service import AlertService

import main


class FixedDatetime(datetime):
    @classmethod
    def now(cls, tz=None):
        return cls(2026, 10, 19, 9, 50, tzinfo=tz)


class TestRunAlertCycle(unittest.TestCase):

    def setUp(self):
        self.Session = create_test_sessionmaker()
        self.db = self.Session()
        ScheduleRepository(self.db).add_entries("u1", [
            TimetableEntry(day="Monday", start_time="10:00", end_time="11:00", subject="Maths"),
        ])
        ScheduleRepository(self.db).add_entries("u2", [
            TimetableEntry(day="Tuesday", start_time="10:00", end_time="11:00", subject="Physics"),
        ])
        self.db.commit()
        self.config = AppConfig()

    def tearDown(self):
        self.db.close()

    @patch("core.alerts.evaluator.datetime", FixedDatetime)
    @patch("notification.tracker.datetime", FixedDatetime)
    def test_delivers_then_deduplicates(self):
        # u1: class reminder + attendance warning, u2: attendance warning
        self.assertEqual(main.run_alert_cycle(self.config, self.db), 3)
        self.db.commit()
        self.assertEqual(main.run_alert_cycle(self.config, self.db), 0)

    @patch("core.alerts.evaluator.datetime", FixedDatetime)
    @patch("notification.tracker.datetime", FixedDatetime)
    def test_worker_cycle_leaves_app_alerts_untouched(self):
        main.run_alert_cycle(self.config, self.db, ["u1"])
        self.db.commit()

        service = AlertService(self.db, self.config, clock=FixedDatetime.now)
        self.assertEqual(
            [a.type for a in service.get_alerts("u1")],
            [AlertType.CLASS_REMINDER, AlertType.ATTENDANCE_WARNING]
        )

    @patch("core.alerts.evaluator.datetime", FixedDatetime)
    @patch("notification.tracker.datetime", FixedDatetime)
    def test_restrict_to_users(self):
        self.assertEqual(main.run_alert_cycle(self.config, self.db, ["u2"]), 1)

    @patch("core.alerts.evaluator.datetime", FixedDatetime)
    @patch("notification.tracker.datetime", FixedDatetime)
    def test_stops_when_shutdown_requested(self):
        with patch.object(main, "running", False):
            self.assertEqual(main.run_alert_cycle(self.config, self.db), 0)


if __name__ == '__main__':
    unittest.main()
