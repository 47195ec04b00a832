"""
Notification Module

Alert delivery tracking: deduplication across polling intervals and
per-user dismissed alerts.

Usage:
    from notification import AlertTracker

    tracker = AlertTracker(store)
    new_alerts = tracker.select_new("user123", alerts)
"""

from notification.tracker import (
    AlertTracker,
    DeliveryRecord,
    DeduplicationStrategy,
    DefaultDeduplicationStrategy,
    AggressiveDeduplicationStrategy,
    build_strategy,
)

__all__ = [
    'AlertTracker',
    'DeliveryRecord',
    'DeduplicationStrategy',
    'DefaultDeduplicationStrategy',
    'AggressiveDeduplicationStrategy',
    'build_strategy',
]
