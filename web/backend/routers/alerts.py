#!/usr/bin/env python3
"""
Alert endpoints - proactive class reminders and attendance warnings.
"""

import logging
from datetime import datetime
from typing import Callable
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..config import get_config
from ..dependencies import get_db, get_clock
from ..services.alert_service import AlertService
from ..models.requests import DismissAlertRequest, UserActionRequest
from ..models.responses import ActionResponse, AlertsResponse, AlertSummary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/alerts", tags=["alerts"])


def _service(db: Session, clock: Callable[[], datetime]) -> AlertService:
    return AlertService(db, get_config(), clock=clock)


@router.get("", response_model=AlertsResponse)
def get_alerts(
    user_id: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    """
    Evaluate alerts for the user right now.

    Dismissed alerts are left out. Sorted by priority, then oldest first.
    """
    alerts = _service(db, clock).get_alerts(user_id)
    return AlertsResponse(
        success=True,
        count=len(alerts),
        alerts=[AlertSummary(**a.to_dict()) for a in alerts]
    )


@router.post("/dismiss", response_model=ActionResponse)
def dismiss_alert(
    body: DismissAlertRequest,
    db: Session = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    _service(db, clock).dismiss(body.user_id, body.type, body.title)
    return ActionResponse(success=True, message="Alert dismissed")


@router.post("/attendance-check", response_model=ActionResponse)
def record_attendance_check(
    body: UserActionRequest,
    db: Session = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    """Record that the user just reviewed their attendance."""
    checked_at = _service(db, clock).record_attendance_check(body.user_id)
    return ActionResponse(success=True, message=f"Attendance checked at {checked_at.isoformat()}")
