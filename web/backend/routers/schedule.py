#!/usr/bin/env python3
"""
Schedule endpoints - weekly timetable management.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..dependencies import get_db
from ..services.schedule_service import ScheduleService
from ..models.requests import ScheduleCreateRequest
from ..models.responses import ActionResponse, ScheduleResponse

router = APIRouter(prefix="/api/schedule", tags=["schedule"])


@router.post("/entries", response_model=ScheduleResponse)
def add_entries(body: ScheduleCreateRequest, db: Session = Depends(get_db)):
    entries = ScheduleService(db).add_entries(body.user_id, body.entries)
    return ScheduleResponse(success=True, count=len(entries), entries=entries)


@router.get("", response_model=ScheduleResponse)
def get_schedule(
    user_id: str = Query(..., min_length=1),
    db: Session = Depends(get_db)
):
    """The user's timetable ordered Monday to Sunday, then by start time."""
    entries = ScheduleService(db).get_entries(user_id)
    return ScheduleResponse(success=True, count=len(entries), entries=entries)


@router.delete("/entries/{entry_id}", response_model=ActionResponse)
def delete_entry(
    entry_id: str,
    user_id: str = Query(..., min_length=1, description="Must own the entry"),
    db: Session = Depends(get_db)
):
    ScheduleService(db).delete_entry(entry_id, user_id)
    return ActionResponse(success=True, message="Schedule entry deleted")
