#!/usr/bin/env python3
"""
Schedule service - weekly timetable entries per user.
"""

import logging
from typing import List
from sqlalchemy.orm import Session

from core.alerts import TimetableEntry, parse_clock_time
from database.models import ScheduleEntry
from database.repositories import ScheduleRepository
from ..models.requests import TimetableEntryRequest
from ..models.responses import ScheduleEntrySummary
from ..utils import parse_uuid
from ..exceptions import NotFoundException, PermissionDeniedException, InvalidInputException

logger = logging.getLogger(__name__)


class ScheduleService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ScheduleRepository(db)

    def add_entries(self, user_id: str, entries: List[TimetableEntryRequest]) -> List[ScheduleEntrySummary]:
        timetable = []
        for entry in entries:
            try:
                parse_clock_time(entry.start_time)
                parse_clock_time(entry.end_time)
            except ValueError as e:
                raise InvalidInputException(str(e))
            timetable.append(TimetableEntry(**entry.model_dump()))

        rows = self.repo.add_entries(user_id, timetable)
        self.db.commit()
        logger.info(f"Added {len(rows)} schedule entries for {user_id}")
        return [self._to_summary(r) for r in rows]

    def get_entries(self, user_id: str) -> List[ScheduleEntrySummary]:
        return [self._to_summary(r) for r in self.repo.get_entries(user_id)]

    def get_timetable(self, user_id: str) -> List[TimetableEntry]:
        return [self.repo.to_timetable_entry(r) for r in self.repo.get_entries(user_id)]

    def delete_entry(self, entry_id: str, user_id: str) -> None:
        entry = self.repo.get_entry(parse_uuid(entry_id, "Schedule entry"))
        if not entry:
            raise NotFoundException(f"Schedule entry {entry_id} not found")
        if entry.user_id != user_id:
            raise PermissionDeniedException("Schedule entries can only be deleted by their owner")

        self.repo.delete_entry(entry)
        self.db.commit()

    @staticmethod
    def _to_summary(row: ScheduleEntry) -> ScheduleEntrySummary:
        return ScheduleEntrySummary(
            entry_id=str(row.id),
            day=row.day,
            start_time=row.start_time,
            end_time=row.end_time,
            subject=row.subject,
            room=row.room,
            subject_code=row.subject_code,
            faculty=row.faculty,
            batch=row.batch,
            entry_type=row.entry_type
        )
