import uuid
from typing import Iterable, List, Optional
from sqlalchemy import select

from core.alerts import TimetableEntry, WEEKDAYS
from database.models import ScheduleEntry
from database.repositories.base import BaseRepository


class ScheduleRepository(BaseRepository):
    def add_entries(self, user_id: str, entries: Iterable[TimetableEntry]) -> List[ScheduleEntry]:
        rows = [
            ScheduleEntry(
                user_id=user_id,
                day=e.day,
                start_time=e.start_time,
                end_time=e.end_time,
                subject=e.subject,
                subject_code=e.subject_code,
                faculty=e.faculty,
                room=e.room,
                batch=e.batch,
                entry_type=e.entry_type or 'lecture',
            )
            for e in entries
        ]
        self.db.add_all(rows)
        self.db.flush()
        return rows

    def get_entries(self, user_id: str) -> List[ScheduleEntry]:
        stmt = select(ScheduleEntry).where(ScheduleEntry.user_id == user_id)
        rows = self.db.execute(stmt).scalars().all()
        day_order = {day: i for i, day in enumerate(WEEKDAYS)}
        return sorted(rows, key=lambda r: (day_order.get(r.day, len(WEEKDAYS)), r.start_time))

    def get_user_ids(self) -> List[str]:
        """Every user with at least one timetable entry."""
        stmt = select(ScheduleEntry.user_id).distinct().order_by(ScheduleEntry.user_id)
        return list(self.db.execute(stmt).scalars().all())

    def get_entry(self, entry_id: uuid.UUID) -> Optional[ScheduleEntry]:
        return self.db.get(ScheduleEntry, entry_id)

    def delete_entry(self, entry: ScheduleEntry) -> None:
        self.db.delete(entry)
        self.db.flush()

    @staticmethod
    def to_timetable_entry(row: ScheduleEntry) -> TimetableEntry:
        return TimetableEntry(
            id=str(row.id),
            day=row.day,
            start_time=row.start_time,
            end_time=row.end_time,
            subject=row.subject,
            room=row.room,
            subject_code=row.subject_code,
            faculty=row.faculty,
            batch=row.batch,
            entry_type=row.entry_type,
        )
