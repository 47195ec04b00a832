import uuid

from sqlalchemy import Column, Text, TIMESTAMP, Uuid, Index

from .base import Base, utcnow


class ScheduleEntry(Base):
    """One weekly timetable slot belonging to a user."""
    __tablename__ = 'schedule_entry'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False)

    day = Column(Text, nullable=False)  # Monday..Sunday
    start_time = Column(Text, nullable=False)  # HH:MM
    end_time = Column(Text, nullable=False)  # HH:MM
    subject = Column(Text, nullable=False)
    subject_code = Column(Text, nullable=True)
    faculty = Column(Text, nullable=True)
    room = Column(Text, nullable=True)
    batch = Column(Text, nullable=True)
    entry_type = Column(Text, nullable=False, default='lecture')

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index('idx_schedule_user_day', 'user_id', 'day'),
    )


class KeyValueEntry(Base):
    """
    Small per-user state (last attendance check, dismissed alerts, ...).
    """
    __tablename__ = 'key_value_entry'

    key = Column(Text, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
