import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Boolean, Integer, Float, JSON, Uuid, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class MatrimonyProfile(Base):
    """
    A student's matchmaking profile, one per user.
    """
    __tablename__ = 'matrimony_profile'

    user_id = Column(Text, primary_key=True)

    cgpa = Column(Float, nullable=False)  # 0-4.0 scale
    branch = Column(Text, nullable=False)
    year = Column(Integer, nullable=False)
    study_style = Column(Text, nullable=False)
    personality = Column(JSON, default=list)
    connection_types = Column(JSON, default=list)
    bio = Column(Text, nullable=True)

    is_active = Column(Boolean, nullable=False, default=True)
    is_verified = Column(Boolean, nullable=False, default=False)
    reports = Column(Integer, nullable=False, default=0)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index('idx_matrimony_profile_active', 'is_active'),
    )


class Match(Base):
    """
    A scored pairing between two profiles.

    The id is "{user1_id}_{user2_id}" where user1 is the user who ran the
    search. Score and reasons change only when a rejected pair is reopened,
    and they always describe the pair from user1's side.
    """
    __tablename__ = 'matrimony_match'

    id = Column(Text, primary_key=True)
    user1_id = Column(Text, nullable=False)
    user2_id = Column(Text, nullable=False)

    compatibility_score = Column(Integer, nullable=False)
    cgpa_league = Column(Text, nullable=False)
    match_reasons = Column(JSON, default=list)
    connection_type = Column(Text, nullable=False)

    status = Column(Text, nullable=False, default='pending')  # pending|accepted|rejected|blocked

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    reports_filed = relationship("MatchReport", back_populates="match", cascade="all, delete-orphan")
    messages = relationship("ChatMessage", back_populates="match", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_match_user1', 'user1_id', 'status'),
        Index('idx_match_user2', 'user2_id', 'status'),
        Index('idx_match_updated', 'updated_at'),
    )


class MatchReport(Base):
    """A participant's report against a match; at most one per reporter."""
    __tablename__ = 'matrimony_match_report'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    match_id = Column(Text, ForeignKey('matrimony_match.id', ondelete='CASCADE'), nullable=False)
    reporter_id = Column(Text, nullable=False)
    reason = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    match = relationship("Match", back_populates="reports_filed")

    __table_args__ = (
        UniqueConstraint('match_id', 'reporter_id', name='uq_match_report_reporter'),
    )


class ChatMessage(Base):
    """A message between the two participants of an accepted match."""
    __tablename__ = 'matrimony_chat_message'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    match_id = Column(Text, ForeignKey('matrimony_match.id', ondelete='CASCADE'), nullable=False)
    sender_id = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    is_anonymous = Column(Boolean, nullable=False, default=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    match = relationship("Match", back_populates="messages")

    __table_args__ = (
        Index('idx_chat_message_match', 'match_id', 'created_at'),
    )
