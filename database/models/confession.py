import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Boolean, Integer, JSON, Uuid, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class Confession(Base):
    """
    Anonymous confession.

    author_id is stored for ownership checks and never returned by the API.
    Content is stored sanitized; moderation warnings are kept alongside.
    """
    __tablename__ = 'confession'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    content = Column(Text, nullable=False)
    category = Column(Text, nullable=False)
    author_id = Column(Text, nullable=False)

    likes = Column(Integer, nullable=False, default=0)
    reports = Column(Integer, nullable=False, default=0)

    is_moderated = Column(Boolean, nullable=False, default=False)
    is_approved = Column(Boolean, nullable=False, default=True)
    moderation_warnings = Column(JSON, default=list)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    like_rows = relationship("ConfessionLike", back_populates="confession", cascade="all, delete-orphan")
    report_rows = relationship("ConfessionReport", back_populates="confession", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_confession_approved_created', 'is_approved', 'created_at'),
        Index('idx_confession_author', 'author_id'),
    )


class ConfessionLike(Base):
    __tablename__ = 'confession_like'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    confession_id = Column(Uuid, ForeignKey('confession.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    confession = relationship("Confession", back_populates="like_rows")

    __table_args__ = (
        UniqueConstraint('confession_id', 'user_id', name='uq_confession_like_user'),
    )


class ConfessionReport(Base):
    __tablename__ = 'confession_report'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    confession_id = Column(Uuid, ForeignKey('confession.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(Text, nullable=False)
    reason = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    confession = relationship("Confession", back_populates="report_rows")

    __table_args__ = (
        UniqueConstraint('confession_id', 'user_id', name='uq_confession_report_user'),
    )
