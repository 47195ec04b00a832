#!/usr/bin/env python3
"""
Confession service - moderated posting, feed, likes and reports.
"""

import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from core.config_loader import ModerationConfig
from core.moderation import review_submission
from database.models import Confession
from database.repositories import ConfessionRepository
from ..models.responses import ConfessionSummary
from ..utils import parse_uuid, safe_datetime_iso
from ..exceptions import (
    NotFoundException,
    PermissionDeniedException,
    ModerationRejectedException,
    DuplicateReportException
)

logger = logging.getLogger(__name__)


class ConfessionService:
    """Service for anonymous confessions."""

    def __init__(self, db: Session, config: Optional[ModerationConfig] = None):
        self.db = db
        self.repo = ConfessionRepository(db)
        self.config = config or ModerationConfig()

    def preview(self, content: str) -> tuple:
        """Moderation verdict without storing anything."""
        return review_submission(content, self.config)

    def create_confession(self, content: str, category: str, author_id: str) -> tuple:
        """
        Sanitize, moderate and store a confession.

        Returns:
            (ConfessionSummary, warnings)

        Raises:
            ModerationRejectedException: If moderation reports any error.
        """
        sanitized, result = review_submission(content, self.config)
        if not result.is_valid:
            raise ModerationRejectedException(result.errors, result.warnings)

        confession = self.repo.create_confession(
            content=sanitized,
            category=category,
            author_id=author_id,
            warnings=result.warnings
        )
        self.db.commit()
        return self._to_summary(confession), list(result.warnings)

    def list_confessions(self, category: Optional[str] = None, limit: int = 50) -> List[ConfessionSummary]:
        return [self._to_summary(c) for c in self.repo.list_approved(category=category, limit=limit)]

    def _get_or_404(self, confession_id: str) -> Confession:
        confession = self.repo.get_by_id(parse_uuid(confession_id, "Confession"))
        if not confession:
            raise NotFoundException(f"Confession {confession_id} not found")
        return confession

    def toggle_like(self, confession_id: str, user_id: str) -> tuple:
        """Returns (liked, like_count) after the toggle."""
        confession = self._get_or_404(confession_id)
        liked = self.repo.toggle_like(confession, user_id)
        self.db.commit()
        return liked, confession.likes

    def report(self, confession_id: str, user_id: str, reason: str) -> None:
        confession = self._get_or_404(confession_id)
        if self.repo.get_report(confession.id, user_id):
            raise DuplicateReportException(f"User already reported confession {confession_id}")

        self.repo.add_report(confession, user_id, reason)
        self.db.commit()
        logger.info(f"Confession {confession_id} reported ({confession.reports} total)")

    def delete(self, confession_id: str, user_id: str) -> None:
        confession = self._get_or_404(confession_id)
        if confession.author_id != user_id:
            raise PermissionDeniedException("Only the author can delete a confession")

        self.repo.delete(confession)
        self.db.commit()

    @staticmethod
    def _to_summary(confession: Confession) -> ConfessionSummary:
        return ConfessionSummary(
            confession_id=str(confession.id),
            content=confession.content,
            category=confession.category,
            likes=confession.likes or 0,
            created_at=safe_datetime_iso(confession.created_at)
        )

