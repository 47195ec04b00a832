import logging
import uuid
from typing import List, Optional
from sqlalchemy import select

from database.models import Confession, ConfessionLike, ConfessionReport
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ConfessionRepository(BaseRepository):
    def create_confession(
        self,
        content: str,
        category: str,
        author_id: str,
        warnings: Optional[List[str]] = None
    ) -> Confession:
        confession = Confession(
            content=content,
            category=category,
            author_id=author_id,
            likes=0,
            reports=0,
            is_moderated=False,
            is_approved=True,
            moderation_warnings=list(warnings or []),
        )
        self.db.add(confession)
        self.db.flush()
        logger.info(f"Created confession {confession.id} in {category}")
        return confession

    def get_by_id(self, confession_id: uuid.UUID) -> Optional[Confession]:
        return self.db.get(Confession, confession_id)

    def list_approved(self, category: Optional[str] = None, limit: int = 50) -> List[Confession]:
        stmt = select(Confession).where(Confession.is_approved.is_(True))
        if category is not None:
            stmt = stmt.where(Confession.category == category)
        stmt = stmt.order_by(Confession.created_at.desc()).limit(limit)
        return self.db.execute(stmt).scalars().all()

    def get_like(self, confession_id: uuid.UUID, user_id: str) -> Optional[ConfessionLike]:
        stmt = select(ConfessionLike).where(
            ConfessionLike.confession_id == confession_id,
            ConfessionLike.user_id == user_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def toggle_like(self, confession: Confession, user_id: str) -> bool:
        """Like or unlike; returns True when the user now likes the confession."""
        existing = self.get_like(confession.id, user_id)
        if existing:
            self.db.delete(existing)
            confession.likes = max(0, (confession.likes or 0) - 1)
            liked = False
        else:
            self.db.add(ConfessionLike(confession_id=confession.id, user_id=user_id))
            confession.likes = (confession.likes or 0) + 1
            liked = True
        self.db.flush()
        return liked

    def get_report(self, confession_id: uuid.UUID, user_id: str) -> Optional[ConfessionReport]:
        stmt = select(ConfessionReport).where(
            ConfessionReport.confession_id == confession_id,
            ConfessionReport.user_id == user_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def add_report(self, confession: Confession, user_id: str, reason: str) -> ConfessionReport:
        report = ConfessionReport(confession_id=confession.id, user_id=user_id, reason=reason)
        self.db.add(report)
        confession.reports = (confession.reports or 0) + 1
        self.db.flush()
        return report

    def delete(self, confession: Confession) -> None:
        self.db.delete(confession)
        self.db.flush()
        logger.info(f"Deleted confession {confession.id}")
