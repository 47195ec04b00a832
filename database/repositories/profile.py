import logging
from typing import List, Optional
from sqlalchemy import select

from core.compatibility import Profile
from database.models import MatrimonyProfile
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ProfileRepository(BaseRepository):
    def get_profile(self, user_id: str) -> Optional[MatrimonyProfile]:
        return self.db.get(MatrimonyProfile, user_id)

    def upsert_profile(self, profile: Profile) -> MatrimonyProfile:
        """Create or update a user's profile; verification and reports are untouched on update."""
        row = self.get_profile(profile.user_id)
        data = profile.to_dict()
        data.pop('user_id')

        if row is None:
            row = MatrimonyProfile(user_id=profile.user_id, **data)
            self.db.add(row)
            logger.info(f"Created matrimony profile for {profile.user_id}")
        else:
            for key, value in data.items():
                setattr(row, key, value)
            logger.info(f"Updated matrimony profile for {profile.user_id}")

        self.db.flush()
        return row

    def get_active_profiles(self, exclude_user_id: Optional[str] = None, limit: int = 50) -> List[MatrimonyProfile]:
        stmt = select(MatrimonyProfile).where(MatrimonyProfile.is_active.is_(True))
        if exclude_user_id is not None:
            stmt = stmt.where(MatrimonyProfile.user_id != exclude_user_id)
        stmt = stmt.order_by(MatrimonyProfile.updated_at.desc()).limit(limit)
        return self.db.execute(stmt).scalars().all()

    @staticmethod
    def to_profile(row: MatrimonyProfile) -> Profile:
        return Profile(
            user_id=row.user_id,
            cgpa=row.cgpa,
            branch=row.branch,
            year=row.year,
            study_style=row.study_style,
            personality=tuple(row.personality or ()),
            connection_types=tuple(row.connection_types or ()),
            bio=row.bio,
            is_active=bool(row.is_active),
        )
