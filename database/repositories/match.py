import logging
from typing import Dict, List, Optional, Tuple
from sqlalchemy import select, or_

from core.compatibility import MatchCandidate, MatchStatus, pair_key
from database.models import ChatMessage, Match, MatchReport
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def build_match_id(user1_id: str, user2_id: str) -> str:
    return f"{user1_id}_{user2_id}"


class MatchRepository(BaseRepository):
    def get_match_by_id(self, match_id: str) -> Optional[Match]:
        return self.db.get(Match, match_id)

    def get_existing_match(self, user_a: str, user_b: str) -> Optional[Match]:
        """Match between two users regardless of who searched first."""
        return (
            self.get_match_by_id(build_match_id(user_a, user_b))
            or self.get_match_by_id(build_match_id(user_b, user_a))
        )

    def get_statuses_for_user(self, user_id: str) -> Dict[Tuple[str, str], MatchStatus]:
        """Status of every match the user takes part in, keyed by pair_key()."""
        stmt = select(Match).where(or_(Match.user1_id == user_id, Match.user2_id == user_id))
        return {
            pair_key(m.user1_id, m.user2_id): MatchStatus(m.status)
            for m in self.db.execute(stmt).scalars().all()
        }

    def create_match(self, user_id: str, candidate: MatchCandidate) -> Match:
        match = Match(
            id=build_match_id(user_id, candidate.profile.user_id),
            user1_id=user_id,
            user2_id=candidate.profile.user_id,
            compatibility_score=candidate.result.score,
            cgpa_league=candidate.cgpa_league,
            match_reasons=list(candidate.result.reasons),
            connection_type=candidate.connection_type.value,
            status=MatchStatus.PENDING.value,
        )
        self.db.add(match)
        self.db.flush()
        return match

    def get_matches_for_user(self, user_id: str, status: Optional[str] = 'accepted') -> List[Match]:
        stmt = select(Match).where(or_(Match.user1_id == user_id, Match.user2_id == user_id))

        if status is not None:
            stmt = stmt.where(Match.status == status)

        stmt = stmt.order_by(Match.updated_at.desc())
        return self.db.execute(stmt).scalars().all()

    def set_status(self, match: Match, status: MatchStatus) -> Match:
        previous = match.status
        match.status = status.value
        self.db.flush()
        logger.info(f"Match {match.id}: {previous} -> {status.value}")
        return match

    def get_report(self, match_id: str, reporter_id: str) -> Optional[MatchReport]:
        stmt = select(MatchReport).where(
            MatchReport.match_id == match_id,
            MatchReport.reporter_id == reporter_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def add_report(self, match_id: str, reporter_id: str, reason: str) -> MatchReport:
        report = MatchReport(match_id=match_id, reporter_id=reporter_id, reason=reason)
        self.db.add(report)
        self.db.flush()
        return report

    def add_message(self, match_id: str, sender_id: str, message: str, is_anonymous: bool = True) -> ChatMessage:
        chat_message = ChatMessage(
            match_id=match_id,
            sender_id=sender_id,
            message=message,
            is_anonymous=is_anonymous,
        )
        self.db.add(chat_message)
        self.db.flush()
        return chat_message

    def get_messages(self, match_id: str, limit: int = 200) -> List[ChatMessage]:
        """Messages of a match, oldest first."""
        stmt = (
            select(ChatMessage)
            .where(ChatMessage.match_id == match_id)
            .order_by(ChatMessage.created_at.asc())
            .limit(limit)
        )
        return self.db.execute(stmt).scalars().all()
