#!/usr/bin/env python3
"""
Matrimony service - profiles, candidate matching, the match lifecycle and chat.
"""

import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from core.config_loader import CompatibilityConfig
from core.compatibility import (
    Profile,
    CompatibilityResult,
    MatchCandidate,
    MatchStatus,
    calculate_compatibility,
    get_cgpa_league,
    rank_candidates,
    can_transition,
)
from core.compatibility.scoring import shared_connection_types
from database.models import ChatMessage, Match
from database.repositories import ProfileRepository, MatchRepository
from ..models.requests import ProfileRequest
from ..models.responses import ChatMessageSummary, MatchSummary
from ..utils import safe_datetime_iso
from ..exceptions import (
    NotFoundException,
    PermissionDeniedException,
    InvalidTransitionException,
    InvalidInputException,
    DuplicateReportException
)

logger = logging.getLogger(__name__)


def to_profile(request: ProfileRequest) -> Profile:
    try:
        return Profile(**request.model_dump())
    except ValueError as e:
        raise InvalidInputException(str(e))


class MatrimonyService:
    """Service for matrimony profiles and matches."""

    def __init__(self, db: Session, config: Optional[CompatibilityConfig] = None):
        self.db = db
        self.profiles = ProfileRepository(db)
        self.matches = MatchRepository(db)
        self.config = config or CompatibilityConfig()

    # --- Profiles ---

    def save_profile(self, request: ProfileRequest) -> Profile:
        profile = to_profile(request)
        self.profiles.upsert_profile(profile)
        self.db.commit()
        return profile

    def get_profile(self, user_id: str) -> Profile:
        row = self.profiles.get_profile(user_id)
        if not row:
            raise NotFoundException(f"Profile for {user_id} not found")
        return self.profiles.to_profile(row)

    @staticmethod
    def score(request1: ProfileRequest, request2: ProfileRequest) -> CompatibilityResult:
        return calculate_compatibility(to_profile(request1), to_profile(request2))

    @staticmethod
    def league(profile: Profile) -> str:
        return get_cgpa_league(profile.cgpa)

    # --- Matches ---

    def find_matches(self, user_id: str) -> List[MatchSummary]:
        """
        Rank active profiles against the user and persist the results.

        Pairs that were rejected before are scored again; when a rejected
        match already exists for the pair it is reopened as pending with
        the new score instead of inserting a second row.
        """
        profile = self.get_profile(user_id)

        pool = [
            self.profiles.to_profile(row)
            for row in self.profiles.get_active_profiles(
                exclude_user_id=user_id,
                limit=self.config.candidate_pool_size
            )
        ]
        existing = self.matches.get_statuses_for_user(user_id)
        ranked = rank_candidates(profile, pool, existing, self.config)

        created: List[Match] = []
        for candidate in ranked:
            previous = self.matches.get_existing_match(user_id, candidate.profile.user_id)
            if previous is not None:
                created.append(self._reopen(previous, profile, candidate))
            else:
                created.append(self.matches.create_match(user_id, candidate))

        self.db.commit()
        logger.info(f"Stored {len(created)} matches for {user_id}")
        return [self._to_summary(m) for m in created]

    def _reopen(self, match: Match, profile: Profile, candidate: MatchCandidate) -> Match:
        """
        Rescore a rejected match and set it back to pending.

        The row keeps its user1/user2 order, so when the other user created
        it the reasons, league and connection type are taken from their side.
        """
        if match.user1_id == profile.user_id:
            result, connection_type, league = candidate.result, candidate.connection_type, candidate.cgpa_league
        else:
            result = calculate_compatibility(candidate.profile, profile)
            connection_type = shared_connection_types(candidate.profile, profile)[0]
            league = get_cgpa_league(profile.cgpa)

        match.compatibility_score = result.score
        match.match_reasons = list(result.reasons)
        match.connection_type = connection_type.value
        match.cgpa_league = league
        return self.matches.set_status(match, MatchStatus.PENDING)

    def get_matches(self, user_id: str) -> List[MatchSummary]:
        return [self._to_summary(m) for m in self.matches.get_matches_for_user(user_id, status='accepted')]

    def _get_match_for_participant(self, match_id: str, user_id: str) -> Match:
        match = self.matches.get_match_by_id(match_id)
        if not match:
            raise NotFoundException(f"Match {match_id} not found")
        if user_id not in (match.user1_id, match.user2_id):
            raise PermissionDeniedException(f"User {user_id} is not part of match {match_id}")
        return match

    def update_status(self, match_id: str, user_id: str, status: str) -> MatchSummary:
        match = self._get_match_for_participant(match_id, user_id)
        current, new = MatchStatus(match.status), MatchStatus(status)

        if not can_transition(current, new):
            raise InvalidTransitionException(
                f"Cannot change match from {current.value} to {new.value}"
            )

        self.matches.set_status(match, new)
        self.db.commit()
        return self._to_summary(match)

    def report_match(self, match_id: str, user_id: str, reason: str) -> MatchSummary:
        """File a report and block the match, whatever its current status."""
        match = self._get_match_for_participant(match_id, user_id)
        if self.matches.get_report(match_id, user_id):
            raise DuplicateReportException(f"User already reported match {match_id}")

        self.matches.add_report(match_id, user_id, reason)
        if match.status != MatchStatus.BLOCKED.value:
            self.matches.set_status(match, MatchStatus.BLOCKED)
        self.db.commit()
        return self._to_summary(match)

    # --- Chat ---

    def _get_chat_match(self, match_id: str, user_id: str) -> Match:
        match = self._get_match_for_participant(match_id, user_id)
        if match.status != MatchStatus.ACCEPTED.value:
            raise PermissionDeniedException(f"Chat is only open on accepted matches (match is {match.status})")
        return match

    def send_message(self, match_id: str, user_id: str, message: str, is_anonymous: bool = True) -> ChatMessageSummary:
        match = self._get_chat_match(match_id, user_id)
        text = message.strip()
        if not text:
            raise InvalidInputException("Message cannot be empty")

        chat_message = self.matches.add_message(match.id, user_id, text, is_anonymous)
        self.db.commit()
        logger.info(f"Message {chat_message.id} sent on match {match.id}")
        return self._to_message_summary(chat_message)

    def get_messages(self, match_id: str, user_id: str) -> List[ChatMessageSummary]:
        match = self._get_chat_match(match_id, user_id)
        return [self._to_message_summary(m) for m in self.matches.get_messages(match.id)]

    @staticmethod
    def _to_message_summary(chat_message: ChatMessage) -> ChatMessageSummary:
        return ChatMessageSummary(
            message_id=str(chat_message.id),
            match_id=chat_message.match_id,
            sender_id=chat_message.sender_id,
            message=chat_message.message,
            is_anonymous=chat_message.is_anonymous,
            created_at=safe_datetime_iso(chat_message.created_at)
        )

    @staticmethod
    def _to_summary(match: Match) -> MatchSummary:
        return MatchSummary(
            match_id=match.id,
            user1_id=match.user1_id,
            user2_id=match.user2_id,
            compatibility_score=match.compatibility_score,
            cgpa_league=match.cgpa_league,
            match_reasons=list(match.match_reasons or []),
            connection_type=match.connection_type,
            status=match.status,
            created_at=safe_datetime_iso(match.created_at),
            updated_at=safe_datetime_iso(match.updated_at)
        )
