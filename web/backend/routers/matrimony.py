#!/usr/bin/env python3
"""
Matrimony endpoints - profiles, compatibility, matches and match chat.
"""

import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..config import get_config
from ..dependencies import get_db
from ..services.matrimony_service import MatrimonyService
from ..models.requests import (
    ChatMessageRequest,
    CompatibilityRequest,
    MatchStatusRequest,
    ProfileRequest,
    ReportRequest,
    UserActionRequest
)
from ..models.responses import (
    ChatMessagesResponse,
    ChatMessageSummary,
    CompatibilityResponse,
    MatchesResponse,
    MatchStatusResponse,
    ProfileResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/matrimony", tags=["matrimony"])


def _service(db: Session) -> MatrimonyService:
    return MatrimonyService(db, get_config().compatibility)


@router.put("/profile", response_model=ProfileResponse)
def save_profile(body: ProfileRequest, db: Session = Depends(get_db)):
    """Create or replace the caller's profile."""
    service = _service(db)
    profile = service.save_profile(body)
    return ProfileResponse(success=True, profile=profile.to_dict(), cgpa_league=service.league(profile))


@router.get("/profile/{user_id}", response_model=ProfileResponse)
def get_profile(user_id: str, db: Session = Depends(get_db)):
    service = _service(db)
    profile = service.get_profile(user_id)
    return ProfileResponse(success=True, profile=profile.to_dict(), cgpa_league=service.league(profile))


@router.post("/compatibility", response_model=CompatibilityResponse)
def score_compatibility(body: CompatibilityRequest):
    """
    Score two profiles without storing anything.

    Reasons are phrased from profile1's side.
    """
    result = MatrimonyService.score(body.profile1, body.profile2)
    return CompatibilityResponse(success=True, score=result.score, reasons=result.reasons)


@router.post("/matches/find", response_model=MatchesResponse)
def find_matches(body: UserActionRequest, db: Session = Depends(get_db)):
    """
    Rank active profiles against the user and store the best as pending matches.
    """
    matches = _service(db).find_matches(body.user_id)
    return MatchesResponse(success=True, count=len(matches), matches=matches)


@router.get("/matches", response_model=MatchesResponse)
def get_matches(
    user_id: str = Query(..., min_length=1, description="Participant whose accepted matches to list"),
    db: Session = Depends(get_db)
):
    """Accepted matches involving the user, most recently updated first."""
    matches = _service(db).get_matches(user_id)
    return MatchesResponse(success=True, count=len(matches), matches=matches)


@router.post("/matches/{match_id}/status", response_model=MatchStatusResponse)
def update_match_status(match_id: str, body: MatchStatusRequest, db: Session = Depends(get_db)):
    match = _service(db).update_status(match_id, body.user_id, body.status)
    return MatchStatusResponse(success=True, match_id=match.match_id, status=match.status)


@router.post("/matches/{match_id}/report", response_model=MatchStatusResponse)
def report_match(match_id: str, body: ReportRequest, db: Session = Depends(get_db)):
    """Report the other participant; the match is blocked."""
    match = _service(db).report_match(match_id, body.user_id, body.reason)
    return MatchStatusResponse(success=True, match_id=match.match_id, status=match.status)


@router.post("/matches/{match_id}/messages", response_model=ChatMessageSummary)
def send_message(match_id: str, body: ChatMessageRequest, db: Session = Depends(get_db)):
    """Post a chat message; only participants of an accepted match may chat."""
    return _service(db).send_message(match_id, body.user_id, body.message, body.is_anonymous)


@router.get("/matches/{match_id}/messages", response_model=ChatMessagesResponse)
def get_messages(
    match_id: str,
    user_id: str = Query(..., min_length=1, description="Participant reading the conversation"),
    db: Session = Depends(get_db)
):
    """Chat history of an accepted match, oldest first."""
    messages = _service(db).get_messages(match_id, user_id)
    return ChatMessagesResponse(success=True, count=len(messages), messages=messages)
