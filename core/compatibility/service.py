#!/usr/bin/env python3
"""
Matching Service - Candidate ranking and match status lifecycle.

Pure functions over profiles; persistence of the resulting matches is the
caller's job (see web.backend.services.matrimony_service).
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from core.config_loader import CompatibilityConfig
from core.compatibility.models import Profile, MatchCandidate, MatchStatus
from core.compatibility.scoring import calculate_compatibility, get_cgpa_league, shared_connection_types

logger = logging.getLogger(__name__)

# A match is created pending and only ever moves forward.
ALLOWED_TRANSITIONS: Dict[MatchStatus, frozenset] = {
    MatchStatus.PENDING: frozenset({MatchStatus.ACCEPTED, MatchStatus.REJECTED, MatchStatus.BLOCKED}),
    MatchStatus.ACCEPTED: frozenset({MatchStatus.BLOCKED}),
    MatchStatus.REJECTED: frozenset(),
    MatchStatus.BLOCKED: frozenset(),
}


def can_transition(current: MatchStatus, new: MatchStatus) -> bool:
    return new in ALLOWED_TRANSITIONS.get(current, frozenset())


def pair_key(user_a: str, user_b: str) -> Tuple[str, str]:
    """Direction-independent key for a pair of users."""
    return (user_a, user_b) if user_a <= user_b else (user_b, user_a)


def rank_candidates(
    profile: Profile,
    candidates: Iterable[Profile],
    existing_statuses: Optional[Dict[Tuple[str, str], MatchStatus]] = None,
    config: Optional[CompatibilityConfig] = None
) -> List[MatchCandidate]:
    """
    Score candidates for a user and keep the best ones.

    Args:
        profile: The searching user's profile (reasons are phrased from its side)
        candidates: Profiles to consider
        existing_statuses: Status of already-created matches keyed by pair_key()
        config: Ranking policy, defaults to CompatibilityConfig()

    Returns:
        Candidates sorted by score descending, at most config.max_results
    """
    config = config or CompatibilityConfig()
    existing_statuses = existing_statuses or {}
    ranked: List[MatchCandidate] = []

    for candidate in candidates:
        if candidate.user_id == profile.user_id or not candidate.is_active:
            continue

        status = existing_statuses.get(pair_key(profile.user_id, candidate.user_id))
        if status is not None and status != MatchStatus.REJECTED:
            continue

        shared = shared_connection_types(profile, candidate)
        if not shared:
            continue

        result = calculate_compatibility(profile, candidate)
        if result.score < config.min_match_score:
            continue

        ranked.append(MatchCandidate(
            profile=candidate,
            result=result,
            connection_type=shared[0],
            cgpa_league=get_cgpa_league(candidate.cgpa),
        ))

    # sort() is stable: equal scores keep candidate order
    ranked.sort(key=lambda c: c.result.score, reverse=True)
    logger.info(f"Ranked {len(ranked)} candidates for {profile.user_id}")
    return ranked[:config.max_results]
