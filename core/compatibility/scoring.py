#!/usr/bin/env python3
"""
Compatibility Scoring - Rule-based pairwise profile scoring.

Each factor returns (points, reason_or_None). The total is clamped to 100
only after every factor, including the connection-type bonus, is summed.

Scoring is order-sensitive: reasons are phrased from profile1's side and
shared traits are listed in profile1's order.
"""

import logging
from typing import List, Optional, Tuple

from core.compatibility.models import (
    Profile,
    CompatibilityResult,
    StudyStyle,
    PERSONALITY_LABELS,
    CONNECTION_LABELS,
)

logger = logging.getLogger(__name__)

MAX_SCORE = 100
PERSONALITY_POINTS_PER_TRAIT = 7
PERSONALITY_POINTS_CAP = 20
CONNECTION_BONUS = 10
FALLBACK_REASON = "Potential match based on campus proximity"

COMPLEMENTARY_STUDY_STYLES = {
    frozenset({StudyStyle.EARLY_BIRD, StudyStyle.BALANCED}),
    frozenset({StudyStyle.NIGHT_OWL, StudyStyle.BALANCED}),
}

FactorScore = Tuple[int, Optional[str]]


def score_cgpa(profile1: Profile, profile2: Profile) -> FactorScore:
    cgpa_diff = abs(profile1.cgpa - profile2.cgpa)
    if cgpa_diff <= 0.5:
        return 30, "Similar academic performance"
    if cgpa_diff <= 1.0:
        return 20, "Close academic levels"
    if cgpa_diff <= 1.5:
        return 10, None
    return 0, None


def score_branch(profile1: Profile, profile2: Profile) -> FactorScore:
    if profile1.branch == profile2.branch:
        return 20, "Same branch - shared interests"
    return 5, None


def score_year(profile1: Profile, profile2: Profile) -> FactorScore:
    if profile1.year == profile2.year:
        return 15, "Same year - similar experiences"
    if abs(profile1.year - profile2.year) == 1:
        return 10, "Adjacent years - good mentorship potential"
    return 0, None


def score_study_style(profile1: Profile, profile2: Profile) -> FactorScore:
    if profile1.study_style == profile2.study_style:
        return 15, "Matching study styles"
    if frozenset({profile1.study_style, profile2.study_style}) in COMPLEMENTARY_STUDY_STYLES:
        return 10, "Complementary study schedules"
    return 0, None


def score_personality(profile1: Profile, profile2: Profile) -> FactorScore:
    shared = [p for p in profile1.personality if p in profile2.personality]
    if not shared:
        return 0, None
    points = min(PERSONALITY_POINTS_CAP, len(shared) * PERSONALITY_POINTS_PER_TRAIT)
    return points, f"Shared traits: {', '.join(PERSONALITY_LABELS[p] for p in shared)}"


def shared_connection_types(profile1: Profile, profile2: Profile) -> list:
    """Connection types wanted by both, in profile1's order."""
    return [c for c in profile1.connection_types if c in profile2.connection_types]


def score_connection_types(profile1: Profile, profile2: Profile) -> FactorScore:
    shared = shared_connection_types(profile1, profile2)
    if not shared:
        return 0, None
    return CONNECTION_BONUS, f"Both looking for: {', '.join(CONNECTION_LABELS[c] for c in shared)}"


FACTORS = (
    score_cgpa,
    score_branch,
    score_year,
    score_study_style,
    score_personality,
    score_connection_types,
)


def calculate_compatibility(profile1: Profile, profile2: Profile) -> CompatibilityResult:
    """
    Score two profiles against the compatibility rubric.

    Returns:
        CompatibilityResult with score in [0, 100] and at least one reason
    """
    total = 0
    reasons: List[str] = []

    for factor in FACTORS:
        points, reason = factor(profile1, profile2)
        total += points
        if reason:
            reasons.append(reason)

    score = min(MAX_SCORE, total)
    logger.debug(f"Compatibility {profile1.user_id} -> {profile2.user_id}: raw={total} score={score}")

    return CompatibilityResult(score=score, reasons=reasons or [FALLBACK_REASON])


def get_cgpa_league(cgpa: float) -> str:
    """Band a 0-4.0 CGPA into one of five display leagues."""
    if cgpa >= 3.5:
        return "Elite (3.5-4.0)"
    if cgpa >= 3.0:
        return "Excellent (3.0-3.49)"
    if cgpa >= 2.5:
        return "Good (2.5-2.99)"
    if cgpa >= 2.0:
        return "Average (2.0-2.49)"
    return "Below Average (<2.0)"
