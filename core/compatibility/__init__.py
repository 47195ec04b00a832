#!/usr/bin/env python3
"""
Compatibility Module - Pairwise profile scoring for campus matchmaking.

Public API:
- calculate_compatibility: 0-100 score with reasons
- get_cgpa_league: CGPA display banding
- rank_candidates: Filter, score and rank candidate profiles
- can_transition: Match status lifecycle check

- models.py: Profile, CompatibilityResult, MatchCandidate and enums
- scoring.py: Per-factor scoring rubric
- service.py: Candidate ranking and status transitions
"""

from core.compatibility.models import (
    Profile,
    CompatibilityResult,
    MatchCandidate,
    Branch,
    StudyStyle,
    PersonalityType,
    ConnectionType,
    MatchStatus,
)
from core.compatibility.scoring import calculate_compatibility, get_cgpa_league
from core.compatibility.service import rank_candidates, can_transition, pair_key

__all__ = [
    'Profile',
    'CompatibilityResult',
    'MatchCandidate',
    'Branch',
    'StudyStyle',
    'PersonalityType',
    'ConnectionType',
    'MatchStatus',
    'calculate_compatibility',
    'get_cgpa_league',
    'rank_candidates',
    'can_transition',
    'pair_key',
]
