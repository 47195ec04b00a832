#!/usr/bin/env python3
"""
Compatibility Models - Profiles, match statuses and scoring results.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Dict, Any, Iterable


class Branch(Enum):
    CSE = "CSE"
    IT = "IT"
    ECE = "ECE"
    EEE = "EEE"
    ME = "ME"
    CE = "CE"
    OTHER = "Other"


class StudyStyle(Enum):
    EARLY_BIRD = "early-bird"
    NIGHT_OWL = "night-owl"
    BALANCED = "balanced"
    CRAMMER = "crammer"
    CONSISTENT = "consistent"


class PersonalityType(Enum):
    INTROVERTED = "introverted"
    EXTROVERTED = "extroverted"
    AMBIVERT = "ambivert"
    ANALYTICAL = "analytical"
    CREATIVE = "creative"
    PRACTICAL = "practical"


class ConnectionType(Enum):
    DATING = "dating"
    FRIENDS = "friends"
    STUDY_PARTNER = "study-partner"


class MatchStatus(Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    BLOCKED = "blocked"


PERSONALITY_LABELS: Dict[PersonalityType, str] = {
    PersonalityType.INTROVERTED: "Introverted",
    PersonalityType.EXTROVERTED: "Extroverted",
    PersonalityType.AMBIVERT: "Ambivert",
    PersonalityType.ANALYTICAL: "Analytical",
    PersonalityType.CREATIVE: "Creative",
    PersonalityType.PRACTICAL: "Practical",
}

CONNECTION_LABELS: Dict[ConnectionType, str] = {
    ConnectionType.DATING: "Dating",
    ConnectionType.FRIENDS: "Friends",
    ConnectionType.STUDY_PARTNER: "Study Partner",
}


def _unique(values: Iterable) -> Tuple:
    """Drop duplicates, keep first-seen order."""
    seen = []
    for v in values:
        if v not in seen:
            seen.append(v)
    return tuple(seen)


@dataclass(frozen=True)
class Profile:
    """
    Matrimony profile used as compatibility input.

    String values are coerced to their enums so profiles can be built
    straight from request payloads or database rows.

    Attributes:
        user_id: Owner of the profile
        cgpa: Cumulative grade point average on a 0-4.0 scale
        branch: Engineering branch
        year: Year of study, 1-4
        study_style: Preferred study schedule
        personality: Personality tags (order preserved, duplicates dropped)
        connection_types: Kinds of connection the user is looking for
        bio: Optional free text
        is_active: Inactive profiles are never offered as candidates
    """
    user_id: str
    cgpa: float
    branch: Branch
    year: int
    study_style: StudyStyle
    personality: Tuple[PersonalityType, ...] = ()
    connection_types: Tuple[ConnectionType, ...] = ()
    bio: Optional[str] = None
    is_active: bool = True

    def __post_init__(self):
        # frozen dataclass: normalize through object.__setattr__
        if not isinstance(self.branch, Branch):
            object.__setattr__(self, 'branch', Branch(self.branch))
        if not isinstance(self.study_style, StudyStyle):
            object.__setattr__(self, 'study_style', StudyStyle(self.study_style))
        object.__setattr__(self, 'year', int(self.year))
        object.__setattr__(self, 'cgpa', float(self.cgpa))
        object.__setattr__(self, 'personality', _unique(
            p if isinstance(p, PersonalityType) else PersonalityType(p)
            for p in (self.personality or ())
        ))
        object.__setattr__(self, 'connection_types', _unique(
            c if isinstance(c, ConnectionType) else ConnectionType(c)
            for c in (self.connection_types or ())
        ))

        if not 0.0 <= self.cgpa <= 4.0:
            raise ValueError(f"cgpa must be between 0 and 4.0, got {self.cgpa}")
        if not 1 <= self.year <= 4:
            raise ValueError(f"year must be between 1 and 4, got {self.year}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "cgpa": self.cgpa,
            "branch": self.branch.value,
            "year": self.year,
            "study_style": self.study_style.value,
            "personality": [p.value for p in self.personality],
            "connection_types": [c.value for c in self.connection_types],
            "bio": self.bio,
            "is_active": self.is_active,
        }


@dataclass
class CompatibilityResult:
    """Score in [0, 100] with reasons phrased from the first profile's side."""
    score: int
    reasons: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "reasons": list(self.reasons)}


@dataclass
class MatchCandidate:
    """A scored candidate that passed the ranking filters."""
    profile: Profile
    result: CompatibilityResult
    connection_type: ConnectionType
    cgpa_league: str
