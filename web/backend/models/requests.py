#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, Field
from typing import List, Literal, Optional

ConfessionCategory = Literal[
    "unsent-messages",
    "college-truths",
    "almost-confessed",
    "guilty-pleasures",
    "gratitude-notes",
]


class ModerationPreviewRequest(BaseModel):
    """Text to check before posting."""
    content: str


class ConfessionCreateRequest(BaseModel):
    content: str
    category: ConfessionCategory
    user_id: str = Field(..., min_length=1, description="Author; stored but never returned")


class UserActionRequest(BaseModel):
    """Body for actions that only need the acting user."""
    user_id: str = Field(..., min_length=1)


class ReportRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    reason: str = Field(..., min_length=1, max_length=500)


class ProfileRequest(BaseModel):
    """Matrimony profile as submitted by the client."""
    user_id: str = Field(..., min_length=1)
    cgpa: float = Field(ge=0, le=4.0, description="CGPA on a 0-4.0 scale")
    branch: Literal["CSE", "IT", "ECE", "EEE", "ME", "CE", "Other"]
    year: int = Field(ge=1, le=4)
    study_style: Literal["early-bird", "night-owl", "balanced", "crammer", "consistent"]
    personality: List[Literal["introverted", "extroverted", "ambivert", "analytical", "creative", "practical"]] = Field(
        default_factory=list
    )
    connection_types: List[Literal["dating", "friends", "study-partner"]] = Field(default_factory=list)
    bio: Optional[str] = Field(None, max_length=500)
    is_active: bool = True


class CompatibilityRequest(BaseModel):
    """Two profiles to score without saving anything."""
    profile1: ProfileRequest
    profile2: ProfileRequest


class MatchStatusRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    status: Literal["accepted", "rejected", "blocked"]


class TimetableEntryRequest(BaseModel):
    day: Literal["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
    start_time: str = Field(..., pattern=r"^\d{1,2}:\d{2}$", description="HH:MM")
    end_time: str = Field(..., pattern=r"^\d{1,2}:\d{2}$", description="HH:MM")
    subject: str = Field(..., min_length=1)
    room: Optional[str] = None
    subject_code: Optional[str] = None
    faculty: Optional[str] = None
    batch: Optional[str] = None
    entry_type: str = "lecture"


class ScheduleCreateRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    entries: List[TimetableEntryRequest] = Field(..., min_length=1)


class DismissAlertRequest(BaseModel):
    """Alerts are identified by (type, title), the same key used for deduplication."""
    user_id: str = Field(..., min_length=1)
    type: Literal["class_reminder", "attendance_warning", "upcoming_deadline"]
    title: str = Field(..., min_length=1)


class ChatMessageRequest(BaseModel):
    user_id: str = Field(..., min_length=1, description="Sender; must be a participant of the match")
    message: str = Field(..., min_length=1, max_length=1000)
    is_anonymous: bool = True
