#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class ModerationResponse(BaseModel):
    success: bool = True
    is_valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    sanitized_content: str


class ConfessionSummary(BaseModel):
    """A confession as shown in the feed. The author is never exposed."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "confession_id": "550e8400-e29b-41d4-a716-446655440000",
                "content": "I still have the notes you lent me in first year.",
                "category": "unsent-messages",
                "likes": 12,
                "created_at": "2026-02-01T12:00:00+00:00"
            }
        }
    )

    confession_id: str
    content: str
    category: str
    likes: int = Field(ge=0)
    created_at: Optional[str]


class ConfessionCreateResponse(BaseModel):
    success: bool
    confession: ConfessionSummary
    warnings: List[str] = Field(default_factory=list)


class ConfessionsResponse(BaseModel):
    success: bool
    count: int
    confessions: List[ConfessionSummary]


class LikeResponse(BaseModel):
    success: bool
    confession_id: str
    liked: bool
    likes: int = Field(ge=0)


class ActionResponse(BaseModel):
    """Generic acknowledgement."""
    success: bool
    message: str


class ProfileResponse(BaseModel):
    success: bool
    profile: dict
    cgpa_league: str


class CompatibilityResponse(BaseModel):
    success: bool
    score: int = Field(ge=0, le=100)
    reasons: List[str]


class MatchSummary(BaseModel):
    match_id: str
    user1_id: str
    user2_id: str
    compatibility_score: int = Field(ge=0, le=100)
    cgpa_league: str
    match_reasons: List[str]
    connection_type: str
    status: str
    created_at: Optional[str]
    updated_at: Optional[str]


class MatchesResponse(BaseModel):
    success: bool
    count: int
    matches: List[MatchSummary]


class MatchStatusResponse(BaseModel):
    success: bool
    match_id: str
    status: str


class ChatMessageSummary(BaseModel):
    message_id: str
    match_id: str
    sender_id: str
    message: str
    is_anonymous: bool
    created_at: Optional[str]


class ChatMessagesResponse(BaseModel):
    success: bool
    count: int
    messages: List[ChatMessageSummary]


class ScheduleEntrySummary(BaseModel):
    entry_id: str
    day: str
    start_time: str
    end_time: str
    subject: str
    room: Optional[str] = None
    subject_code: Optional[str] = None
    faculty: Optional[str] = None
    batch: Optional[str] = None
    entry_type: str


class ScheduleResponse(BaseModel):
    success: bool
    count: int
    entries: List[ScheduleEntrySummary]


class AlertSummary(BaseModel):
    type: str
    title: str
    message: str
    priority: str
    timestamp: str
    action_url: Optional[str] = None


class AlertsResponse(BaseModel):
    success: bool
    count: int
    alerts: List[AlertSummary]
