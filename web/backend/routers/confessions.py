#!/usr/bin/env python3
"""
Confession endpoints - moderated anonymous posts.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from ..config import get_config
from ..dependencies import get_db
from ..services.confession_service import ConfessionService
from ..models.requests import (
    ConfessionCategory,
    ConfessionCreateRequest,
    ModerationPreviewRequest,
    ReportRequest,
    UserActionRequest
)
from ..models.responses import (
    ActionResponse,
    ConfessionCreateResponse,
    ConfessionsResponse,
    LikeResponse,
    ModerationResponse
)

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/api/confessions", tags=["confessions"])


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": f"Rate limit exceeded: {exc.detail}",
            "type": "RateLimitExceeded"
        }
    )


def _service(db: Session) -> ConfessionService:
    return ConfessionService(db, get_config().moderation)


@router.post("/moderate", response_model=ModerationResponse)
def preview_moderation(body: ModerationPreviewRequest, db: Session = Depends(get_db)):
    """
    Check a draft without posting it.

    Returns the sanitized text that would be stored and the verdict.
    """
    sanitized, result = _service(db).preview(body.content)
    return ModerationResponse(
        success=True,
        is_valid=result.is_valid,
        errors=result.errors,
        warnings=result.warnings,
        sanitized_content=sanitized
    )


@router.post("", response_model=ConfessionCreateResponse)
@limiter.limit(lambda: get_config().web.confession_rate_limit)
def create_confession(
    request: Request,
    body: ConfessionCreateRequest,
    db: Session = Depends(get_db)
):
    """
    Post a confession.

    The text is sanitized and moderated first; any moderation error rejects
    the post with 400. Warnings are stored and echoed back.
    """
    confession, warnings = _service(db).create_confession(body.content, body.category, body.user_id)
    return ConfessionCreateResponse(success=True, confession=confession, warnings=warnings)


@router.get("", response_model=ConfessionsResponse)
def list_confessions(
    category: Optional[ConfessionCategory] = Query(default=None, description="Filter by category"),
    limit: int = Query(default=50, ge=1, le=200, description="Maximum results to return"),
    db: Session = Depends(get_db)
):
    """Approved confessions, newest first."""
    confessions = _service(db).list_confessions(category=category, limit=limit)
    return ConfessionsResponse(success=True, count=len(confessions), confessions=confessions)


@router.post("/{confession_id}/like", response_model=LikeResponse)
def toggle_like(confession_id: str, body: UserActionRequest, db: Session = Depends(get_db)):
    liked, likes = _service(db).toggle_like(confession_id, body.user_id)
    return LikeResponse(success=True, confession_id=confession_id, liked=liked, likes=likes)


@router.post("/{confession_id}/report", response_model=ActionResponse)
def report_confession(confession_id: str, body: ReportRequest, db: Session = Depends(get_db)):
    _service(db).report(confession_id, body.user_id, body.reason)
    return ActionResponse(success=True, message="Confession reported")


@router.delete("/{confession_id}", response_model=ActionResponse)
def delete_confession(
    confession_id: str,
    user_id: str = Query(..., min_length=1, description="Must be the author"),
    db: Session = Depends(get_db)
):
    _service(db).delete(confession_id, user_id)
    return ActionResponse(success=True, message="Confession deleted")
