#!/usr/bin/env python3
"""
Custom exceptions and error handlers for the web application.
"""

import logging
from typing import List, Optional
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceException(Exception):
    """Base exception for service layer errors."""
    status_code = 500


class NotFoundException(ServiceException):
    """Raised when a confession, profile, match or schedule entry is missing."""
    status_code = 404


class PermissionDeniedException(ServiceException):
    """Raised when a user acts on something they do not own or take part in."""
    status_code = 403


class InvalidTransitionException(ServiceException):
    """Raised when a match status change is not allowed."""
    status_code = 400


class InvalidInputException(ServiceException):
    """Raised when a profile or timetable payload fails domain validation."""
    status_code = 400


class ModerationRejectedException(ServiceException):
    """Raised when a confession fails moderation."""
    status_code = 400

    def __init__(self, errors: List[str], warnings: Optional[List[str]] = None):
        super().__init__("; ".join(errors))
        self.errors = list(errors)
        self.warnings = list(warnings or [])


class DuplicateReportException(ServiceException):
    """Raised when a user reports the same item twice."""
    status_code = 409


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    if exc.status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"Rejected {request.method} {request.url.path}: {exc}")

    content = {
        "success": False,
        "error": str(exc),
        "type": exc.__class__.__name__
    }
    if isinstance(exc, ModerationRejectedException):
        content["errors"] = exc.errors
        content["warnings"] = exc.warnings

    return JSONResponse(status_code=exc.status_code, content=content)


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )
