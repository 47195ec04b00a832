#!/usr/bin/env python3
"""
Moderation Module - Confession text validation.

Public API:
- moderate_content: Validity verdict with errors and warnings
- sanitize_content: Whitespace normalization
- review_submission: Sanitize then moderate
"""

from core.moderation.rules import ModerationRule, RuleCategory, Severity, DEFAULT_RULES
from core.moderation.service import (
    ModerationResult,
    moderate_content,
    sanitize_content,
    review_submission,
)

__all__ = [
    'ModerationRule',
    'RuleCategory',
    'Severity',
    'DEFAULT_RULES',
    'ModerationResult',
    'moderate_content',
    'sanitize_content',
    'review_submission',
]
