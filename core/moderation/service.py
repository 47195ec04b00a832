#!/usr/bin/env python3
"""
Content Moderation - Validation and sanitization of confession text.

moderate_content() never raises: every problem is reported in the returned
ModerationResult. Errors block a submission, warnings are advisory.
"""

import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Dict, Any

from core.config_loader import ModerationConfig
from core.moderation.rules import DEFAULT_RULES, ModerationRule, Severity, first_matching_rule

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")

WARNING_SPAM = "Content may be spam due to excessive repetition"
WARNING_CAPS = "Please avoid using all caps"


@dataclass
class ModerationResult:
    """Verdict for a piece of user-submitted text."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


def sanitize_content(content: str) -> str:
    """
    Normalize whitespace in submitted text.

    Trims the ends, collapses whitespace runs to a single space and
    limits consecutive line breaks to two.
    """
    sanitized = content.strip()
    sanitized = _WHITESPACE_RUN.sub(" ", sanitized)
    sanitized = _EXCESS_NEWLINES.sub("\n\n", sanitized)
    return sanitized


def _max_word_repetition(content: str) -> int:
    words = content.lower().split()
    if not words:
        return 0
    return max(Counter(words).values())


def _caps_ratio(content: str) -> float:
    if not content:
        return 0.0
    uppercase = sum(1 for ch in content if "A" <= ch <= "Z")
    return uppercase / len(content)


def moderate_content(
    content: str,
    config: Optional[ModerationConfig] = None,
    rules: Optional[List[ModerationRule]] = None
) -> ModerationResult:
    """
    Check text against length limits, prohibited patterns and heuristics.

    Args:
        content: Text to check (callers pass sanitized text)
        config: Thresholds, defaults to ModerationConfig()
        rules: Ordered prohibited-content rules, defaults to DEFAULT_RULES

    Returns:
        ModerationResult; is_valid is True iff no errors were recorded
    """
    config = config or ModerationConfig()
    errors: List[str] = []
    warnings: List[str] = []

    if len(content) < config.min_length:
        errors.append(f"Confession must be at least {config.min_length} characters long")

    if len(content) > config.max_length:
        errors.append(f"Confession must be less than {config.max_length} characters")

    rule = first_matching_rule(content, rules if rules is not None else DEFAULT_RULES)
    if rule is not None:
        logger.debug(f"Moderation rule matched: {rule.category.value}")
        if rule.severity is Severity.ERROR:
            errors.append(rule.message)
        else:
            warnings.append(rule.message)

    if _max_word_repetition(content) > config.spam_repetition_threshold:
        warnings.append(WARNING_SPAM)

    if _caps_ratio(content) > config.caps_ratio_threshold and len(content) > config.caps_min_length:
        warnings.append(WARNING_CAPS)

    return ModerationResult(is_valid=not errors, errors=errors, warnings=warnings)


def review_submission(
    content: str,
    config: Optional[ModerationConfig] = None
) -> Tuple[str, ModerationResult]:
    """Sanitize then moderate; returns (sanitized_text, result)."""
    sanitized = sanitize_content(content)
    return sanitized, moderate_content(sanitized, config)
