#!/usr/bin/env python3
"""
Moderation Rules - Ordered prohibited-content patterns.

Each rule carries its own category and severity so classification never
depends on inspecting the pattern text. Rules are evaluated in list order
and only the first matching rule is reported.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class Severity(Enum):
    """How a rule match affects the verdict."""
    ERROR = "error"
    WARNING = "warning"


class RuleCategory(Enum):
    REAL_NAME = "real_name"
    TARGETING = "targeting"
    EXPLICIT = "explicit"
    HATE = "hate"
    CONTACT_INFO = "contact_info"


MSG_NAMES_OR_TARGETING = "Content contains prohibited elements (names or targeting)"
MSG_INAPPROPRIATE = "Content contains inappropriate language"
MSG_SENSITIVE_INFO = "Content may contain sensitive information"


@dataclass(frozen=True)
class ModerationRule:
    """A single prohibited-content category."""
    category: RuleCategory
    pattern: re.Pattern[str]
    severity: Severity
    message: str

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


_NAMES = (
    r"\b(raj|kumar|singh|patel|sharma|gupta|verma|mehta|jain|shah|reddy|rao|naidu|iyer|iyengar|"
    r"menon|nair|pillai|krishnan|sundaram|ram|lakshmi|priya|anita|kavita|neha|riya|sneha|arjun|"
    r"rahul|rohan|aman|vivek|aditya|akash|nikhil|varun|siddharth|karan|yash|harsh|rishabh|pranav|"
    r"sahil|ayush|kunal|manish|vishal|nitin|sanjay|vijay|ajay|anil|sunil|mukesh|rakesh|mahesh|"
    r"suresh|dinesh|pradeep|deepak|amit|sumit|rohit|mohit|sourav|sachin|virat|ms\s+dhoni|"
    r"sachin\s+tendulkar)\b"
)

_TARGETING = (
    r"\b(you\s+are|you're|you\s+should|you\s+need|you\s+must|you\s+have\s+to|fuck\s+you|"
    r"kill\s+yourself|kys|die|hate\s+you|disgusting|pathetic|loser|idiot|stupid|dumb|moron|retard)\b"
)

_EXPLICIT = (
    r"\b(sex|sexual|porn|nude|naked|fuck|fucking|shit|damn|bitch|asshole|bastard|cunt|pussy|dick|"
    r"penis|vagina|orgasm|masturbat|rape|molest)\b"
)

_HATE = r"\b(kill|murder|suicide|bomb|terrorist|attack|violence|weapon|gun|knife|stab|shoot)\b"

# Phone numbers and emails (potential doxxing)
_CONTACT = r"\b\d{10}|\d{3}[-.]?\d{3}[-.]?\d{4}|[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\b"


def _compile(source: str) -> re.Pattern[str]:
    return re.compile(source, re.IGNORECASE)


DEFAULT_RULES: List[ModerationRule] = [
    ModerationRule(RuleCategory.REAL_NAME, _compile(_NAMES), Severity.ERROR, MSG_NAMES_OR_TARGETING),
    ModerationRule(RuleCategory.TARGETING, _compile(_TARGETING), Severity.ERROR, MSG_NAMES_OR_TARGETING),
    ModerationRule(RuleCategory.EXPLICIT, _compile(_EXPLICIT), Severity.ERROR, MSG_INAPPROPRIATE),
    ModerationRule(RuleCategory.HATE, _compile(_HATE), Severity.ERROR, MSG_INAPPROPRIATE),
    ModerationRule(RuleCategory.CONTACT_INFO, _compile(_CONTACT), Severity.WARNING, MSG_SENSITIVE_INFO),
]


def first_matching_rule(
    text: str,
    rules: Optional[List[ModerationRule]] = None
) -> Optional[ModerationRule]:
    """
    Return the first rule (in list order) whose pattern matches the text.

    A text that violates several categories is reported only for the
    earliest one.
    """
    for rule in rules if rules is not None else DEFAULT_RULES:
        if rule.matches(text):
            return rule
    return None
