"""
Content moderation for generated recommendations and UGC.

Two lexical layers, no ML classification:
- Layer 1 (pre_filter_content): reject unsafe or inappropriate material.
- Layer 2 (validate_contextual_validity): require activity-based content.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

from spontaneity.utils.logging import get_logger

logger = get_logger(__name__)

# Order matters only for which pattern is reported first; any match rejects.
BLOCKED_PATTERNS = [
    # Private addresses (basic patterns)
    re.compile(
        r"\d+\s+[a-z]+\s+(street|st|avenue|ave|road|rd|drive|dr|lane|ln|way|blvd|boulevard)",
        re.IGNORECASE,
    ),
    # Hate speech / violence indicators
    re.compile(r"\b(hate|violence|harm|attack|kill|hurt)\b", re.IGNORECASE),
    # Adult content indicators
    re.compile(r"\b(adult|explicit|nsfw|xxx)\b", re.IGNORECASE),
    # Explicit personal invitations
    re.compile(r"\b(meet me|come to|visit me|my place|my house)\b", re.IGNORECASE),
]

ACTIVITY_PATTERN = re.compile(
    r"\b(visit|explore|try|do|see|experience|activity|place|location|venue|event)\b",
    re.IGNORECASE,
)

# Shorter texts are too short to judge and always pass Layer 2
MIN_ACTIVITY_CHECK_LENGTH = 20

LOCATION_HINTS = ("nearby", "local", "area")


@dataclass(frozen=True)
class ModerationResult:
    passed: bool
    reason: Optional[str] = None
    flags: List[str] = field(default_factory=list)


def pre_filter_content(content: str) -> ModerationResult:
    """Layer 1: reject content matching any blocked pattern (first match wins)."""
    for pattern in BLOCKED_PATTERNS:
        if pattern.search(content):
            return ModerationResult(
                passed=False,
                reason="Content contains unsafe or inappropriate material",
                flags=["unsafe_content"],
            )

    return ModerationResult(passed=True)


def validate_contextual_validity(
    content: str,
    location: Optional[str] = None,
    time: Optional[str] = None,
) -> ModerationResult:
    """
    Layer 2: ensure content describes an activity (not a person).

    Location relevance is advisory only; it is logged but never rejects.
    `time` is accepted for call-site symmetry and currently unused.
    """
    if not ACTIVITY_PATTERN.search(content) and len(content) > MIN_ACTIVITY_CHECK_LENGTH:
        return ModerationResult(
            passed=False,
            reason="Content does not describe an activity",
            flags=["not_activity_based"],
        )

    if location and location.strip():
        content_lower = content.lower()
        location_relevant = location.lower() in content_lower or any(
            hint in content_lower for hint in LOCATION_HINTS
        )
        if not location_relevant:
            logger.debug("Content does not reference the requested location")

    return ModerationResult(passed=True)


def moderate_content(
    content: str,
    location: Optional[str] = None,
    time: Optional[str] = None,
) -> ModerationResult:
    """Run both moderation layers and return the first failure, if any."""
    pre_filter_result = pre_filter_content(content)
    if not pre_filter_result.passed:
        return pre_filter_result

    return validate_contextual_validity(content, location=location, time=time)
