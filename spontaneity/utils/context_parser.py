"""
Extract vibe / time / location from a free-text spontaneity request.

Requests usually arrive in the widget's structured form
("Vibe: chill, Time: 2 hours, Location: Denver"), but free text such as
"something relaxing for 2 hours in Denver" is handled with simple pattern
matching. No NLP: unknown fields are left as None.
"""

import re
from dataclasses import dataclass
from typing import Optional

_LOCATION_MARKER = re.compile(r"\blocation\s*:\s*([^,\[\]]+)", re.IGNORECASE)
_LOCATION_PREPOSITION = re.compile(r"\b(?:in|near|around)\s+([A-Z][a-zA-Z]*(?:\s+[A-Z][a-zA-Z]*)*)")

_TIME_MARKER = re.compile(r"\btime\s*:\s*([^,\[\]]+)", re.IGNORECASE)
_TIME_DURATION = re.compile(r"(\d+\s*(?:hours?|hrs?|minutes?|mins?))\b", re.IGNORECASE)

_VIBE_MARKER = re.compile(r"\bvibe\s*:\s*([^,\[\]]+)", re.IGNORECASE)

VIBE_KEYWORDS = [
    (re.compile(r"\b(adventurous|adventure|explore|exploring)\b", re.IGNORECASE), "Adventurous"),
    (re.compile(r"\b(relaxed|relax|relaxing|chill|chilling|peaceful|calm)\b", re.IGNORECASE), "Relaxed"),
    (re.compile(r"\b(creative|art|artistic|craft|making)\b", re.IGNORECASE), "Creative"),
    (re.compile(r"\b(social|group|friends|people|together)\b", re.IGNORECASE), "Social"),
    (re.compile(r"\b(active|exercise|fitness|sports?|outdoors?)\b", re.IGNORECASE), "Active"),
    (re.compile(r"\b(foodie|food|eat|eating|dining|restaurant|cafe)\b", re.IGNORECASE), "Foodie"),
    (re.compile(r"\b(cultural|culture|museum|gallery|history|historical)\b", re.IGNORECASE), "Cultural"),
    (re.compile(r"\b(nightlife|night|bar|drinks|drinking|party)\b", re.IGNORECASE), "Nightlife"),
]

# Capitalised words that start sentences rather than name places
_NOT_LOCATIONS = {"Something", "Tell", "Me", "What", "Feel", "Like", "Doing", "Example"}


@dataclass(frozen=True)
class RequestContext:
    location: Optional[str] = None
    time: Optional[str] = None
    vibe: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        """Location and time were both stated, which counts as verified context."""
        return bool(self.location and self.time)


def _first_group(pattern: re.Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    if not match:
        return None
    value = match.group(1).strip()
    return value or None


def extract_location(user_input: str) -> Optional[str]:
    location = _first_group(_LOCATION_MARKER, user_input)
    if location:
        return location

    location = _first_group(_LOCATION_PREPOSITION, user_input)
    if location and location not in _NOT_LOCATIONS:
        return location
    return None


def extract_time(user_input: str) -> Optional[str]:
    return _first_group(_TIME_MARKER, user_input) or _first_group(_TIME_DURATION, user_input)


def extract_vibe(user_input: str) -> Optional[str]:
    vibe = _first_group(_VIBE_MARKER, user_input)
    if vibe:
        return vibe

    for pattern, value in VIBE_KEYWORDS:
        if pattern.search(user_input):
            return value
    return None


def extract_request_context(user_input: str) -> RequestContext:
    """Best-effort vibe/time/location extraction for why-now and trust signals."""
    return RequestContext(
        location=extract_location(user_input),
        time=extract_time(user_input),
        vibe=extract_vibe(user_input),
    )
