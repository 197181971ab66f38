"""
Trust metadata, badge resolution and partner trust policies.

SERVER-SIDE ONLY: clients never compute badges, they only read the `trust`
object attached to each recommendation.

Badge priority (first match wins):
1. community_signal  (ugc_influenced)
2. recently_active   (recent_activity)
3. verified_context  (context_verified)
4. ai_curated        (default)

Confidence score: ai_generated +1, ugc_influenced +2, recent_activity +1,
context_verified +1; score >= 4 is high, >= 2 is medium, otherwise low.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

ConfidenceLevel = Literal["low", "medium", "high"]

CONFIDENCE_ORDER: Dict[str, int] = {
    "low": 0,
    "medium": 1,
    "high": 2,
}


class TrustBadge(str, Enum):
    AI_CURATED = "ai_curated"
    COMMUNITY_SIGNAL = "community_signal"
    RECENTLY_ACTIVE = "recently_active"
    VERIFIED_CONTEXT = "verified_context"


BADGE_LABELS: Dict[TrustBadge, str] = {
    TrustBadge.AI_CURATED: "AI Curated",
    TrustBadge.COMMUNITY_SIGNAL: "Community Signal",
    TrustBadge.RECENTLY_ACTIVE: "Recently Active Nearby",
    TrustBadge.VERIFIED_CONTEXT: "Verified Context",
}

BADGE_DETAIL_TEXT = (
    "This recommendation is generated using real-time context and moderated local input."
)


# ============================================================================
# MODELS
# ============================================================================

class TrustSignals(BaseModel):
    """Four independent signals that feed badge and confidence resolution."""
    model_config = ConfigDict(frozen=True)

    ai_generated: bool = False
    ugc_influenced: bool = False
    recent_activity: bool = False
    context_verified: bool = False


AI_ONLY_SIGNALS = TrustSignals(ai_generated=True)


class TrustMetadata(BaseModel):
    """
    Structured, auditable trust metadata attached to a recommendation.

    Build it with generate_trust_metadata(); the validator rejects a badge or
    confidence level that was not derived from `signals`.
    """
    model_config = ConfigDict(frozen=True)

    badge: TrustBadge
    signals: TrustSignals
    confidence_level: ConfidenceLevel
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode="after")
    def _derived_from_signals(self) -> "TrustMetadata":
        if self.badge != resolve_trust_badge(self.signals):
            raise ValueError("badge must be resolved from signals")
        if self.confidence_level != calculate_confidence_level(self.signals):
            raise ValueError("confidence_level must be calculated from signals")
        return self


class TrustPolicy(BaseModel):
    """Partner-controlled trust thresholds applied at request time."""
    model_config = ConfigDict(frozen=True)

    policy_id: str = Field(
        "custom_policy",
        description="Label recorded in audit logs as policy_applied",
        max_length=100,
    )
    allow_ugc: bool = Field(True, description="Allow UGC-influenced recommendations")
    min_activity_recency_hours: float = Field(
        72,
        ge=0,
        description="Maximum age (hours) of the activity behind a recent_activity signal",
    )
    require_verified_context: bool = Field(False, description="Require context_verified")
    confidence_floor: ConfidenceLevel = Field("low", description="Minimum confidence level")


DEFAULT_TRUST_POLICY = TrustPolicy(
    policy_id="default_partner_policy",
    allow_ugc=True,
    min_activity_recency_hours=72,
    require_verified_context=False,
    confidence_floor="low",
)


class TrustBadgeData(BaseModel):
    """UI-friendly badge representation."""
    type: TrustBadge
    label: str
    detail_text: str


# ============================================================================
# RESOLUTION
# ============================================================================

def resolve_trust_badge(signals: TrustSignals) -> TrustBadge:
    """Resolve the single badge for a signal set using the fixed priority order."""
    if signals.ugc_influenced:
        return TrustBadge.COMMUNITY_SIGNAL
    if signals.recent_activity:
        return TrustBadge.RECENTLY_ACTIVE
    if signals.context_verified:
        return TrustBadge.VERIFIED_CONTEXT
    return TrustBadge.AI_CURATED


def calculate_confidence_level(signals: TrustSignals) -> ConfidenceLevel:
    """Weighted sum of signals; the community signal counts double."""
    score = 0
    if signals.ai_generated:
        score += 1
    if signals.ugc_influenced:
        score += 2
    if signals.recent_activity:
        score += 1
    if signals.context_verified:
        score += 1

    if score >= 4:
        return "high"
    if score >= 2:
        return "medium"
    return "low"


def generate_trust_metadata(signals: TrustSignals) -> TrustMetadata:
    """Single source of truth for building trust metadata from signals."""
    return TrustMetadata(
        badge=resolve_trust_badge(signals),
        signals=signals,
        confidence_level=calculate_confidence_level(signals),
    )


def validate_trust_policy(
    metadata: TrustMetadata,
    policy: TrustPolicy,
    activity_timestamp: Optional[datetime] = None,
) -> bool:
    """
    Check a recommendation's trust metadata against a partner policy.

    Checks run in order and stop at the first failure:
    1. UGC allowance
    2. Activity recency (only when recent_activity is set AND a timestamp
       is supplied; without a timestamp the signal is taken at face value)
    3. Verified context requirement
    4. Confidence floor

    Returns:
        True if the recommendation may be shown, False if it must be excluded.
    """
    signals = metadata.signals

    if not policy.allow_ugc and signals.ugc_influenced:
        return False

    if signals.recent_activity and activity_timestamp is not None:
        if activity_timestamp.tzinfo is None:
            activity_timestamp = activity_timestamp.replace(tzinfo=timezone.utc)
        elapsed = datetime.now(timezone.utc) - activity_timestamp
        hours_since_activity = elapsed.total_seconds() / 3600
        if hours_since_activity > policy.min_activity_recency_hours:
            return False

    if policy.require_verified_context and not signals.context_verified:
        return False

    if CONFIDENCE_ORDER[metadata.confidence_level] < CONFIDENCE_ORDER[policy.confidence_floor]:
        return False

    return True


def get_trust_badge_data(metadata: TrustMetadata) -> TrustBadgeData:
    """Convert trust metadata to the label shown on the recommendation card."""
    return TrustBadgeData(
        type=metadata.badge,
        label=BADGE_LABELS[metadata.badge],
        detail_text=BADGE_DETAIL_TEXT,
    )


def generate_why_now(
    signals: TrustSignals,
    location: Optional[str] = None,
    time: Optional[str] = None,
    vibe: Optional[str] = None,
) -> str:
    """
    One-sentence "Why this now?" explanation.

    Attributed to the strongest signal only (same priority as the badge);
    never combines several reasons.
    """
    if signals.ugc_influenced:
        location_text = f" in {location}" if location else " nearby"
        return f"It's based on recent community suggestions{location_text} and matches your preferences."

    if signals.recent_activity:
        location_text = f" in {location}" if location else " nearby"
        time_text = f" and {time}" if time else ""
        return f"It's nearby{location_text}{time_text} and matches your selected vibe."

    if signals.context_verified:
        location_text = f" in {location}" if location else ""
        vibe_text = f" and matches your {vibe} vibe" if vibe else ""
        return f"It's verified and available{location_text}{vibe_text}."

    location_text = f" in {location}" if location else ""
    vibe_text = f" and matches your {vibe} vibe" if vibe else ""
    return f"It's nearby{location_text}{vibe_text}."
