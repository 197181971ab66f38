"""
Compliance-friendly audit log events.

Audit events are:
- PII-free: the user's request is stored only as a SHA-256 digest
- Append-only: created once per recommendation, never updated
- Partner-scoped: see services/audit_log_service.py for storage

This module only assembles events; it performs no I/O.
"""

import hashlib
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from spontaneity.moderation.trust import (
    ConfidenceLevel,
    TrustBadge,
    TrustMetadata,
    TrustPolicy,
    TrustSignals,
)

DEFAULT_MODEL_VERSION = "engine-v1.0"


class AuditLogEvent(BaseModel):
    """One PII-free audit record for one recommendation decision."""
    recommendation_id: str = Field(..., description="UUID of the recommendation")
    input_context_hash: str = Field(
        ...,
        description="SHA-256 hex digest of the normalized user input",
        min_length=64,
        max_length=64,
    )
    trust_badge: TrustBadge
    policy_applied: str = Field(..., examples=["default_partner_policy", "partner_acme_policy"])
    generated_at: datetime
    model_version: str = Field(..., examples=["engine-v1.0"])
    confidence_level: Optional[ConfidenceLevel] = None
    signals_summary: Optional[TrustSignals] = None


def hash_input_context(user_input: str) -> str:
    """
    One-way hash of the user's request.

    Input is trimmed and lower-cased first so equivalent requests
    ("Denver" / "  denver  ") share a digest.
    """
    normalized = user_input.strip().lower()
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


def get_policy_identifier(policy: TrustPolicy, partner_id: Optional[str] = None) -> str:
    """Label for `policy_applied`: the partner scope wins over the policy's own id."""
    if partner_id:
        return f"partner_{partner_id}_policy"
    return policy.policy_id


def create_audit_log_event(
    recommendation_id: str,
    user_input: str,
    trust_metadata: TrustMetadata,
    policy: TrustPolicy,
    partner_id: Optional[str] = None,
    model_version: str = DEFAULT_MODEL_VERSION,
) -> AuditLogEvent:
    """
    Build (but do not store) the audit event for a recommendation.

    Args:
        recommendation_id: UUID of the recommendation
        user_input: Raw user input; only its hash is kept
        trust_metadata: Trust metadata attached to the recommendation
        policy: Trust policy that was applied
        partner_id: Optional partner scope
        model_version: Engine version label (settings.MODEL_VERSION)
    """
    return AuditLogEvent(
        recommendation_id=recommendation_id,
        input_context_hash=hash_input_context(user_input),
        trust_badge=trust_metadata.badge,
        policy_applied=get_policy_identifier(policy, partner_id),
        generated_at=datetime.now(timezone.utc),
        model_version=model_version,
        confidence_level=trust_metadata.confidence_level,
        signals_summary=trust_metadata.signals,
    )
