"""
Trust & Safety for the Spontaneity Engine.

- content.py: lexical pre-filter and contextual validity checks
- trust.py: trust signals, badge resolution, confidence, partner policies, why-now
- audit_log.py: PII-free audit event assembly

Everything here is pure (no I/O). Storage of audit events lives in
spontaneity/services/audit_log_service.py.
"""

from spontaneity.moderation.audit_log import (
    AuditLogEvent,
    create_audit_log_event,
    hash_input_context,
)
from spontaneity.moderation.content import (
    ModerationResult,
    moderate_content,
    pre_filter_content,
    validate_contextual_validity,
)
from spontaneity.moderation.trust import (
    AI_ONLY_SIGNALS,
    DEFAULT_TRUST_POLICY,
    TrustBadge,
    TrustMetadata,
    TrustPolicy,
    TrustSignals,
    calculate_confidence_level,
    generate_trust_metadata,
    generate_why_now,
    get_trust_badge_data,
    resolve_trust_badge,
    validate_trust_policy,
)

__all__ = [
    "AuditLogEvent",
    "create_audit_log_event",
    "hash_input_context",
    "ModerationResult",
    "moderate_content",
    "pre_filter_content",
    "validate_contextual_validity",
    "AI_ONLY_SIGNALS",
    "DEFAULT_TRUST_POLICY",
    "TrustBadge",
    "TrustMetadata",
    "TrustPolicy",
    "TrustSignals",
    "calculate_confidence_level",
    "generate_trust_metadata",
    "generate_why_now",
    "get_trust_badge_data",
    "resolve_trust_badge",
    "validate_trust_policy",
]
