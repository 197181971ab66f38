"""
Service layer for the Spontaneity Engine backend.

- spontaneity_service: recommendation pipeline (engine, moderation, trust, audit)
- audit_log_service: append-only audit log storage and retention
- feedback_service: feedback, abuse signals, community ideas, saved results
"""
