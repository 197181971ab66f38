"""
Pydantic schemas for GET /admin/audit-logs.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from spontaneity.moderation.audit_log import AuditLogEvent


class AuditLogPagination(BaseModel):
    """Cursor pagination over generated_at (newest first)."""
    count: int = Field(..., ge=0, description="Number of logs in this page")
    has_more: bool = Field(
        ...,
        description="True when a full page was returned, so older logs may exist",
    )
    next_start_after: Optional[datetime] = Field(
        None,
        description="Pass as start_after to fetch the next (older) page",
    )


class AuditLogListResponse(BaseModel):
    """Response for GET /admin/audit-logs."""
    success: bool = True
    logs: List[AuditLogEvent]
    pagination: AuditLogPagination

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "success": True,
                    "logs": [
                        {
                            "recommendation_id": "1f0c8c3e-8c1d-4b9a-9a55-5f3f2d7c1a10",
                            "input_context_hash": "a" * 64,
                            "trust_badge": "verified_context",
                            "policy_applied": "partner_acme_policy",
                            "generated_at": "2026-01-15T18:30:00Z",
                            "model_version": "engine-v1.0",
                            "confidence_level": "medium",
                        }
                    ],
                    "pagination": {
                        "count": 1,
                        "has_more": False,
                        "next_start_after": "2026-01-15T18:30:00Z",
                    },
                }
            ]
        }
    }
