"""
Admin routes for compliance review.

API-only: the widget never calls these endpoints.

Endpoints:
- GET /admin/audit-logs: page through audit logs for one partner scope

Access:
- Any authenticated user may read any scope, except
- users whose token app_metadata.role is "partner", who may only read
  their own app_metadata.partner_id scope
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from spontaneity.auth.dependencies import AuthenticatedUser, get_authenticated_user
from spontaneity.db.client import get_service_role_client
from spontaneity.schemas.audit_logs import AuditLogListResponse, AuditLogPagination
from spontaneity.services.audit_log_service import retrieve_audit_logs

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["admin"]
)

DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 1000


def _parse_limit(raw: Optional[str]) -> int:
    if raw is None:
        return DEFAULT_PAGE_SIZE
    try:
        limit = int(raw)
    except ValueError:
        limit = 0
    if limit < 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "invalid_limit",
                "details": "limit must be a positive integer"
            }
        )
    return min(limit, MAX_PAGE_SIZE)


def _parse_start_after(raw: Optional[str]) -> Optional[datetime]:
    if not raw:
        return None
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "invalid_start_after",
                "details": "start_after must be an ISO-8601 timestamp"
            }
        )
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _resolve_scope(auth_user: AuthenticatedUser, partner_id: Optional[str]) -> Optional[str]:
    """Partner users are pinned to their own scope."""
    if auth_user.role != "partner":
        return partner_id

    own_partner_id = auth_user.partner_id
    if not own_partner_id or (partner_id and partner_id != own_partner_id):
        logger.warning(
            f"Partner user_id={auth_user.user_id} denied audit logs for partner_id={partner_id}"
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "error": "forbidden",
                "details": "Partners may only read their own audit logs"
            }
        )
    return own_partner_id


@router.get(
    "/audit-logs",
    response_model=AuditLogListResponse,
    summary="List audit logs",
    description="""
    Returns PII-free audit logs for a partner scope, newest first.

    **Authentication:** Required (Bearer token)

    **Pagination:** pass `pagination.next_start_after` as `start_after` to fetch
    the next page. `has_more` is true whenever a full page was returned.
    """,
)
async def list_audit_logs(
    partner_id: Optional[str] = Query(None, description="Partner scope (omit for the default scope)"),
    limit: Optional[str] = Query(None, description=f"Page size (default {DEFAULT_PAGE_SIZE}, max {MAX_PAGE_SIZE})"),
    start_after: Optional[str] = Query(None, description="ISO-8601 cursor; returns logs generated before it"),
    auth_user: AuthenticatedUser = Depends(get_authenticated_user),
) -> AuditLogListResponse:
    page_size = _parse_limit(limit)
    cursor = _parse_start_after(start_after)
    scope = _resolve_scope(auth_user, partner_id)

    logger.info(
        f"GET /admin/audit-logs by user_id={auth_user.user_id}: "
        f"partner_id={scope}, limit={page_size}"
    )

    try:
        logs = await retrieve_audit_logs(
            get_service_role_client(),
            partner_id=scope,
            limit=page_size,
            start_after=cursor,
        )
    except Exception as e:
        logger.error(f"Failed to retrieve audit logs: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "audit_log_error",
                "details": "Failed to retrieve audit logs"
            }
        )

    return AuditLogListResponse(
        success=True,
        logs=logs,
        pagination=AuditLogPagination(
            count=len(logs),
            has_more=len(logs) == page_size,
            next_start_after=logs[-1].generated_at if logs else None,
        ),
    )
