"""
Audit Log Service - append-only storage of recommendation audit events.

Storage layout:
- One Supabase table, `audit_logs`, written with the service-role client
- Each row carries `partner_scope`: the partner id, or "default" when the
  request had no partner
- Rows are never updated; retention cleanup is the only delete path and is
  run from scripts/cleanup_audit_logs.py, never from request handling

Writing an audit log must never break a recommendation request, so
store_audit_log() logs and swallows every failure. Reads and cleanup
propagate errors to the caller.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from supabase import Client

from spontaneity.moderation.audit_log import AuditLogEvent

logger = logging.getLogger(__name__)

AUDIT_LOGS_TABLE = "audit_logs"
DEFAULT_PARTNER_SCOPE = "default"
DEFAULT_RETENTION_DAYS = 90


def partner_scope(partner_id: Optional[str]) -> str:
    return partner_id or DEFAULT_PARTNER_SCOPE


async def store_audit_log(
    supabase_client: Client,
    event: AuditLogEvent,
    partner_id: Optional[str] = None,
) -> Optional[str]:
    """
    Append one audit event.

    Args:
        supabase_client: Service-role Supabase client
        event: Event built by create_audit_log_event()
        partner_id: Optional partner scope

    Returns:
        The stored row id, or None if storage failed.
    """
    scope = partner_scope(partner_id)
    row = event.model_dump(mode="json")
    row["partner_scope"] = scope
    row["stored_at"] = datetime.now(timezone.utc).isoformat()

    try:
        response = supabase_client.table(AUDIT_LOGS_TABLE).insert(row).execute()
    except Exception as e:
        logger.warning(
            f"Failed to store audit log for recommendation_id={event.recommendation_id} "
            f"(partner_scope={scope}): {e}"
        )
        return None

    if not response.data:
        logger.warning(
            f"Audit log insert returned no data for recommendation_id={event.recommendation_id}"
        )
        return None

    stored_id = response.data[0].get("id")
    logger.debug(
        f"Audit log stored: recommendation_id={event.recommendation_id}, "
        f"partner_scope={scope}, badge={event.trust_badge.value}"
    )
    return str(stored_id) if stored_id is not None else event.recommendation_id


async def retrieve_audit_logs(
    supabase_client: Client,
    partner_id: Optional[str] = None,
    limit: int = 100,
    start_after: Optional[datetime] = None,
) -> List[AuditLogEvent]:
    """
    Fetch audit events for one partner scope, newest first.

    Args:
        supabase_client: Service-role Supabase client
        partner_id: Partner scope to read ("default" when None)
        limit: Page size
        start_after: Only return events generated strictly before this time

    Raises:
        Exception: If the Supabase query fails
    """
    scope = partner_scope(partner_id)
    logger.debug(f"Retrieving audit logs: partner_scope={scope}, limit={limit}")

    query = (
        supabase_client.table(AUDIT_LOGS_TABLE)
        .select("*")
        .eq("partner_scope", scope)
    )
    if start_after is not None:
        if start_after.tzinfo is None:
            start_after = start_after.replace(tzinfo=timezone.utc)
        query = query.lt("generated_at", start_after.isoformat())

    response = query.order("generated_at", desc=True).limit(limit).execute()

    return [AuditLogEvent.model_validate(row) for row in response.data or []]


async def cleanup_old_audit_logs(
    supabase_client: Client,
    partner_id: Optional[str] = None,
    retention_days: int = DEFAULT_RETENTION_DAYS,
    dry_run: bool = False,
) -> int:
    """
    Remove audit events older than the retention window.

    Args:
        supabase_client: Service-role Supabase client
        partner_id: Partner scope to clean ("default" when None)
        retention_days: Events generated before now - retention_days are expired
        dry_run: Only count the expired events

    Returns:
        Number of expired events (deleted unless dry_run).
    """
    if retention_days < 1:
        raise ValueError("retention_days must be at least 1")

    scope = partner_scope(partner_id)
    cutoff = (datetime.now(timezone.utc) - timedelta(days=retention_days)).isoformat()

    count_response = (
        supabase_client.table(AUDIT_LOGS_TABLE)
        .select("recommendation_id", count="exact")
        .eq("partner_scope", scope)
        .lt("generated_at", cutoff)
        .execute()
    )
    expired = count_response.count or 0

    if dry_run or expired == 0:
        logger.info(
            f"Audit log cleanup ({'dry run' if dry_run else 'nothing to delete'}): "
            f"partner_scope={scope}, expired={expired}, cutoff={cutoff}"
        )
        return expired

    (
        supabase_client.table(AUDIT_LOGS_TABLE)
        .delete()
        .eq("partner_scope", scope)
        .lt("generated_at", cutoff)
        .execute()
    )
    logger.info(f"Deleted {expired} audit logs older than {cutoff} (partner_scope={scope})")
    return expired
