"""
Feedback Service - user feedback, abuse signals, community ideas and
shareable saved results.

All tables here are server-owned and written with the service-role client
passed in by the routes:
- feedback         thumbs up / down per result
- abuse_signals    reports against a recommendation
- ugc_submissions  moderated community ideas (read back by the
                   recommendation pipeline as the community signal)
- saved_results    result snapshots behind 24-hour share links
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from supabase import Client

from spontaneity.moderation import moderate_content, pre_filter_content
from spontaneity.schemas.feedback import (
    AbuseSignalRequest,
    FeedbackRequest,
    SaveResultRequest,
    UGCSubmissionRequest,
)

logger = logging.getLogger(__name__)

FEEDBACK_TABLE = "feedback"
ABUSE_SIGNALS_TABLE = "abuse_signals"
UGC_SUBMISSIONS_TABLE = "ugc_submissions"
SAVED_RESULTS_TABLE = "saved_results"

MIN_IDEA_LENGTH = 10
SAVED_RESULT_TTL = timedelta(hours=24)


def _now() -> datetime:
    return datetime.now(timezone.utc)


async def store_feedback(supabase_client: Client, request: FeedbackRequest) -> None:
    """
    Store one feedback entry.

    Raises:
        Exception: If the insert fails
    """
    supabase_client.table(FEEDBACK_TABLE).insert({
        "result_id": request.result_id,
        "rating": request.rating,
        "comment": request.comment or None,
        "created_at": _now().isoformat(),
    }).execute()

    logger.info(f"Feedback stored: result_id={request.result_id}, rating={request.rating}")


async def record_abuse_signal(supabase_client: Client, signal: AbuseSignalRequest) -> bool:
    """
    Store an abuse signal.

    Returns:
        True if stored. Failures are logged and reported as False so the
        caller can still acknowledge the report.
    """
    try:
        supabase_client.table(ABUSE_SIGNALS_TABLE).insert({
            "reason": signal.reason,
            "recommendation_id": signal.recommendation_id,
            "session_id": signal.session_id,
            "signaled_at": signal.timestamp.isoformat(),
            "created_at": _now().isoformat(),
        }).execute()
    except Exception as e:
        logger.error(
            f"Failed to store abuse signal for recommendation_id={signal.recommendation_id}: {e}"
        )
        return False

    logger.info(
        f"Abuse signal recorded: recommendation_id={signal.recommendation_id}, "
        f"reason={signal.reason}"
    )
    return True


async def submit_ugc_idea(supabase_client: Client, submission: UGCSubmissionRequest) -> bool:
    """
    Moderate and store a community idea.

    Ideas shorter than MIN_IDEA_LENGTH or rejected by moderation are
    dropped without an error.

    Returns:
        True if the idea was stored as approved.

    Raises:
        Exception: If the insert fails
    """
    idea = submission.idea.strip()
    location = submission.location.strip()
    timing = submission.timing.strip() if submission.timing else None

    if len(idea) < MIN_IDEA_LENGTH:
        logger.info("UGC idea dropped: too short")
        return False

    moderation = moderate_content(idea, location=location, time=timing)
    if not moderation.passed:
        logger.info(f"UGC idea rejected by moderation: flags={moderation.flags}")
        return False

    # Locations must name a public area, never a street address
    if not pre_filter_content(location).passed:
        logger.info("UGC idea rejected: location looks like a private address")
        return False

    supabase_client.table(UGC_SUBMISSIONS_TABLE).insert({
        "idea": idea,
        "location": location,
        "timing": timing,
        "status": "approved",
        "created_at": _now().isoformat(),
    }).execute()

    logger.info(f"UGC idea stored for location={location}")
    return True


async def save_result(
    supabase_client: Client,
    request: SaveResultRequest,
    base_url: str,
    token: Optional[str] = None,
) -> tuple[str, datetime]:
    """
    Store a result snapshot and build its share link.

    Args:
        supabase_client: Service-role Supabase client
        request: Result id and rendered result data
        base_url: Public site URL without trailing slash
        token: Share token (generated when omitted)

    Returns:
        (url, expires_at)

    Raises:
        Exception: If the insert fails
    """
    token = token or secrets.token_urlsafe(12)
    created_at = _now()
    expires_at = created_at + SAVED_RESULT_TTL

    supabase_client.table(SAVED_RESULTS_TABLE).insert({
        "token": token,
        "result_id": request.result_id,
        "result_data": request.result_data,
        "created_at": created_at.isoformat(),
        "expires_at": expires_at.isoformat(),
    }).execute()

    logger.info(f"Saved result {request.result_id} (expires {expires_at.isoformat()})")
    return f"{base_url}/r/{token}", expires_at
