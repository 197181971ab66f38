"""
FastAPI routes for widget feedback and community input.

These endpoints are public (the demo widget is anonymous) and write to
server-owned tables through the service-role client.

Endpoints:
- POST /feedback:      thumbs up / down on a result
- POST /abuse-signal:  report a recommendation (always acknowledged)
- POST /ugc/submit:    suggest a local idea (silently dropped if rejected)
- POST /save-result:   store a result and return a 24-hour share link
"""

import logging

from fastapi import APIRouter, HTTPException, status

from spontaneity.config import settings
from spontaneity.db.client import get_service_role_client
from spontaneity.schemas.feedback import (
    AbuseSignalRequest,
    FeedbackRequest,
    SaveResultRequest,
    SaveResultResponse,
    SuccessResponse,
    UGCSubmissionRequest,
)
from spontaneity.services.feedback_service import (
    record_abuse_signal,
    save_result,
    store_feedback,
    submit_ugc_idea,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["feedback"])


def _storage_error(details: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "storage_error",
            "details": details
        }
    )


@router.post(
    "/feedback",
    response_model=SuccessResponse,
    status_code=200,
    summary="Submit feedback on a result",
)
async def submit_feedback(request: FeedbackRequest) -> SuccessResponse:
    try:
        await store_feedback(get_service_role_client(), request)
    except Exception as e:
        logger.error(f"Failed to store feedback for result_id={request.result_id}: {e}")
        raise _storage_error("Failed to store feedback")

    return SuccessResponse(success=True, message="Feedback received")


@router.post(
    "/abuse-signal",
    response_model=SuccessResponse,
    status_code=200,
    summary="Report a recommendation",
    description="""
    Records an abuse signal (irrelevant, outdated or unsafe).

    The response is always `{"success": true}` once the request validates,
    even if the signal could not be stored.
    """,
)
async def submit_abuse_signal(request: AbuseSignalRequest) -> SuccessResponse:
    try:
        client = get_service_role_client()
    except ValueError as e:
        logger.error(f"Abuse signal not stored: {e}")
        return SuccessResponse(success=True)

    await record_abuse_signal(client, request)
    return SuccessResponse(success=True)


@router.post(
    "/ugc/submit",
    response_model=SuccessResponse,
    status_code=200,
    summary="Submit a community idea",
    description="""
    Submits a local activity idea for the community signal.

    Ideas are moderated automatically. Rejected, too-short and
    kill-switched submissions are acknowledged exactly like accepted ones.
    """,
)
async def submit_ugc(request: UGCSubmissionRequest) -> SuccessResponse:
    if not settings.UGC_ENABLED:
        logger.info("UGC submission ignored: UGC_ENABLED=false")
        return SuccessResponse(success=True)

    try:
        await submit_ugc_idea(get_service_role_client(), request)
    except Exception as e:
        # Acknowledge anyway; submitters never see storage or moderation outcomes
        logger.error(f"UGC submission failed: {e}")

    return SuccessResponse(success=True)


@router.post(
    "/save-result",
    response_model=SaveResultResponse,
    status_code=200,
    summary="Save a result and get a share link",
)
async def save_result_endpoint(request: SaveResultRequest) -> SaveResultResponse:
    try:
        url, expires_at = await save_result(
            get_service_role_client(),
            request,
            base_url=settings.BASE_URL,
        )
    except Exception as e:
        logger.error(f"Failed to save result_id={request.result_id}: {e}")
        raise _storage_error("Failed to save result")

    return SaveResultResponse(success=True, url=url, expires_at=expires_at)
