"""
FastAPI routes for spontaneity recommendations.

Endpoints:
- POST /engine/spontaneity: authenticated, partner-aware (trust policy + scope)
- POST /demo/spontaneity:   anonymous demo widget (demo policy and scope)

Both endpoints answer with SpontaneityResponse. Failures are reported in the
same envelope ({"success": false, "error": ...}) with the HTTP status set:
- 400: empty userInput
- 500: no provider configured, all adapters failed, or the trust policy
       could not be satisfied
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from spontaneity.auth.dependencies import AuthenticatedUser, get_authenticated_user
from spontaneity.db.client import get_supabase_client
from spontaneity.engine.adapters import RecommendationConfig
from spontaneity.engine.errors import (
    AllAdaptersExhaustedError,
    EngineConfigurationError,
    InvalidInputError,
    PolicyUnsatisfiableError,
)
from spontaneity.moderation.trust import DEFAULT_TRUST_POLICY
from spontaneity.schemas.spontaneity import (
    DemoSpontaneityRequest,
    SpontaneityRequest,
    SpontaneityResponse,
)
from spontaneity.services.spontaneity_service import (
    DEMO_PARTNER_ID,
    DEMO_TRUST_POLICY,
    GEMINI_FIRST,
    OPENAI_FIRST,
    generate_recommendation,
    log_engine_request,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["spontaneity"])


def _error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error},
    )


def _generation_config(request: DemoSpontaneityRequest) -> Optional[RecommendationConfig]:
    if request.config is None:
        return None
    return request.config.to_recommendation_config()


@router.post(
    "/engine/spontaneity",
    response_model=SpontaneityResponse,
    response_model_exclude_none=True,
    status_code=200,
    summary="Generate a spontaneity recommendation",
    description="""
    Runs the recommendation pipeline for an authenticated caller.

    **Authentication:** Required (Bearer token)

    **Flow:**
    1. Adapters are tried in order (Gemini, then OpenAI) with a per-attempt timeout
    2. The result is moderated and tagged with trust metadata
    3. The trust policy (default partner policy unless supplied) gates the result,
       falling back to AI-only signals once
    4. A PII-free audit log is written under the partner scope

    `result` is a JSON string; `adapterUsed` names the adapter that answered.
    """,
)
async def engine_spontaneity(
    request: SpontaneityRequest,
    auth_user: AuthenticatedUser = Depends(get_authenticated_user),
):
    logger.info(
        f"POST /engine/spontaneity called by user_id={auth_user.user_id}, "
        f"partner_id={request.partner_id}"
    )

    if not request.user_input.strip():
        return _error_response(status.HTTP_400_BAD_REQUEST, "userInput is required")

    supabase_client = get_supabase_client(auth_user.access_token)
    policy = request.trust_policy or DEFAULT_TRUST_POLICY

    try:
        outcome = await generate_recommendation(
            request.user_input,
            config=_generation_config(request),
            policy=policy,
            partner_id=request.partner_id,
            preferred_order=GEMINI_FIRST,
        )
    except InvalidInputError as e:
        return _error_response(status.HTTP_400_BAD_REQUEST, str(e))
    except EngineConfigurationError as e:
        logger.error(f"Engine initialization failed: {e}")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))
    except (AllAdaptersExhaustedError, PolicyUnsatisfiableError) as e:
        logger.error(f"Engine execution failed for user_id={auth_user.user_id}: {e}")
        await log_engine_request(
            supabase_client,
            auth_user.user_id,
            request.user_input,
            adapter_used=None,
            success=False,
            error=str(e),
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, f"Engine execution failed: {e}"
        )

    result_json = outcome.result_json()
    await log_engine_request(
        supabase_client,
        auth_user.user_id,
        request.user_input,
        adapter_used=outcome.adapter_used,
        success=True,
        response=result_json,
    )

    return SpontaneityResponse(
        success=True,
        result=result_json,
        adapter_used=outcome.adapter_used,
    )


@router.post(
    "/demo/spontaneity",
    response_model=SpontaneityResponse,
    response_model_exclude_none=True,
    status_code=200,
    summary="Generate a demo recommendation",
    description="""
    Anonymous variant used by the free demo widget.

    **Authentication:** None

    OpenAI is tried first, then Gemini. The demo trust policy (no community
    input) is applied and audit logs go to the demo partner scope.
    """,
)
async def demo_spontaneity(request: DemoSpontaneityRequest):
    if not request.user_input.strip():
        return _error_response(status.HTTP_400_BAD_REQUEST, "userInput is required")

    try:
        outcome = await generate_recommendation(
            request.user_input,
            config=_generation_config(request),
            policy=DEMO_TRUST_POLICY,
            partner_id=DEMO_PARTNER_ID,
            preferred_order=OPENAI_FIRST,
        )
    except InvalidInputError as e:
        return _error_response(status.HTTP_400_BAD_REQUEST, str(e))
    except EngineConfigurationError as e:
        logger.error(f"Demo engine initialization failed: {e}")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))
    except (AllAdaptersExhaustedError, PolicyUnsatisfiableError) as e:
        logger.error(f"Demo engine execution failed: {e}")
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, f"Engine execution failed: {e}"
        )

    return SpontaneityResponse(
        success=True,
        result=outcome.result_json(),
        adapter_used=outcome.adapter_used,
    )
