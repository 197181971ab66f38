"""
Spontaneity Service - the recommendation pipeline behind both engine routes.

Pipeline for one request:
1. Extract vibe / time / location from the request
2. Optionally pull recent approved community ideas for the location
3. Run the SpontaneityEngine (ordered adapters, per-attempt timeout, fallback)
4. Parse the provider text into a JSON object
5. Moderate the recommendation text
6. Build trust signals and metadata, then gate them with the trust policy
   (falling back to the AI-only signal set once)
7. Attach recommendation_id, trust, why_now and activity_timestamp
8. Append a PII-free audit log (never blocks or fails the request)

Routes own HTTP concerns; everything here raises domain errors from
spontaneity.engine.errors.
"""

import json
import logging
import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from supabase import Client

from spontaneity.config import settings
from spontaneity.db.client import get_service_role_client
from spontaneity.engine import (
    AdapterAttempt,
    EngineConfig,
    GeminiAdapter,
    ModelAdapter,
    OpenAIAdapter,
    RecommendationConfig,
    SpontaneityEngine,
)
from spontaneity.engine.errors import (
    EngineConfigurationError,
    InvalidInputError,
    PolicyUnsatisfiableError,
)
from spontaneity.moderation import (
    AI_ONLY_SIGNALS,
    DEFAULT_TRUST_POLICY,
    TrustMetadata,
    TrustPolicy,
    TrustSignals,
    create_audit_log_event,
    generate_trust_metadata,
    generate_why_now,
    get_trust_badge_data,
    hash_input_context,
    moderate_content,
    validate_trust_policy,
)
from spontaneity.services.audit_log_service import store_audit_log
from spontaneity.utils.context_parser import RequestContext, extract_request_context
from spontaneity.utils.logging import preview

logger = logging.getLogger(__name__)

GEMINI_FIRST = ("gemini", "openai")
OPENAI_FIRST = ("openai", "gemini")

DEMO_PARTNER_ID = "demo_partner_id"
DEMO_TRUST_POLICY = TrustPolicy(
    policy_id="demo_policy",
    allow_ugc=False,
    min_activity_recency_hours=48,
    require_verified_context=False,
    confidence_floor="low",
)

ENGINE_REQUESTS_TABLE = "engine_requests"
UGC_SUBMISSIONS_TABLE = "ugc_submissions"
MAX_COMMUNITY_IDEAS = 3
MAX_LOGGED_RESPONSE_CHARS = 2000


@dataclass
class RecommendationOutcome:
    """Augmented recommendation plus the metadata the routes report."""
    result: Dict[str, Any]
    adapter_used: str
    trust_metadata: TrustMetadata
    attempts: List[AdapterAttempt] = field(default_factory=list)

    def result_json(self) -> str:
        return json.dumps(self.result)


# =========================================================
# Engine construction
# =========================================================

def _build_adapter(provider: str) -> Optional[ModelAdapter]:
    if provider == "gemini":
        api_key = settings.gemini_api_key()
        if api_key:
            return GeminiAdapter(api_key=api_key, model=settings.GEMINI_MODEL)
    elif provider == "openai":
        api_key = settings.openai_api_key()
        if api_key:
            return OpenAIAdapter(api_key=api_key, model=settings.OPENAI_MODEL)
    else:
        logger.warning(f"Unknown adapter provider '{provider}' skipped")
    return None


def initialize_engine(preferred_order: Sequence[str] = GEMINI_FIRST) -> SpontaneityEngine:
    """
    Build a per-request engine from the configured provider keys.

    Providers without a (non-placeholder) key are skipped.

    Raises:
        EngineConfigurationError: If no provider is configured.
    """
    adapters: List[ModelAdapter] = []
    for provider in preferred_order:
        adapter = _build_adapter(provider)
        if adapter is not None:
            adapters.append(adapter)

    if not adapters:
        raise EngineConfigurationError(
            "No AI adapters configured. Set GEMINI_API_KEY or OPENAI_API_KEY."
        )

    logger.debug(f"Engine initialized with adapters: {[a.name for a in adapters]}")

    return SpontaneityEngine(
        adapters,
        EngineConfig(
            enable_fallback=settings.ENGINE_ENABLE_FALLBACK,
            timeout_ms=settings.ENGINE_TIMEOUT_MS,
        ),
    )


# =========================================================
# Result parsing
# =========================================================

def parse_engine_result(raw: str) -> Dict[str, Any]:
    """
    Turn provider text into a JSON object.

    Markdown code fences and trailing commas are cleaned up first. Text that
    still is not a JSON object is wrapped as a plain recommendation.
    """
    content = raw.strip()

    block = re.search(r'```(?:json)?\s*([\s\S]*?)```', content, re.IGNORECASE)
    if block:
        content = block.group(1).strip()
    else:
        json_start = content.find('{')
        if json_start > 0:
            content = content[json_start:]

    # Remove trailing commas before } or ] (common LLM mistake)
    content = re.sub(r',(\s*[}\]])', r'\1', content)

    try:
        parsed = json.loads(content)
    except json.JSONDecodeError:
        parsed = None

    if isinstance(parsed, dict):
        return parsed

    logger.debug("Engine output is not a JSON object; wrapping as plain text")
    return {
        "recommendation": raw,
        "title": "Your Recommendation",
        "description": raw,
    }


def _recommendation_text(result: Dict[str, Any]) -> str:
    text = result.get("recommendation") or result.get("description")
    if isinstance(text, str) and text:
        return text
    return json.dumps(result)


def _context_value(result: Dict[str, Any], keys: Sequence[str], fallback: Optional[str]) -> Optional[str]:
    for key in keys:
        value = result.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return fallback


# =========================================================
# Community signal (UGC)
# =========================================================

def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


async def load_community_ideas(
    supabase_client: Client,
    location: str,
    limit: int = MAX_COMMUNITY_IDEAS,
) -> List[Dict[str, Any]]:
    """
    Most recent approved UGC ideas for a location (newest first).

    Lookup failures are logged and treated as "no community input".
    """
    try:
        response = (
            supabase_client.table(UGC_SUBMISSIONS_TABLE)
            .select("idea, timing, created_at")
            .eq("status", "approved")
            .ilike("location", location)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
    except Exception as e:
        logger.warning(f"Community idea lookup failed for location={location}: {e}")
        return []

    return list(response.data or [])


def build_engine_input(user_input: str, ideas: List[Dict[str, Any]]) -> str:
    """Append community ideas to the request so the model can draw on them."""
    if not ideas:
        return user_input

    lines = []
    for idea in ideas:
        timing = f" ({idea['timing']})" if idea.get("timing") else ""
        lines.append(f"- {idea.get('idea', '')}{timing}")
    return (
        f"{user_input}\n\n"
        "Recent community suggestions for this area:\n"
        + "\n".join(lines)
    )


def build_trust_signals(
    context: RequestContext,
    ideas: List[Dict[str, Any]],
    activity_timestamp: Optional[datetime],
) -> TrustSignals:
    return TrustSignals(
        ai_generated=True,
        ugc_influenced=bool(ideas),
        recent_activity=activity_timestamp is not None,
        context_verified=context.is_complete,
    )


# =========================================================
# Request log
# =========================================================

async def log_engine_request(
    supabase_client: Client,
    user_id: str,
    user_input: str,
    adapter_used: Optional[str],
    success: bool,
    error: Optional[str] = None,
    response: Optional[str] = None,
) -> None:
    """
    Append one row to engine_requests. Failures are logged, never raised.

    Only the hash of the request is stored.
    """
    row = {
        "user_id": user_id,
        "input_context_hash": hash_input_context(user_input),
        "adapter_used": adapter_used,
        "success": success,
        "error": error,
        "response": response[:MAX_LOGGED_RESPONSE_CHARS] if response else None,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    try:
        supabase_client.table(ENGINE_REQUESTS_TABLE).insert(row).execute()
    except Exception as e:
        logger.warning(f"Failed to log engine request for user_id={user_id}: {e}")


# =========================================================
# Pipeline
# =========================================================

def apply_trust_policy(
    signals: TrustSignals,
    policy: TrustPolicy,
    activity_timestamp: Optional[datetime],
) -> tuple[TrustMetadata, Optional[datetime]]:
    """
    Gate signals with the policy, retrying once with AI-only signals.

    Returns:
        (metadata, activity_timestamp) actually attached to the result;
        the timestamp is dropped when the AI-only fallback is used.

    Raises:
        PolicyUnsatisfiableError: If even AI-only signals fail the policy.
    """
    metadata = generate_trust_metadata(signals)
    if validate_trust_policy(metadata, policy, activity_timestamp):
        return metadata, activity_timestamp

    logger.info(
        f"Signals failed policy {policy.policy_id} (badge={metadata.badge.value}); "
        "retrying with AI-only signals"
    )
    metadata = generate_trust_metadata(AI_ONLY_SIGNALS)
    if validate_trust_policy(metadata, policy, None):
        return metadata, None

    raise PolicyUnsatisfiableError(
        f"No recommendation satisfies trust policy '{policy.policy_id}'"
    )


async def _store_audit_event(
    recommendation_id: str,
    user_input: str,
    trust_metadata: TrustMetadata,
    policy: TrustPolicy,
    partner_id: Optional[str],
) -> None:
    try:
        event = create_audit_log_event(
            recommendation_id,
            user_input,
            trust_metadata,
            policy,
            partner_id=partner_id,
            model_version=settings.MODEL_VERSION,
        )
        await store_audit_log(get_service_role_client(), event, partner_id)
    except Exception as e:
        logger.warning(f"Audit logging failed for recommendation_id={recommendation_id}: {e}")


async def generate_recommendation(
    user_input: str,
    config: Optional[RecommendationConfig] = None,
    policy: TrustPolicy = DEFAULT_TRUST_POLICY,
    partner_id: Optional[str] = None,
    preferred_order: Sequence[str] = GEMINI_FIRST,
) -> RecommendationOutcome:
    """
    Run the full recommendation pipeline for one request.

    Args:
        user_input: Raw request text
        config: Optional per-request generation parameters
        policy: Trust policy to gate the result with
        partner_id: Optional partner scope (audit logs)
        preferred_order: Provider order for the engine

    Returns:
        RecommendationOutcome with the augmented result

    Raises:
        InvalidInputError: If user_input is blank
        EngineConfigurationError: If no provider is configured
        AllAdaptersExhaustedError: If every adapter failed
        PolicyUnsatisfiableError: If the policy rejects even AI-only signals
    """
    if not user_input or not user_input.strip():
        raise InvalidInputError("User input cannot be empty")

    user_input = user_input.strip()
    logger.info(f"Generating recommendation for input: {preview(user_input)}")

    engine = initialize_engine(preferred_order)
    context = extract_request_context(user_input)

    ideas: List[Dict[str, Any]] = []
    if settings.UGC_ENABLED and policy.allow_ugc and context.location:
        try:
            ideas = await load_community_ideas(get_service_role_client(), context.location)
        except ValueError as e:
            logger.warning(f"Community ideas unavailable: {e}")

    activity_timestamp = _parse_timestamp(ideas[0].get("created_at")) if ideas else None

    outcome = await engine.run_engine_with_metadata(build_engine_input(user_input, ideas), config)
    result = parse_engine_result(outcome.result)

    location = _context_value(result, ("location", "area"), context.location)
    time = _context_value(result, ("time", "duration"), context.time)
    vibe = _context_value(result, ("vibe",), context.vibe)

    moderation = moderate_content(_recommendation_text(result), location=location, time=time)
    if moderation.passed:
        signals = build_trust_signals(context, ideas, activity_timestamp)
    else:
        logger.warning(f"Recommendation failed moderation ({moderation.flags}); using AI-only signals")
        signals = AI_ONLY_SIGNALS
        activity_timestamp = None

    trust_metadata, activity_timestamp = apply_trust_policy(signals, policy, activity_timestamp)

    recommendation_id = str(uuid.uuid4())
    result["recommendation_id"] = recommendation_id
    result["trust"] = trust_metadata.model_dump(mode="json")
    result["trust_badge"] = get_trust_badge_data(trust_metadata).model_dump(mode="json")
    result["why_now"] = generate_why_now(
        trust_metadata.signals, location=location, time=time, vibe=vibe
    )
    if activity_timestamp is not None:
        result["activity_timestamp"] = activity_timestamp.isoformat()

    await _store_audit_event(recommendation_id, user_input, trust_metadata, policy, partner_id)

    logger.info(
        f"Recommendation {recommendation_id} generated by {outcome.adapter_used} "
        f"(badge={trust_metadata.badge.value}, confidence={trust_metadata.confidence_level})"
    )

    return RecommendationOutcome(
        result=result,
        adapter_used=outcome.adapter_used,
        trust_metadata=trust_metadata,
        attempts=outcome.attempts,
    )
