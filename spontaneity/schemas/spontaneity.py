"""
Pydantic schemas for the spontaneity recommendation endpoints.

Used by:
- POST /engine/spontaneity (authenticated, partner-aware)
- POST /demo/spontaneity   (anonymous demo widget)
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from spontaneity.engine.adapters import RecommendationConfig
from spontaneity.moderation.trust import TrustPolicy

# ============================================================================
# REQUEST MODELS
# ============================================================================

class GenerationConfig(BaseModel):
    """Optional per-request generation parameters."""
    model_config = ConfigDict(populate_by_name=True)

    temperature: Optional[float] = Field(
        None,
        ge=0,
        le=2,
        description="Sampling temperature passed to the provider",
        examples=[0.7],
    )
    max_tokens: Optional[int] = Field(
        None,
        alias="maxTokens",
        gt=0,
        description="Maximum output tokens",
        examples=[500],
    )
    top_p: Optional[float] = Field(
        None,
        alias="topP",
        ge=0,
        le=1,
        description="Nucleus sampling cutoff",
    )

    def to_recommendation_config(self) -> RecommendationConfig:
        return RecommendationConfig(
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            top_p=self.top_p,
        )


class DemoSpontaneityRequest(BaseModel):
    """
    Request body for the anonymous demo widget.

    An empty or whitespace-only userInput is answered with 400 by the
    route, not with a schema validation error.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "userInput": "Vibe: Relaxed, Time: 2 hours, Location: Denver",
                    "config": {"temperature": 0.7, "maxTokens": 500},
                }
            ]
        },
    )

    user_input: str = Field(
        "",
        alias="userInput",
        description="Natural-language request for a spontaneous activity",
        max_length=2000,
    )
    config: Optional[GenerationConfig] = Field(
        None,
        description="Optional generation parameters",
    )


class SpontaneityRequest(DemoSpontaneityRequest):
    """Request body for the authenticated engine endpoint."""

    trust_policy: Optional[TrustPolicy] = Field(
        None,
        description=(
            "Partner trust thresholds. Omit to apply the default partner policy. "
            "A policy sent without policy_id is recorded as 'custom_policy'."
        ),
    )
    partner_id: Optional[str] = Field(
        None,
        description="Partner scope for audit logging",
        max_length=100,
        examples=["acme"],
    )


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class SpontaneityResponse(BaseModel):
    """
    Response envelope for both spontaneity endpoints.

    `result` is a JSON string of the augmented recommendation: the
    provider's JSON plus recommendation_id, trust, why_now and, when
    present, activity_timestamp.
    """
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    result: Optional[str] = Field(None, description="Recommendation as a JSON string")
    error: Optional[str] = Field(None, description="Error message when success is false")
    adapter_used: Optional[str] = Field(
        None,
        alias="adapterUsed",
        description="Name of the adapter that produced the result",
        examples=["GeminiAdapter", "OpenAIAdapter"],
    )
