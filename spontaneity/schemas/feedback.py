"""
Pydantic schemas for user feedback and community input.

Endpoints:
- POST /feedback       thumbs up / down on a result
- POST /abuse-signal   report an irrelevant, outdated or unsafe recommendation
- POST /ugc/submit     suggest a local activity idea
- POST /save-result    store a result and get a 24-hour share link
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


# =========================================================
# Feedback
# =========================================================

class FeedbackRequest(BaseModel):
    result_id: str = Field(..., min_length=1, description="Recommendation the feedback is about")
    rating: Literal["positive", "negative"] = Field(..., description="Thumbs up or down")
    comment: Optional[str] = Field(
        None,
        max_length=1000,
        description="Optional free-text comment",
    )


class AbuseSignalRequest(BaseModel):
    reason: Literal["irrelevant", "outdated", "unsafe"]
    recommendation_id: str = Field(..., min_length=1)
    session_id: str = Field(..., min_length=1, description="Anonymous widget session")
    timestamp: datetime = Field(..., description="When the user raised the signal")


class SuccessResponse(BaseModel):
    """Generic acknowledgement."""
    success: bool = True
    message: Optional[str] = None


# =========================================================
# UGC
# =========================================================

class UGCSubmissionRequest(BaseModel):
    """
    A community activity idea.

    Ideas are moderated before storage. Rejected ideas are acknowledged
    the same way as accepted ones so the endpoint cannot be used to probe
    the moderation rules.
    """
    idea: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Short activity suggestion",
        examples=["Sunset picnic at Red Rocks with a thermos of cocoa"],
    )
    location: str = Field(..., min_length=1, max_length=200, examples=["Denver"])
    timing: Optional[str] = Field(
        None,
        max_length=100,
        description="When the idea works best",
        examples=["weekday evenings"],
    )


# =========================================================
# Saved results
# =========================================================

class SaveResultRequest(BaseModel):
    result_id: str = Field(..., min_length=1)
    result_data: str = Field(..., min_length=1, description="Result JSON as rendered by the widget")


class SaveResultResponse(BaseModel):
    success: bool = True
    url: str = Field(..., description="Shareable link, valid for 24 hours")
    expires_at: datetime

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "success": True,
                    "url": "https://spontaneity-engine.vercel.app/r/kq1v0pXk3u6yQ2Jd",
                    "expires_at": "2026-01-16T18:30:00Z",
                }
            ]
        }
    }
