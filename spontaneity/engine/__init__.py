"""
Spontaneity Engine - multi-provider LLM orchestration.

Components:

1. Model adapters (adapters.py)
   - GeminiAdapter: Google Gen AI SDK
   - OpenAIAdapter: OpenAI Chat Completions
   - Same async contract: generate_recommendation(prompt, config) -> str

2. SpontaneityEngine (engine.py)
   - Ordered fallback across adapters with a per-attempt timeout
   - Reports the winning adapter and the attempt log

The HTTP-facing pipeline (moderation, trust, audit) lives in:
- spontaneity/services/spontaneity_service.py
"""

from spontaneity.engine.adapters import (
    GeminiAdapter,
    ModelAdapter,
    OpenAIAdapter,
    RecommendationConfig,
)
from spontaneity.engine.engine import (
    AdapterAttempt,
    EngineConfig,
    EngineResult,
    SpontaneityEngine,
)

__all__ = [
    "ModelAdapter",
    "GeminiAdapter",
    "OpenAIAdapter",
    "RecommendationConfig",
    "SpontaneityEngine",
    "EngineConfig",
    "EngineResult",
    "AdapterAttempt",
]
