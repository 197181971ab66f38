"""
SpontaneityEngine - ordered multi-provider orchestration.

The engine holds an ordered list of model adapters (list order = priority)
and, for each request, tries them one at a time:

- every attempt is raced against `timeout_ms` with asyncio.wait_for, which
  cancels the in-flight provider call when the timer wins;
- the first successful adapter wins and no further adapters are tried;
- a failure advances to the next adapter when fallback is enabled;
- when fallback is disabled the first failure ends the request.

There is no retry of the same adapter, no backoff and no health state kept
between requests. Timeouts are per attempt, so the worst-case latency is
the sum of the timeouts of every failing adapter.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from spontaneity.engine.adapters import ModelAdapter, RecommendationConfig
from spontaneity.engine.errors import (
    AdapterTimeoutError,
    AllAdaptersExhaustedError,
    InvalidInputError,
)
from spontaneity.engine.prompts import build_spontaneity_prompt

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30000


@dataclass(frozen=True)
class EngineConfig:
    """Engine options. Immutable once the engine is built."""
    default_config: RecommendationConfig = field(default_factory=RecommendationConfig)
    enable_fallback: bool = True
    timeout_ms: int = DEFAULT_TIMEOUT_MS


@dataclass(frozen=True)
class AdapterAttempt:
    """One entry of the engine's per-request attempt log."""
    adapter_name: str
    success: bool
    duration_ms: float
    error: Optional[str] = None


@dataclass(frozen=True)
class EngineResult:
    """Winning output plus the attempt log that produced it."""
    result: str
    adapter_used: str
    attempts: List[AdapterAttempt]


class SpontaneityEngine:
    """Main orchestrator for AI-powered spontaneity recommendations."""

    def __init__(self, adapters: Sequence[ModelAdapter], config: Optional[EngineConfig] = None):
        if not adapters:
            raise ValueError("SpontaneityEngine requires at least one adapter")

        self._adapters: List[ModelAdapter] = list(adapters)
        self._config = config or EngineConfig()

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def adapter_count(self) -> int:
        """Number of adapters registered with the engine."""
        return len(self._adapters)

    @property
    def adapter_names(self) -> List[str]:
        """Display names of the registered adapters, in priority order."""
        return [adapter.name for adapter in self._adapters]

    async def run_engine(
        self,
        user_input: str,
        config: Optional[RecommendationConfig] = None,
    ) -> str:
        """
        Generate a recommendation for `user_input`.

        Returns:
            Raw text of the first adapter that succeeds within its timeout.

        Raises:
            InvalidInputError: If user_input is empty or whitespace.
            AllAdaptersExhaustedError: If no adapter produced a result.
        """
        outcome = await self.run_engine_with_metadata(user_input, config)
        return outcome.result

    async def run_engine_with_metadata(
        self,
        user_input: str,
        config: Optional[RecommendationConfig] = None,
    ) -> EngineResult:
        """Same as run_engine but also reports which adapter won and the attempt log."""
        if not user_input or not user_input.strip():
            raise InvalidInputError("User input cannot be empty")

        prompt = build_spontaneity_prompt(user_input)
        generation_config = config or self._config.default_config
        attempts: List[AdapterAttempt] = []

        for index, adapter in enumerate(self._adapters):
            is_last = index == len(self._adapters) - 1
            started = time.perf_counter()

            try:
                result = await self._execute_with_timeout(adapter, prompt, generation_config)
            except Exception as e:
                duration_ms = (time.perf_counter() - started) * 1000
                error_message = str(e) or type(e).__name__
                attempts.append(AdapterAttempt(adapter.name, False, duration_ms, error_message))
                logger.warning(f"Adapter {adapter.name} failed: {error_message}")

                if not self._config.enable_fallback:
                    raise AllAdaptersExhaustedError(
                        f"Adapter {adapter.name} failed and fallback is disabled: {error_message}",
                        last_error=error_message,
                    ) from e

                if not is_last:
                    logger.info("Falling back to next adapter...")
                    continue

                raise AllAdaptersExhaustedError(
                    f"All adapters exhausted. Last error: {error_message}",
                    last_error=error_message,
                ) from e

            duration_ms = (time.perf_counter() - started) * 1000
            attempts.append(AdapterAttempt(adapter.name, True, duration_ms))
            logger.info(f"Adapter {adapter.name} succeeded in {duration_ms:.0f}ms")
            return EngineResult(result=result, adapter_used=adapter.name, attempts=attempts)

        # Unreachable: the loop either returns or raises on the last adapter
        raise AllAdaptersExhaustedError("Unexpected error in engine execution")

    async def _execute_with_timeout(
        self,
        adapter: ModelAdapter,
        prompt: str,
        config: RecommendationConfig,
    ) -> str:
        timeout_ms = self._config.timeout_ms
        try:
            return await asyncio.wait_for(
                adapter.generate_recommendation(prompt, config),
                timeout=timeout_ms / 1000,
            )
        except asyncio.TimeoutError as e:
            raise AdapterTimeoutError(
                f"Operation timed out after {timeout_ms}ms", adapter.name
            ) from e
