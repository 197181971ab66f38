"""
Pytest configuration for Spontaneity Engine backend tests.

Sets up test environment and global fixtures.
"""
import asyncio
import os
import pytest
from unittest.mock import MagicMock

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_PUBLISHABLE_KEY", "test-publishable-key")
os.environ.setdefault("SUPABASE_SECRET_KEY", "test-secret-key")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-api-key")
os.environ.setdefault("OPENAI_API_KEY", "test-openai-api-key")

from spontaneity.engine.adapters import ModelAdapter, RecommendationConfig  # noqa: E402


class StubAdapter(ModelAdapter):
    """
    Scriptable adapter for engine and route tests.

    Returns `result`, raises `error`, or sleeps `delay` seconds first.
    Records every prompt it receives and whether it was cancelled.
    """

    provider = "stub"

    def __init__(self, name, result="{}", error=None, delay=0.0):
        self._name = name
        self.result = result
        self.error = error
        self.delay = delay
        self.calls = []
        self.cancelled = False

    @property
    def name(self) -> str:
        return self._name

    async def generate_recommendation(self, prompt: str, config: RecommendationConfig) -> str:
        self.calls.append((prompt, config))
        if self.delay:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def make_adapter():
    """Factory fixture for StubAdapter instances."""
    return StubAdapter


@pytest.fixture
def supabase_client():
    """
    Mock Supabase client.
    Returns a MagicMock that simulates the query builder chain.
    """
    mock_client = MagicMock()
    return mock_client
