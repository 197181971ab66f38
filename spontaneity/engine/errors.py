"""
Error taxonomy for the Spontaneity Engine.

Propagation rules:
- AdapterError / AdapterTimeoutError are recovered inside the engine by
  advancing to the next adapter.
- AllAdaptersExhaustedError and PolicyUnsatisfiableError fail the request
  (HTTP 500 at the route layer).
- InvalidInputError maps to HTTP 400.
- Audit log failures never raise; see services/audit_log_service.py.
"""

from typing import Optional


class SpontaneityError(Exception):
    """Base class for all engine and pipeline errors."""


class InvalidInputError(SpontaneityError, ValueError):
    """User input is empty or whitespace only."""


class EngineConfigurationError(SpontaneityError):
    """No adapter could be constructed from the current settings."""


class AdapterError(SpontaneityError):
    """A single provider call failed (non-2xx, SDK error or malformed payload)."""

    def __init__(self, message: str, adapter_name: Optional[str] = None):
        super().__init__(message)
        self.adapter_name = adapter_name


class AdapterTimeoutError(AdapterError):
    """A provider call did not settle within the per-attempt timeout."""


class AllAdaptersExhaustedError(SpontaneityError):
    """Every adapter that was tried failed; carries the last failure message."""

    def __init__(self, message: str, last_error: Optional[str] = None):
        super().__init__(message)
        self.last_error = last_error


class PolicyUnsatisfiableError(SpontaneityError):
    """Neither the computed nor the AI-only trust signals satisfy the policy."""
