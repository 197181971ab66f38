"""
Logging utilities for the Spontaneity Engine backend.

Provides standardized logger configuration following privacy rules.

CRITICAL PRIVACY RULES:
- NEVER log full user requests (log a short prefix or the input hash)
- NEVER log Supabase Auth tokens, provider API keys, or secrets
- NEVER log raw UGC submissions or feedback comments

Acceptable logging:
- High-level events (e.g., "Engine invoked", "Adapter GeminiAdapter failed")
- Non-sensitive metadata (e.g., "badge=community_signal", "partner_scope=default")
- Error messages without credentials
"""

import logging
from typing import Optional


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger for the specified module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (defaults to INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.INFO

    logger.setLevel(level)

    # Add handler if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def preview(text: str, length: int = 50) -> str:
    """Short, log-safe prefix of user-supplied text."""
    text = text.strip()
    return text if len(text) <= length else f"{text[:length]}..."
