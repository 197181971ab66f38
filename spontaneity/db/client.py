"""
Supabase client factory.

Two kinds of clients:
1. get_supabase_client(access_token): per-request client carrying the
   user's JWT, so Row Level Security applies (user_id = auth.uid()).
2. get_service_role_client(): system client for server-owned tables
   (audit_logs, engine_requests, ugc_submissions, feedback, abuse_signals,
   saved_results). Bypasses RLS.

CRITICAL SECURITY RULES:
1. NEVER use the service role client to read or write user-owned rows
2. NEVER return the secret key or expose it in logs
"""

import logging

from spontaneity.config import settings
from supabase import Client, create_client

logger = logging.getLogger(__name__)


def get_supabase_client(access_token: str) -> Client:
    """
    Create an authenticated Supabase client for a specific user.

    Args:
        access_token: The user's JWT access token from Supabase Auth,
                     as verified in spontaneity/auth/dependencies.py.

    Returns:
        An authenticated Supabase client that enforces RLS.
    """
    client: Client = create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_PUBLISHABLE_KEY
    )

    # The token's 'sub' claim is what RLS policies see as auth.uid()
    client.auth.set_session(access_token, access_token)

    logger.debug(
        "Created authenticated Supabase client with user token "
        "(RLS enforced)"
    )

    return client


def get_service_role_client() -> Client:
    """
    Create a Supabase client with service_role privileges.

    WARNING: This bypasses RLS and should ONLY be used for server-owned,
    append-only tables (audit logs, request log, moderation inputs).

    Raises:
        ValueError: If SUPABASE_URL or SUPABASE_SECRET_KEY is not configured.
    """
    if not settings.SUPABASE_URL or not settings.SUPABASE_SECRET_KEY:
        raise ValueError(
            "SUPABASE_URL and SUPABASE_SECRET_KEY must be configured "
            "for system writes (audit logs, request log)."
        )

    return create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_SECRET_KEY
    )
