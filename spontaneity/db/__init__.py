"""
Database access layer for the Spontaneity Engine backend.

All persistence goes through Supabase:
- User-scoped reads use RLS via get_supabase_client(access_token)
- Server-owned, append-only tables use get_service_role_client()

DO NOT define table schemas, migrations, or RLS policies here.
"""

from .client import get_service_role_client, get_supabase_client

__all__ = ["get_supabase_client", "get_service_role_client"]
