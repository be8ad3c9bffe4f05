"""Supabase client singleton"""
from typing import Optional

from supabase import Client, ClientOptions, create_client  # type: ignore

from app.config import get_settings

_supabase_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """Get or create Supabase client singleton"""
    global _supabase_client

    if _supabase_client is None:
        settings = get_settings()
        url = settings.supabase_url
        key = settings.supabase_service_role_key

        if not url or not key:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")

        # PostgREST calls otherwise have no upper bound
        options = ClientOptions(postgrest_client_timeout=int(settings.tracker_commit_timeout_seconds))
        _supabase_client = create_client(url, key, options=options)

    return _supabase_client
