"""
Supabase clients for CodeIR.

All persistence and auth goes through the hosted Supabase project. The
shared client uses the anon key and is only used for auth calls; table
access goes through a per-request client carrying the caller's JWT so that
row-level security applies as that user.
"""
import os
import logging
from supabase import create_client, Client

logger = logging.getLogger(__name__)

_supabase: Client = None


def _credentials():
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_ANON_KEY")
    if not url or not key:
        raise RuntimeError("Supabase credentials not configured. Check SUPABASE_URL and SUPABASE_ANON_KEY in .env")
    return url, key


def get_supabase() -> Client:
    """Get or create the shared anon Supabase client."""
    global _supabase
    if _supabase is None:
        url, key = _credentials()
        _supabase = create_client(url, key)
        logger.info("Supabase client created for %s", url)
    return _supabase


def get_user_client(access_token: str) -> Client:
    """Create a client whose table queries run as the given user."""
    url, key = _credentials()
    client = create_client(url, key)
    client.postgrest.auth(access_token)
    return client


def reset_client():
    """Drop the cached shared client (credentials changed, tests)."""
    global _supabase
    _supabase = None
