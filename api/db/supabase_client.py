from functools import lru_cache

from supabase import Client, create_client

import config


@lru_cache()
def get_supabase_client() -> Client:
    """Get cached Supabase client instance (service role, bypasses RLS)."""
    url = config.SUPABASE_URL
    key = config.SUPABASE_SERVICE_ROLE_KEY

    if not url or not key:
        raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")

    return create_client(url, key)


def user_client(jwt: str) -> Client:
    """Get a Supabase client bound to a user's JWT (RLS enforced)."""
    url = config.SUPABASE_URL
    key = config.SUPABASE_ANON_KEY

    if not url or not key:
        raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")

    client = create_client(url, key)
    client.postgrest.auth(jwt)
    return client
