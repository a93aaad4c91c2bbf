from .supabase_client import get_supabase_client, user_client
from .queries import PaperQueries, StorageQueries

__all__ = ["get_supabase_client", "user_client", "PaperQueries", "StorageQueries"]
