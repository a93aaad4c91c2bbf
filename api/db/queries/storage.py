"""Storage bucket queries."""
import config
from db.supabase_client import get_supabase_client


class StorageQueries:
    """Centralized queries for the question papers bucket."""

    def __init__(self, bucket: str | None = None, client=None):
        self.db = client or get_supabase_client()
        self.bucket = bucket or config.QUESTION_PAPERS_BUCKET

    def upload(self, path: str, content: bytes, content_type: str = "application/octet-stream") -> None:
        """Upload a file to the bucket. Never overwrites an existing object."""
        self.db.storage.from_(self.bucket).upload(
            path=path,
            file=content,
            file_options={"content-type": content_type, "upsert": "false"},
        )

    def get_public_url(self, path: str) -> str:
        """Public URL for an object in the bucket."""
        return self.db.storage.from_(self.bucket).get_public_url(path)
