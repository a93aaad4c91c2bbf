"""Database queries for the question_papers table."""
from uuid import UUID

from db.supabase_client import get_supabase_client
from models.paper import PaperFilters, sanitize_search

TABLE = "question_papers"


class PaperQueries:
    """Centralized queries for the question_papers table."""

    def __init__(self, client=None):
        self.db = client or get_supabase_client()

    def create(self, data: dict) -> dict | None:
        """Insert a paper record."""
        result = self.db.table(TABLE).insert(data).execute()
        return result.data[0] if result.data else None

    def get_by_id(self, paper_id: str | UUID) -> dict | None:
        """Get a paper by ID."""
        result = self.db.table(TABLE).select("*").eq("id", str(paper_id)).execute()
        return result.data[0] if result.data else None

    def list_filtered(self, filters: PaperFilters) -> list[dict]:
        """List approved papers matching the browse filters, newest first."""
        query = self.db.table(TABLE).select("*").eq("status", "approved")

        for column in ("board", "class_level", "subject", "exam_type"):
            value = getattr(filters, column)
            if value:
                query = query.eq(column, value)
        for column in ("year", "semester", "internal_number"):
            value = getattr(filters, column)
            if value is not None:
                query = query.eq(column, value)

        if filters.institute_name:
            query = query.ilike("institute_name", f"%{sanitize_search(filters.institute_name)}%")

        search = sanitize_search(filters.q)
        if search:
            query = query.ilike("title", f"%{search}%")

        result = query.order("created_at", desc=True).limit(filters.limit).execute()
        return result.data

    def list_by_user(self, user_id: str | UUID, limit: int = 50) -> list[dict]:
        """List a user's own papers, newest first."""
        result = (
            self.db.table(TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return result.data
