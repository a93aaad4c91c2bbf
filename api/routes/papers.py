from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from db.queries.papers import PaperQueries
from dependencies.auth import UserContext, get_current_user, get_user_supabase
from models import PaperFilters, QuestionPaper, QuestionPaperCreate
from services.papers import format_paper_title

router = APIRouter(prefix="/api/papers", tags=["papers"])


def get_queries() -> PaperQueries:
    return PaperQueries()


def _to_paper(row: dict) -> QuestionPaper:
    paper = QuestionPaper(**row)
    paper.formatted_title = format_paper_title(paper.subject, paper.semester, paper.year)
    return paper


@router.post("", response_model=QuestionPaper, status_code=201)
async def create_paper(
    request: QuestionPaperCreate,
    user: UserContext = Depends(get_current_user),
    db=Depends(get_user_supabase),
):
    """
    Record a question paper after its files were uploaded.

    Runs with the caller's JWT so row-level security applies to the insert.
    """
    queries = PaperQueries(client=db)
    row = queries.create({
        **request.model_dump(mode="json"),
        "user_id": user.user_id,
        "status": "approved",
    })
    if not row:
        raise HTTPException(status_code=500, detail="Failed to create paper")
    return _to_paper(row)


@router.get("", response_model=list[QuestionPaper])
async def list_papers(
    filters: Annotated[PaperFilters, Query()],
    queries: PaperQueries = Depends(get_queries),
):
    """Browse approved papers, newest first."""
    return [_to_paper(row) for row in queries.list_filtered(filters)]


@router.get("/mine", response_model=list[QuestionPaper])
async def list_my_papers(
    limit: int = Query(50, ge=1, le=100),
    user: UserContext = Depends(get_current_user),
    db=Depends(get_user_supabase),
):
    """List the caller's own uploads, whatever their status."""
    queries = PaperQueries(client=db)
    return [_to_paper(row) for row in queries.list_by_user(user.user_id, limit=limit)]


@router.get("/{paper_id}", response_model=QuestionPaper)
async def get_paper(paper_id: UUID, queries: PaperQueries = Depends(get_queries)):
    """Get an approved paper by ID."""
    row = queries.get_by_id(paper_id)
    if not row or row.get("status") not in (None, "approved"):
        raise HTTPException(status_code=404, detail="Paper not found")
    return _to_paper(row)
