from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from dependencies.auth import UserContext, get_current_user
from errors import FileRejected
from models import PdfUploadResponse, UploadCandidate, UploadFailedResponse, UploadResponse
from services.upload import QuestionPaperIngestion

router = APIRouter(tags=["uploads"])


def get_ingestion() -> QuestionPaperIngestion:
    return QuestionPaperIngestion()


async def _read_candidate(file: UploadFile) -> UploadCandidate:
    content = await file.read()
    return UploadCandidate(
        content=content,
        filename=file.filename or "",
        content_type=file.content_type or "",
    )


@router.post(
    "/functions/v1/upload-question-paper",
    response_model=UploadResponse,
    response_model_exclude_none=True,
    responses={400: {"model": UploadFailedResponse}},
)
@router.post(
    "/api/uploads",
    response_model=UploadResponse,
    response_model_exclude_none=True,
    responses={400: {"model": UploadFailedResponse}},
)
async def upload_question_papers(
    files: list[UploadFile] | None = File(None),
    user: UserContext = Depends(get_current_user),
    ingestion: QuestionPaperIngestion = Depends(get_ingestion),
):
    """
    Upload one or more question paper files (PDF, DOC, DOCX, images).

    - Checks size limits and magic bytes for each file
    - Stores accepted files under the caller's folder in the bucket
    - Files are independent: one bad file does not fail the batch
    - Returns 400 only when no file could be stored
    """
    if not files:
        raise HTTPException(status_code=400, detail="No files provided")

    candidates = [await _read_candidate(f) for f in files]
    result = ingestion.ingest(user.user_id, candidates)

    if not result.files:
        failed = UploadFailedResponse(error=result.errors[0].error, errors=result.errors)
        return JSONResponse(status_code=400, content=failed.model_dump(by_alias=True))

    first = result.files[0]
    return UploadResponse(
        files=result.files,
        errors=result.errors or None,
        public_url=first.public_url,
        file_name=first.file_name,
    )


@router.post("/functions/v1/validate-pdf-upload", response_model=PdfUploadResponse)
@router.post("/api/uploads/pdf", response_model=PdfUploadResponse)
async def upload_pdf(
    file: UploadFile | None = File(None),
    user: UserContext = Depends(get_current_user),
    ingestion: QuestionPaperIngestion = Depends(get_ingestion),
):
    """Upload a single PDF; anything without a PDF header is refused."""
    if file is None:
        raise HTTPException(status_code=400, detail="No file provided")

    candidate = await _read_candidate(file)
    try:
        stored = ingestion.store_pdf(user.user_id, candidate)
    except FileRejected as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e

    return PdfUploadResponse(file_name=stored.file_name, public_url=stored.public_url)
