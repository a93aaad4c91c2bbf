from .chat import ChatRequest, ChatResponse, ChatTurn, PaperContext
from .paper import PaperFilters, QuestionPaper, QuestionPaperCreate
from .upload import (
    ClassificationResult,
    FileError,
    FileKind,
    PdfUploadResponse,
    StoredFile,
    UploadCandidate,
    UploadFailedResponse,
    UploadResponse,
)

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "ChatTurn",
    "ClassificationResult",
    "FileError",
    "FileKind",
    "PaperContext",
    "PaperFilters",
    "PdfUploadResponse",
    "QuestionPaper",
    "QuestionPaperCreate",
    "StoredFile",
    "UploadCandidate",
    "UploadFailedResponse",
    "UploadResponse",
]
