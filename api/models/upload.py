from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FileKind(str, Enum):
    PDF = "pdf"
    IMAGE = "image"
    DOCUMENT = "document"


@dataclass(frozen=True)
class UploadCandidate:
    """One file read from a multipart request."""
    content: bytes
    filename: str
    content_type: str = ""

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class ClassificationResult:
    kind: FileKind
    mime_type: str
    extension: str


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StoredFile(_CamelModel):
    """A file written to the question-papers bucket."""
    file_name: str  # storage key
    public_url: str
    original_name: str


class FileError(_CamelModel):
    """Why a single file in a batch was not stored."""
    file_name: str  # name as supplied by the client
    error: str


class UploadResponse(_CamelModel):
    """Response for a batch upload with at least one stored file."""
    success: bool = True
    files: list[StoredFile]
    errors: list[FileError] | None = None
    # First file's values, kept for older clients
    public_url: str | None = None
    file_name: str | None = None


class UploadFailedResponse(_CamelModel):
    """Response when every file in the batch failed."""
    success: bool = False
    error: str
    errors: list[FileError]


class PdfUploadResponse(_CamelModel):
    """Response for the single-PDF upload."""
    success: bool = True
    file_name: str
    public_url: str
