import logging
import time
import uuid
from dataclasses import dataclass, field

import config
from db.queries.storage import StorageQueries
from errors import FileRejected
from models import ClassificationResult, FileError, StoredFile, UploadCandidate
from services.upload.classifier import PDF, PDF_MAGIC, classify

logger = logging.getLogger(__name__)

MIB = 1024 * 1024

UNSUPPORTED_TYPE_ERROR = (
    "Unsupported file type. Please upload PDF, DOC, DOCX, or images (JPEG, PNG, WEBP, HEIC)."
)
EMPTY_FILE_ERROR = "File appears to be empty or corrupted."
STORAGE_ERROR = "Failed to upload file to storage."


@dataclass
class IngestionResult:
    """Per-request outcome; every file ends up in exactly one list."""
    files: list[StoredFile] = field(default_factory=list)
    errors: list[FileError] = field(default_factory=list)


def _default_suffix() -> str:
    return uuid.uuid4().hex[:6]


class QuestionPaperIngestion:
    """Validates, classifies and stores uploaded question paper files."""

    def __init__(self, storage: StorageQueries | None = None, clock=time.time, suffix=_default_suffix):
        self.storage = storage or StorageQueries()
        self._clock = clock
        self._suffix = suffix

    def storage_key(self, user_id: str, extension: str) -> str:
        """{user_id}/{epoch_ms}_{random}{ext}; unique per call."""
        timestamp = int(self._clock() * 1000)
        return f"{user_id}/{timestamp}_{self._suffix()}{extension}"

    def check_file(self, candidate: UploadCandidate) -> ClassificationResult:
        """
        Apply the size limits and the magic-byte check to one file.

        Raises:
            FileRejected: with the user-facing reason
        """
        if candidate.size > config.MAX_FILE_SIZE:
            raise FileRejected(
                f"File too large ({candidate.size / MIB:.1f}MB). "
                f"Maximum is {config.MAX_FILE_SIZE // MIB}MB."
            )
        if candidate.size < config.MIN_FILE_SIZE:
            raise FileRejected(EMPTY_FILE_ERROR)

        classification = classify(candidate.content, candidate.filename, candidate.content_type)
        if classification is None:
            raise FileRejected(UNSUPPORTED_TYPE_ERROR)
        return classification

    def store(
        self,
        user_id: str,
        candidate: UploadCandidate,
        classification: ClassificationResult,
        error_message: str = STORAGE_ERROR,
    ) -> StoredFile:
        """Write one classified file to the bucket and resolve its public URL."""
        key = self.storage_key(user_id, classification.extension)
        try:
            self.storage.upload(key, candidate.content, classification.mime_type)
            public_url = self.storage.get_public_url(key)
        except Exception as e:
            logger.error(f"Storage upload error for {candidate.filename}: {e}")
            raise FileRejected(error_message, status_code=500) from e

        logger.info(f"Upload successful: {key}")
        return StoredFile(file_name=key, public_url=public_url, original_name=candidate.filename)

    def ingest(self, user_id: str, candidates: list[UploadCandidate]) -> IngestionResult:
        """
        Process a batch of uploaded files one at a time.

        A file that fails validation or storage is recorded in `errors` and
        the rest of the batch carries on. Both lists keep request order.
        """
        result = IngestionResult()

        for candidate in candidates:
            logger.info(
                f"Processing file: {candidate.filename} "
                f"size={candidate.size} type={candidate.content_type}"
            )
            try:
                classification = self.check_file(candidate)
                logger.info(f"Detected file type: {classification.kind.value} ({classification.mime_type})")
                stored = self.store(user_id, candidate, classification)
            except FileRejected as e:
                logger.warning(f"Rejected {candidate.filename}: {e.message}")
                result.errors.append(FileError(file_name=candidate.filename, error=e.message))
                continue
            result.files.append(stored)

        return result

    def store_pdf(self, user_id: str, candidate: UploadCandidate) -> StoredFile:
        """
        Single-file path that only accepts PDFs.

        Raises:
            FileRejected: for size/signature problems and storage failures
        """
        if candidate.size > config.MAX_FILE_SIZE:
            raise FileRejected(f"File too large. Maximum size is {config.MAX_FILE_SIZE // MIB}MB.")
        if candidate.size < len(PDF_MAGIC):
            raise FileRejected("Invalid PDF file")

        if not candidate.content.startswith(PDF_MAGIC):
            logger.warning(f"File does not have valid PDF magic bytes. Got: {candidate.content[:5]!r}")
            raise FileRejected("Invalid PDF file. The file content does not match PDF format.")

        return self.store(user_id, candidate, PDF, error_message="Failed to upload file to storage")
