"""Magic-byte file type detection for question paper uploads.

The leading bytes decide the type, not the client's filename or MIME type.
Two exceptions:
- OLE (DOC) and ZIP (DOCX) containers are shared by other formats, so the
  filename suffix picks the format once the signature matches.
- HEIC/HEIF has no short fixed signature and is accepted on the declared
  MIME type or suffix alone.
"""
import os

import config
from models import ClassificationResult, FileKind

PDF_MAGIC = b"%PDF-"
JPEG_MAGIC = b"\xff\xd8\xff"
PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
RIFF_MAGIC = b"RIFF"
WEBP_MAGIC = b"WEBP"  # at offset 8, after the RIFF chunk size
OLE_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
ZIP_MAGIC = b"PK\x03\x04"

PDF = ClassificationResult(FileKind.PDF, "application/pdf", ".pdf")
JPEG = ClassificationResult(FileKind.IMAGE, "image/jpeg", ".jpg")
PNG = ClassificationResult(FileKind.IMAGE, "image/png", ".png")
WEBP = ClassificationResult(FileKind.IMAGE, "image/webp", ".webp")
HEIC = ClassificationResult(FileKind.IMAGE, "image/heic", ".heic")
DOC = ClassificationResult(FileKind.DOCUMENT, "application/msword", ".doc")
DOCX = ClassificationResult(
    FileKind.DOCUMENT,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".docx",
)

HEIC_MIME_TYPES = frozenset({"image/heic", "image/heif"})
HEIC_EXTENSIONS = (".heic", ".heif")


def _matches(content: bytes, signature: bytes, offset: int = 0) -> bool:
    """True if `signature` sits at `offset`. Short buffers never match."""
    end = offset + len(signature)
    return len(content) >= end and content[offset:end] == signature


def classify(content: bytes, filename: str, content_type: str | None) -> ClassificationResult | None:
    """
    Work out what an uploaded file really is.

    Args:
        content: Raw file bytes (any length, including empty)
        filename: Filename supplied by the client
        content_type: MIME type supplied by the client

    Returns:
        ClassificationResult with the MIME type and extension to store the
        file as, or None if the file is not a supported type.
    """
    name = (filename or "").lower()
    mime = (content_type or "").lower()

    if _matches(content, PDF_MAGIC):
        return PDF
    if _matches(content, JPEG_MAGIC):
        return JPEG
    if _matches(content, PNG_MAGIC):
        return PNG
    if _matches(content, RIFF_MAGIC) and _matches(content, WEBP_MAGIC, offset=8):
        return WEBP
    if _matches(content, OLE_MAGIC) and name.endswith(".doc"):
        return DOC
    if _matches(content, ZIP_MAGIC) and name.endswith(".docx"):
        return DOCX

    if mime in HEIC_MIME_TYPES or name.endswith(HEIC_EXTENSIONS):
        return HEIC

    if mime.startswith("image/"):
        extension = os.path.splitext(name)[1]
        if extension not in config.ALLOWED_EXTENSIONS:
            extension = ".jpg"
        return ClassificationResult(FileKind.IMAGE, mime, extension)

    return None
