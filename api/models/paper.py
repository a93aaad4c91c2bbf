from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 1000
MAX_INSTITUTE_LENGTH = 200
MAX_SEARCH_LENGTH = 100
MIN_YEAR = 2000

# Exam types that are tied to a semester / an internal assessment number
SEMESTER_EXAM_TYPES = frozenset({"sem_paper", "internals"})
INTERNAL_EXAM_TYPES = frozenset({"internals"})


def max_year() -> int:
    return date.today().year + 1


class QuestionPaper(BaseModel):
    """Row from the question_papers table."""
    id: UUID
    user_id: UUID
    title: str
    description: str | None = None
    class_level: str
    board: str
    subject: str
    year: int
    exam_type: str
    semester: int | None = None
    internal_number: int | None = None
    institute_name: str | None = None
    file_url: str
    file_name: str
    file_type: str | None = None
    additional_file_urls: list[str] | None = None
    tags: list[str] | None = None
    status: str | None = None
    views_count: int | None = 0
    downloads_count: int | None = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    formatted_title: str | None = None


class QuestionPaperCreate(BaseModel):
    """Metadata for a paper whose files have already been stored."""
    title: str = Field(min_length=1, max_length=MAX_TITLE_LENGTH)
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    class_level: str = Field(min_length=1)
    board: str = Field(min_length=1)
    subject: str = Field(min_length=1)
    year: int
    exam_type: str = Field(min_length=1)
    semester: int | None = Field(default=None, ge=1, le=8)
    internal_number: int | None = Field(default=None, ge=1, le=3)
    institute_name: str | None = Field(default=None, max_length=MAX_INSTITUTE_LENGTH)
    file_url: str = Field(min_length=1)
    file_name: str = Field(min_length=1)
    file_type: str | None = None
    additional_file_urls: list[str] | None = None
    tags: list[str] | None = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("description", "institute_name", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("year")
    @classmethod
    def check_year(cls, v: int) -> int:
        if v < MIN_YEAR or v > max_year():
            raise ValueError(f"Year must be between {MIN_YEAR} and {max_year()}")
        return v

    @model_validator(mode="after")
    def check_exam_type_fields(self):
        if self.exam_type in SEMESTER_EXAM_TYPES:
            if self.semester is None:
                raise ValueError("Please select a semester for this exam type")
        else:
            self.semester = None

        if self.exam_type in INTERNAL_EXAM_TYPES:
            if self.internal_number is None:
                raise ValueError("Please select the internal number (1, 2, or 3)")
        else:
            self.internal_number = None
        return self


class PaperFilters(BaseModel):
    """Browse filters; empty strings mean "any"."""
    q: str = Field(default="", max_length=500)
    board: str = Field(default="", max_length=50)
    class_level: str = Field(default="", max_length=50)
    subject: str = Field(default="", max_length=100)
    year: int | None = None
    exam_type: str = Field(default="", max_length=50)
    semester: int | None = Field(default=None, ge=1, le=8)
    internal_number: int | None = Field(default=None, ge=1, le=3)
    institute_name: str = Field(default="", max_length=MAX_INSTITUTE_LENGTH)
    limit: int = Field(default=50, ge=1, le=100)


def sanitize_search(text: str) -> str:
    """Truncate a search string and escape ILIKE wildcards."""
    trimmed = text[:MAX_SEARCH_LENGTH].strip()
    out = []
    for ch in trimmed:
        if ch in "%_\\":
            out.append("\\")
        out.append(ch)
    return "".join(out)
