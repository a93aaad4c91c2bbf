from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PaperContext(BaseModel):
    """The question paper the student is looking at while chatting."""
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    title: str
    subject: str
    board: str
    class_level: str
    year: int | str
    exam_type: str
    description: str | None = None


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Body of the chat relay endpoint."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # Optional so a missing message maps to "Message is required", not a schema error
    message: str | None = None
    paper_context: PaperContext | None = None
    conversation_history: list[ChatTurn] = Field(default_factory=list)


class ChatResponse(BaseModel):
    message: str
