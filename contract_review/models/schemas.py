from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class UploadedFile(BaseModel):
    """A single uploaded attachment.

    Attributes:
        filename: Name supplied by the browser (may be empty).
        content_type: Declared mime-type (may be empty or wrong).
        content: Raw file bytes.
    """

    filename: str = ""
    content_type: str = ""
    content: bytes = b""


class ChatRequest(BaseModel):
    """Request payload for the chat endpoint.

    Attributes:
        message: User's question.
        custom_instruction: Optional extra instruction appended to the prompt.
        files: Attachments in upload order (multipart requests only).
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str = ""
    custom_instruction: str = Field("", alias="customInstruction")
    files: list[UploadedFile] = Field(default_factory=list, exclude=True)


class ResultContent(BaseModel):
    content: str


class DebugInfo(BaseModel):
    """Intermediate pipeline state echoed back with every response.

    Only the fields relevant to the outcome are set; unset fields are
    omitted from the serialized body.
    """

    model_config = ConfigDict(populate_by_name=True)

    step: str | None = None
    extracted_texts: list[str] | None = Field(None, alias="extractedTexts")
    assembled_prompt: str | None = Field(None, alias="assembledPrompt")
    upstream_status: int | None = Field(None, alias="upstreamStatus")
    upstream_status_text: str | None = Field(None, alias="upstreamStatusText")
    upstream_body: str | None = Field(None, alias="upstreamBody")
    error: str | None = None


class ChatEnvelope(BaseModel):
    """Response body of the chat endpoint."""

    result: ResultContent
    debug: DebugInfo = Field(default_factory=DebugInfo)

    @classmethod
    def build(cls, content: str, **debug: object) -> "ChatEnvelope":
        return cls(result=ResultContent(content=content), debug=DebugInfo(**debug))

    def to_json(self) -> dict:
        """Serialize with camelCase keys and without unset debug fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class MessageRole(str, Enum):
    """Speaker of a chat message."""

    USER = "user"
    AI = "ai"


class ChatMessage(BaseModel):
    """A message in the browser chat thread.

    Attributes:
        id: Unique message identifier.
        role: Who produced the message.
        content: Message text.
        timestamp: Local creation time.
        attachments: Names of files sent with the message.
    """

    id: str
    role: MessageRole
    content: str
    timestamp: datetime = Field(default_factory=datetime.now)
    attachments: list[str] = Field(default_factory=list)


class KnowledgeItem(BaseModel):
    """A note recorded on the knowledge page."""

    id: str
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    created_at: datetime = Field(default_factory=datetime.now)
