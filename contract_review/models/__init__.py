"""Pydantic models for the chat pipeline and the browser pages.

Models:
    - UploadedFile: A single attachment as received by the server
    - ChatRequest: Question, custom instruction and attachments
    - ChatEnvelope: Response body with result content and debug payload
    - ChatMessage: One entry in the browser chat thread
    - KnowledgeItem: One note on the knowledge page
"""

from contract_review.models.schemas import (
    ChatEnvelope,
    ChatMessage,
    ChatRequest,
    DebugInfo,
    KnowledgeItem,
    MessageRole,
    ResultContent,
    UploadedFile,
)

__all__ = [
    "ChatEnvelope",
    "ChatMessage",
    "ChatRequest",
    "DebugInfo",
    "KnowledgeItem",
    "MessageRole",
    "ResultContent",
    "UploadedFile",
]
