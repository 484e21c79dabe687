"""HTTP client used by the chat page to call the chat endpoint."""

import logging
import os

import httpx
from pydantic import BaseModel, Field

from contract_review.models.schemas import UploadedFile

logger = logging.getLogger(__name__)

CHAT_PATH = "/api/chat"


def default_api_base_url() -> str:
    """API_BASE_URL, or the local server on PORT when unset."""
    return os.getenv("API_BASE_URL") or f"http://localhost:{os.getenv('PORT', '8000')}"


class ChatReply(BaseModel):
    """Parsed chat endpoint response as seen by the page."""

    ok: bool
    content: str
    debug: dict = Field(default_factory=dict)


async def post_chat(
    message: str,
    custom_instruction: str,
    attachments: list[UploadedFile],
    base_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ChatReply:
    """Send a question (and any attachments) to the chat endpoint.

    Attachments of any type go out as multipart ``file`` parts; a request
    without attachments is sent as JSON.

    Raises:
        httpx.HTTPError: If the server cannot be reached.
        ValueError: If the body is not a chat envelope.
    """
    base_url = base_url or default_api_base_url()
    async with httpx.AsyncClient(base_url=base_url, transport=transport, timeout=None) as client:
        if attachments:
            response = await client.post(
                CHAT_PATH,
                data={"message": message, "customInstruction": custom_instruction},
                files=[
                    ("file", (f.filename, f.content, f.content_type or "application/octet-stream"))
                    for f in attachments
                ],
            )
        else:
            response = await client.post(
                CHAT_PATH,
                json={"message": message, "customInstruction": custom_instruction},
            )

    data = response.json()
    if not isinstance(data, dict) or "result" not in data:
        raise ValueError(f"Unexpected chat response: HTTP {response.status_code}")

    logger.info(f"Chat endpoint answered {response.status_code}")
    return ChatReply(
        ok=response.is_success,
        content=data["result"]["content"],
        debug=data.get("debug") or {},
    )
