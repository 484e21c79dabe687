"""In-memory page state for the chat and knowledge pages.

Nothing here is persisted; a page reload starts from empty lists.
"""

import json
import time
import uuid

from contract_review.models.schemas import ChatMessage, KnowledgeItem, MessageRole, UploadedFile

AI_FAILURE_MESSAGE = "AI応答の取得に失敗しました。"
INSTRUCTION_LABEL = "\n【追加プロンプト】"


class ChatSession:
    """Chat thread, pending attachments and the loading flag.

    Messages are kept in chronological order. A send while another is in
    flight is allowed; each send produces one user and one AI message.
    """

    def __init__(self) -> None:
        self.messages: list[ChatMessage] = []
        self.attachments: list[UploadedFile] = []
        self.is_loading: bool = False
        self.error_detail: str | None = None
        self.extracted_texts: list[str] = []
        self.last_prompt: str | None = None

    def can_send(self, text: str, custom_instruction: str = "") -> bool:
        return bool(text.strip() or self.attachments or custom_instruction.strip())

    def send_enabled(self, text: str, custom_instruction: str = "") -> bool:
        """Whether the send button should be clickable."""
        return not self.is_loading and self.can_send(text, custom_instruction)

    def add_attachment(self, file: UploadedFile) -> None:
        self.attachments.append(file)

    def remove_attachment(self, index: int) -> None:
        if 0 <= index < len(self.attachments):
            del self.attachments[index]

    def begin_send(self, text: str, custom_instruction: str = "") -> list[UploadedFile]:
        """Append the user message and hand over the pending attachments.

        Args:
            text: Question typed by the user.
            custom_instruction: Optional extra instruction.

        Returns:
            The attachments to upload with this request.
        """
        files = list(self.attachments)
        content = text + (f"{INSTRUCTION_LABEL}{custom_instruction}" if custom_instruction else "")
        self.messages.append(
            ChatMessage(
                id=uuid.uuid4().hex,
                role=MessageRole.USER,
                content=content,
                attachments=[f.filename for f in files],
            )
        )
        self.attachments = []
        self.is_loading = True
        self.error_detail = None
        return files

    def finish_send(self, content: str | None) -> ChatMessage:
        """Append the AI reply, or the fixed failure message when None."""
        message = ChatMessage(
            id=uuid.uuid4().hex,
            role=MessageRole.AI,
            content=AI_FAILURE_MESSAGE if content is None else content,
        )
        self.messages.append(message)
        self.is_loading = False
        return message

    def record_reply(self, ok: bool, content: str, debug: dict) -> ChatMessage:
        """Store the debug panels from a server reply and append the answer.

        Args:
            ok: Whether the server answered with a 2xx status.
            content: ``result.content`` from the envelope.
            debug: ``debug`` object from the envelope.

        Returns:
            The appended AI message.
        """
        if not ok:
            self.error_detail = json.dumps(debug, ensure_ascii=False, indent=2)
        if "extractedTexts" in debug:
            self.extracted_texts = list(debug["extractedTexts"])
        if debug.get("assembledPrompt"):
            self.last_prompt = debug["assembledPrompt"]
        return self.finish_send(content)

    def record_failure(self, error: str) -> ChatMessage:
        self.error_detail = error
        return self.finish_send(None)

    def clear(self) -> None:
        self.messages.clear()
        self.attachments.clear()
        self.is_loading = False
        self.error_detail = None
        self.extracted_texts = []
        self.last_prompt = None


class KnowledgeBook:
    """Knowledge notes, newest first."""

    def __init__(self) -> None:
        self.items: list[KnowledgeItem] = []
        self._last_stamp = 0

    def _next_id(self) -> str:
        """Time-derived id, bumped when the clock has not advanced."""
        stamp = max(time.time_ns(), self._last_stamp + 1)
        self._last_stamp = stamp
        return str(stamp)

    def add(self, title: str, content: str, category: str) -> KnowledgeItem | None:
        """Add a note; returns None if any field is blank after trimming."""
        title, content, category = title.strip(), content.strip(), category.strip()
        if not title or not content or not category:
            return None

        item = KnowledgeItem(id=self._next_id(), title=title, content=content, category=category)
        self.items.insert(0, item)
        return item

    def delete(self, item_id: str) -> None:
        self.items = [item for item in self.items if item.id != item_id]
