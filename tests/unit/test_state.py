"""Unit tests for the chat and knowledge page state."""

import json

import pytest_check as check

from contract_review.models.schemas import MessageRole, UploadedFile
from contract_review.ui.state import AI_FAILURE_MESSAGE, ChatSession, KnowledgeBook


def attachment(name: str = "contract.docx") -> UploadedFile:
    return UploadedFile(filename=name, content_type="", content=b"x")


class TestChatSessionSend:
    """Tests for the send lifecycle."""

    def test_rejects_empty_send(self) -> None:
        """Nothing typed, attached or instructed means no send."""
        session = ChatSession()

        check.is_false(session.can_send("   ", "  "))
        check.is_true(session.can_send("question"))
        check.is_true(session.can_send("", "instruction only"))

    def test_attachment_alone_allows_send(self) -> None:
        session = ChatSession()
        session.add_attachment(attachment())

        assert session.can_send("")

    def test_send_button_follows_content_and_loading(self) -> None:
        """The button is off with nothing to send and while a reply is pending."""
        session = ChatSession()
        check.is_false(session.send_enabled("", ""))
        check.is_true(session.send_enabled("question"))

        session.begin_send("question")
        check.is_false(session.send_enabled("another question"))

        session.finish_send("answer")
        check.is_true(session.send_enabled("another question"))

    def test_send_button_tracks_attachments(self) -> None:
        session = ChatSession()
        session.add_attachment(attachment())
        check.is_true(session.send_enabled(""))

        session.remove_attachment(0)
        check.is_false(session.send_enabled(""))

    def test_begin_send_appends_user_message(self) -> None:
        """User message is added optimistically and attachments are handed over."""
        session = ChatSession()
        session.add_attachment(attachment("a.docx"))
        session.add_attachment(attachment("b.xlsx"))

        files = session.begin_send("any risks?", "focus on termination")

        message = session.messages[-1]
        check.equal(message.role, MessageRole.USER)
        check.equal(message.content, "any risks?\n【追加プロンプト】focus on termination")
        check.equal(message.attachments, ["a.docx", "b.xlsx"])
        check.equal([f.filename for f in files], ["a.docx", "b.xlsx"])
        check.equal(session.attachments, [])
        check.is_true(session.is_loading)

    def test_reply_appends_one_ai_message(self) -> None:
        session = ChatSession()
        session.begin_send("q")

        session.record_reply(True, "no risks found", {"extractedTexts": [], "assembledPrompt": "q"})

        check.equal([m.role for m in session.messages], [MessageRole.USER, MessageRole.AI])
        check.equal(session.messages[-1].content, "no risks found")
        check.is_false(session.is_loading)
        check.is_none(session.error_detail)
        check.equal(session.last_prompt, "q")

    def test_error_reply_exposes_debug(self) -> None:
        """Non-2xx replies show the debug payload and the server's content."""
        session = ChatSession()
        session.begin_send("q")
        debug = {"step": "apikey"}

        session.record_reply(False, "OpenAI APIキーが設定されていません。", debug)

        check.equal(session.messages[-1].content, "OpenAI APIキーが設定されていません。")
        check.equal(json.loads(session.error_detail), debug)

    def test_local_failure_uses_fixed_message(self) -> None:
        session = ChatSession()
        session.begin_send("q")

        session.record_failure("ConnectError: refused")

        check.equal(session.messages[-1].content, AI_FAILURE_MESSAGE)
        check.equal(session.error_detail, "ConnectError: refused")
        check.is_false(session.is_loading)

    def test_new_send_clears_previous_error(self) -> None:
        session = ChatSession()
        session.begin_send("q")
        session.record_failure("boom")

        session.begin_send("again")

        assert session.error_detail is None

    def test_messages_stay_chronological(self) -> None:
        """Overlapping sends still append in call order."""
        session = ChatSession()
        session.begin_send("first")
        session.begin_send("second")
        session.finish_send("answer one")
        session.finish_send("answer two")

        assert [m.content for m in session.messages] == [
            "first",
            "second",
            "answer one",
            "answer two",
        ]

    def test_remove_attachment_by_index(self) -> None:
        session = ChatSession()
        for name in ("a", "b", "c"):
            session.add_attachment(attachment(name))

        session.remove_attachment(1)
        session.remove_attachment(10)

        assert [f.filename for f in session.attachments] == ["a", "c"]


class TestKnowledgeBook:
    """Tests for knowledge note add/delete."""

    def test_add_prepends_trimmed_item(self) -> None:
        book = KnowledgeBook()
        book.add("Old", "content", "contract")

        item = book.add("  New  ", " body ", " labor ")

        check.equal(book.items[0], item)
        check.equal((item.title, item.content, item.category), ("New", "body", "labor"))
        check.equal([i.title for i in book.items], ["New", "Old"])

    def test_rejects_blank_fields(self) -> None:
        """Any blank field after trimming is rejected."""
        book = KnowledgeBook()

        check.is_none(book.add("", "content", "category"))
        check.is_none(book.add("title", "   ", "category"))
        check.is_none(book.add("title", "content", "\n"))
        check.equal(book.items, [])

    def test_ids_are_unique(self) -> None:
        book = KnowledgeBook()
        ids = {book.add(f"t{n}", "c", "k").id for n in range(20)}

        assert len(ids) == 20

    def test_delete_by_id(self) -> None:
        book = KnowledgeBook()
        keep = book.add("keep", "c", "k")
        drop = book.add("drop", "c", "k")

        book.delete(drop.id)
        book.delete("missing")

        assert book.items == [keep]
