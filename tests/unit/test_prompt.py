"""Unit tests for prompt assembly."""

import pytest_check as check

from contract_review.llm.prompt import (
    DOCUMENT_INSTRUCTION,
    INSTRUCTION_MARKER,
    QUESTION_PREFIX,
    TEXT_SEPARATOR,
    assemble_prompt,
)


class TestAssembleWithoutDocuments:
    """Prompts built from the question alone."""

    def test_message_only(self) -> None:
        """No texts and no instruction returns the message unchanged."""
        assert assemble_prompt("review this", [], "") == "review this"

    def test_message_with_custom_instruction(self) -> None:
        """A custom instruction is appended on its own line."""
        prompt = assemble_prompt("review this", [], "focus on liability")

        assert prompt == "review this\n[Additional instruction]focus on liability"

    def test_empty_message_with_instruction(self) -> None:
        """An instruction alone still produces a prompt."""
        assert assemble_prompt("", [], "summarize") == "\n[Additional instruction]summarize"


class TestAssembleWithDocuments:
    """Prompts built around extracted document text."""

    def test_layout(self) -> None:
        """Instruction, joined texts, then the question."""
        prompt = assemble_prompt("any risks?", ["clause one", "clause two"])

        assert prompt == (
            f"{DOCUMENT_INSTRUCTION}\n\nclause one\n---\nclause two\n\nQuestion: any risks?"
        )

    def test_starts_with_fixed_instruction(self) -> None:
        """The fixed review instruction always leads."""
        prompt = assemble_prompt("q", ["text"])

        check.is_true(prompt.startswith(DOCUMENT_INSTRUCTION))
        check.is_in("条文番号", prompt)

    def test_texts_are_contiguous_and_ordered(self) -> None:
        """All texts appear joined by the separator in input order."""
        texts = ["third? no, first", "[PDF extraction unsupported]", "Term\n"]

        prompt = assemble_prompt("q", texts, "")

        check.is_in(TEXT_SEPARATOR.join(texts), prompt)
        positions = [prompt.index(text) for text in texts]
        check.equal(positions, sorted(positions))

    def test_custom_instruction_comes_last(self) -> None:
        """The custom instruction follows the question."""
        prompt = assemble_prompt("q", ["text"], "cite articles")

        check.is_true(prompt.endswith(f"{QUESTION_PREFIX}q{INSTRUCTION_MARKER}cite articles"))

    def test_is_pure(self) -> None:
        """Same inputs always produce the same prompt."""
        args = ("q", ["a", "b"], "c")

        assert assemble_prompt(*args) == assemble_prompt(*args)
