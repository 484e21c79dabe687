"""Prompt assembly for the contract review model."""

SYSTEM_INSTRUCTION = (
    "あなたは一流の弁護士です。アップロードされた契約書等の内容を必ず精査し、"
    "本文から条文番号や該当箇所を明記して、具体的なリスクや懸念点を厳しく列挙してください。"
    "一般論だけでなく、本文の記載内容に基づく指摘を優先してください。"
)

DOCUMENT_INSTRUCTION = (
    "【重要】以下はアップロードされた契約書等の内容です。この内容を必ず参照し、"
    "本文から条文番号や該当箇所を明記して、具体的なリスクや懸念点を抜き出して列挙してください。"
    "一般論は不要です。必ず本文の記載内容に基づく指摘を優先してください。"
)

TEXT_SEPARATOR = "\n---\n"
QUESTION_PREFIX = "Question: "
INSTRUCTION_MARKER = "\n[Additional instruction]"


def assemble_prompt(
    message: str,
    extracted_texts: list[str],
    custom_instruction: str = "",
) -> str:
    """Build the user prompt sent to the model.

    With no extracted texts the prompt is the message itself. Otherwise the
    fixed document instruction comes first, then the joined texts in upload
    order, then the question. A non-empty custom instruction is appended
    last on its own line.

    Args:
        message: The user's question.
        extracted_texts: Text extracted from each attachment, in order.
        custom_instruction: Optional extra instruction.

    Returns:
        The assembled prompt.
    """
    prompt = message
    if extracted_texts:
        prompt = (
            f"{DOCUMENT_INSTRUCTION}\n\n"
            f"{TEXT_SEPARATOR.join(extracted_texts)}\n\n"
            f"{QUESTION_PREFIX}{message}"
        )
    if custom_instruction:
        prompt += f"{INSTRUCTION_MARKER}{custom_instruction}"
    return prompt
