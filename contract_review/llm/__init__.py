"""Prompt assembly and upstream model access.

Responsibilities:
    - Fixed system and document instructions for contract review
    - User prompt assembly from extracted texts, question and instruction
    - Single-attempt chat-completion calls over HTTPS with httpx

Maintains clean separation from the HTTP layer.
"""

from contract_review.llm.config import GatewayConfig, get_gateway_config
from contract_review.llm.gateway import ChatGateway, CompletionResult
from contract_review.llm.prompt import SYSTEM_INSTRUCTION, assemble_prompt

__all__ = [
    "SYSTEM_INSTRUCTION",
    "ChatGateway",
    "CompletionResult",
    "GatewayConfig",
    "assemble_prompt",
    "get_gateway_config",
]
