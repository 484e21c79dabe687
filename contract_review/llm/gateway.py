"""Chat-completion gateway.

Sends one non-streaming request per call to an OpenAI-compatible
``/chat/completions`` endpoint. There is no retry; any failure is turned
into a ``CompletionResult`` carrying a readable message and the upstream
status so the caller can report it.
"""

import logging

import httpx
from pydantic import BaseModel

from contract_review.llm.config import GatewayConfig, get_gateway_config

logger = logging.getLogger(__name__)

EMPTY_RESPONSE_FALLBACK = "AI応答の取得に失敗しました。"
UPSTREAM_FAILURE_TEMPLATE = "OpenAI APIリクエストに失敗: {status} {status_text}\n{body}"


class CompletionResult(BaseModel):
    """Outcome of a single completion call.

    Attributes:
        ok: Whether the upstream returned a 2xx response.
        content: Model answer, fallback text or failure message.
        status_code: Upstream HTTP status (0 when no response arrived).
        status_text: Upstream reason phrase, or the transport error name.
        body: Raw upstream body on failure.
    """

    ok: bool
    content: str
    status_code: int
    status_text: str = ""
    body: str | None = None


def _first_choice_content(data: object) -> str | None:
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    return message.get("content") or None


class ChatGateway:
    """Client for the upstream chat-completion API.

    Args:
        config: Gateway configuration. Loaded from environment if omitted.
        transport: Optional httpx transport, used to stub the upstream.
    """

    def __init__(
        self,
        config: GatewayConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or get_gateway_config()
        self._transport = transport

    def _payload(self, system_instruction: str, user_prompt: str) -> dict:
        return {
            "model": self._config.model_name,
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
            "messages": [
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": user_prompt},
            ],
        }

    async def complete(self, system_instruction: str, user_prompt: str) -> CompletionResult:
        """Request one completion.

        Args:
            system_instruction: Fixed system message.
            user_prompt: Assembled user prompt.

        Returns:
            CompletionResult with the first choice's text on success.
        """
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self._config.timeout
            ) as client:
                response = await client.post(
                    self._config.completions_url,
                    headers=headers,
                    json=self._payload(system_instruction, user_prompt),
                )
        except httpx.RequestError as e:
            logger.error(f"Completion request failed before a response: {e!r}")
            status_text = type(e).__name__
            return CompletionResult(
                ok=False,
                content=UPSTREAM_FAILURE_TEMPLATE.format(
                    status=0, status_text=status_text, body=str(e)
                ),
                status_code=0,
                status_text=status_text,
                body=str(e),
            )

        logger.info(f"Completion API responded {response.status_code} {response.reason_phrase}")

        if not response.is_success:
            return CompletionResult(
                ok=False,
                content=UPSTREAM_FAILURE_TEMPLATE.format(
                    status=response.status_code,
                    status_text=response.reason_phrase,
                    body=response.text,
                ),
                status_code=response.status_code,
                status_text=response.reason_phrase,
                body=response.text,
            )

        content = _first_choice_content(response.json())
        if content is None:
            logger.warning("Completion response had no usable choices")

        return CompletionResult(
            ok=True,
            content=content or EMPTY_RESPONSE_FALLBACK,
            status_code=response.status_code,
            status_text=response.reason_phrase,
        )
