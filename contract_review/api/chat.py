"""Chat endpoint: extraction, prompt assembly and completion.

Accepts either a multipart form (question, instruction and ``file`` parts)
or a JSON body (question and instruction only) and always answers with a
``ChatEnvelope``, whatever goes wrong.
"""

import logging
import traceback

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from contract_review.llm.config import GatewayConfig, get_gateway_config
from contract_review.llm.gateway import ChatGateway
from contract_review.llm.prompt import SYSTEM_INSTRUCTION, assemble_prompt
from contract_review.models.schemas import ChatEnvelope, ChatRequest, UploadedFile
from contract_review.parsing.extractor import extract_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

API_KEY_MISSING_MESSAGE = "OpenAI APIキーが設定されていません。"
SERVER_ERROR_TEMPLATE = "server error: {message}"


def get_chat_gateway(config: GatewayConfig = Depends(get_gateway_config)) -> ChatGateway:
    """Provide a gateway bound to the request's configuration."""
    return ChatGateway(config)


async def _read_multipart(request: Request) -> ChatRequest:
    """Read question, instruction and all ``file`` parts from a form.

    Args:
        request: Incoming multipart request.

    Returns:
        ChatRequest with files in upload order.
    """
    form = await request.form()
    files: list[UploadedFile] = []
    for part in form.getlist("file"):
        if isinstance(part, UploadFile):
            files.append(
                UploadedFile(
                    filename=part.filename or "",
                    content_type=part.content_type or "",
                    content=await part.read(),
                )
            )

    return ChatRequest(
        message=str(form.get("message") or ""),
        custom_instruction=str(form.get("customInstruction") or ""),
        files=files,
    )


async def _read_json(request: Request) -> ChatRequest:
    body = await request.json()
    if not isinstance(body, dict):
        body = {}
    return ChatRequest.model_validate(
        {
            "message": str(body.get("message") or ""),
            "customInstruction": str(body.get("customInstruction") or ""),
        }
    )


async def parse_chat_request(request: Request) -> ChatRequest:
    """Parse the body according to its content type.

    Files are only accepted through multipart; JSON bodies carry text.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("multipart/form-data"):
        return await _read_multipart(request)
    return await _read_json(request)


def _respond(envelope: ChatEnvelope, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope.to_json())


async def _run_pipeline(request: Request, config: GatewayConfig, gateway: ChatGateway) -> JSONResponse:
    chat_request = await parse_chat_request(request)
    logger.info(f"Chat request received with {len(chat_request.files)} file(s)")

    if not config.has_api_key:
        logger.error("Completion API key is not configured")
        return _respond(
            ChatEnvelope.build(API_KEY_MISSING_MESSAGE, step="apikey"),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    # Sequential on purpose; output order follows upload order.
    extracted_texts: list[str] = []
    for file in chat_request.files:
        extracted_texts.append(await run_in_threadpool(extract_text, file))

    prompt = assemble_prompt(
        chat_request.message, extracted_texts, chat_request.custom_instruction
    )
    result = await gateway.complete(SYSTEM_INSTRUCTION, prompt)

    debug = {
        "extracted_texts": extracted_texts,
        "assembled_prompt": prompt,
        "upstream_status": result.status_code,
        "upstream_status_text": result.status_text,
    }

    if not result.ok:
        return _respond(
            ChatEnvelope.build(result.content, upstream_body=result.body, **debug),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return _respond(ChatEnvelope.build(result.content, **debug))


@router.post("/chat")
async def chat(
    request: Request,
    config: GatewayConfig = Depends(get_gateway_config),
    gateway: ChatGateway = Depends(get_chat_gateway),
) -> JSONResponse:
    """Answer a question about the uploaded documents.

    Args:
        request: Multipart form or JSON body.
        config: Gateway configuration for this request.
        gateway: Completion gateway for this request.

    Returns:
        JSONResponse carrying a ChatEnvelope. Status is 200 on success and
        500 for a missing API key, an upstream failure or any other error.
    """
    try:
        return await _run_pipeline(request, config, gateway)
    except Exception as e:
        logger.exception("Unhandled error in chat pipeline")
        return _respond(
            ChatEnvelope.build(
                SERVER_ERROR_TEMPLATE.format(message=e),
                error=traceback.format_exc(),
            ),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
