"""Pytest fixtures and shared test configuration.

Fixtures:
    - stub_gateway: Completion gateway double that records calls
    - gateway_config: Configuration with a test API key
    - async_client: HTTPX client for the API with the stub installed
    - xlsx_bytes / docx_bytes / png_bytes: In-memory sample documents
"""

import io
from collections.abc import AsyncGenerator, Callable

import pytest
from docx import Document
from httpx import ASGITransport, AsyncClient
from openpyxl import Workbook
from PIL import Image

from contract_review.api.app import app
from contract_review.api.chat import get_chat_gateway
from contract_review.llm.config import GatewayConfig, get_gateway_config
from contract_review.llm.gateway import CompletionResult


class StubGateway:
    """Gateway double returning a canned answer, or echoing the prompt."""

    def __init__(self, reply: str | None = "no risks found", result: CompletionResult | None = None):
        self.reply = reply
        self.result = result
        self.calls: list[tuple[str, str]] = []

    async def complete(self, system_instruction: str, user_prompt: str) -> CompletionResult:
        self.calls.append((system_instruction, user_prompt))
        if self.result is not None:
            return self.result
        content = user_prompt if self.reply is None else self.reply
        return CompletionResult(ok=True, content=content, status_code=200, status_text="OK")


@pytest.fixture
def stub_gateway() -> StubGateway:
    return StubGateway()


@pytest.fixture
def gateway_config() -> GatewayConfig:
    """Configuration with a test key, independent of the environment."""
    return GatewayConfig(api_key="sk-test-key", base_url="https://llm.test/v1", timeout=None)


@pytest.fixture
async def async_client(
    stub_gateway: StubGateway, gateway_config: GatewayConfig
) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client with the stub gateway installed.

    Yields:
        Configured AsyncClient for making test requests.
    """
    app.dependency_overrides[get_gateway_config] = lambda: gateway_config
    app.dependency_overrides[get_chat_gateway] = lambda: stub_gateway
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_xlsx() -> Callable[[dict[str, list[list[object]]]], bytes]:
    """Build an .xlsx workbook from ``{sheet title: rows}`` in order."""

    def build(sheets: dict[str, list[list[object]]]) -> bytes:
        workbook = Workbook()
        workbook.remove(workbook.active)
        for title, rows in sheets.items():
            sheet = workbook.create_sheet(title)
            for row in rows:
                sheet.append(row)
        buffer = io.BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()

    return build


@pytest.fixture
def xlsx_bytes(make_xlsx) -> bytes:
    return make_xlsx({"Sheet1": [["Term"]]})


@pytest.fixture
def docx_bytes() -> bytes:
    document = Document()
    document.add_paragraph("第1条 (目的)")
    document.add_paragraph("本契約は業務委託について定める。")
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (40, 20), "white").save(buffer, format="PNG")
    return buffer.getvalue()
