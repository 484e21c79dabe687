"""Gateway configuration with environment variable loading.

Pydantic-based settings for the upstream chat-completion API.
Supports OpenAI and OpenAI-compatible APIs via custom base URL.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "https://api.openai.com/v1"


def _timeout_from_env() -> float | None:
    raw = os.getenv("LLM_TIMEOUT", "").strip()
    return float(raw) if raw else None


class GatewayConfig(BaseModel):
    """Configuration for the chat-completion gateway.

    An empty API key is accepted here; the chat endpoint checks
    ``has_api_key`` and refuses the request before any upstream call.

    Attributes:
        api_key: Bearer token for the completion API.
        base_url: API base URL.
        model_name: Model identifier to use.
        temperature: Sampling temperature.
        max_tokens: Maximum tokens in generated response.
        timeout: Request timeout in seconds (None waits indefinitely).
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("OPENAI_API_KEY", os.getenv("LLM_API_KEY", "")),
        description="API key for LLM provider",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("LLM_BASE_URL") or DEFAULT_BASE_URL,
        description="API base URL",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", "gpt-4o"),
        description="Model to use",
    )
    temperature: float = Field(
        default=0.2,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    max_tokens: int = Field(
        default=2048,
        ge=1,
        le=128000,
        description="Maximum tokens in generated response",
    )
    timeout: float | None = Field(
        default_factory=_timeout_from_env,
        gt=0,
        description="Upstream request timeout in seconds",
    )

    @field_validator("api_key")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @property
    def completions_url(self) -> str:
        return f"{self.base_url}/chat/completions"


def get_gateway_config() -> GatewayConfig:
    """Create gateway configuration from environment.

    Read per request so a key added to the environment takes effect
    without a restart.

    Returns:
        Configured GatewayConfig instance.
    """
    return GatewayConfig()
