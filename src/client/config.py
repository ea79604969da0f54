"""Client configuration with environment variable loading.

Pydantic-based configuration for the vector store client.
Supports OpenAI and OpenAI-compatible APIs via a custom base URL.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_CHAT_MODEL = "gpt-4o-mini"


def _timeout_from_env() -> float | None:
    raw = os.getenv("REQUEST_TIMEOUT", "").strip()
    return float(raw) if raw else None


class ClientConfig(BaseModel):
    """Configuration for the vector store client.

    Credentials are not part of this config: they arrive with the
    ``Settings`` passed to every operation.

    Attributes:
        base_url: API base URL for all remote calls.
        request_timeout: Per-request timeout in seconds (None disables it).
        default_model: Model used when the caller's settings leave it empty.
    """

    # environment-derived defaults go through the same validators
    model_config = ConfigDict(validate_default=True)

    base_url: str = Field(
        default_factory=lambda: os.getenv("OPENAI_BASE_URL") or DEFAULT_BASE_URL,
        description="API base URL",
    )
    request_timeout: float | None = Field(
        default_factory=_timeout_from_env,
        gt=0,
        description="Request timeout in seconds, None for no timeout",
    )
    default_model: str = Field(
        default_factory=lambda: os.getenv("DEFAULT_MODEL") or DEFAULT_CHAT_MODEL,
        description="Fallback chat model",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URL so paths can be appended with a leading slash."""
        v = v.strip()
        if not v:
            raise ValueError("Base URL must not be empty")
        return v.rstrip("/")


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.
    """
    return ClientConfig()
