"""Unit tests for ClientConfig."""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.client.config import (
    DEFAULT_BASE_URL,
    DEFAULT_CHAT_MODEL,
    ClientConfig,
    get_client_config,
)


class TestClientConfig:
    """Tests for ClientConfig validation."""

    def test_defaults_without_environment(self) -> None:
        """Config uses OpenAI defaults and no timeout when env is empty."""
        env = {"OPENAI_BASE_URL": "", "REQUEST_TIMEOUT": "", "DEFAULT_MODEL": ""}
        with patch.dict("os.environ", env):
            config = ClientConfig()

        assert config.base_url == DEFAULT_BASE_URL
        assert config.request_timeout is None
        assert config.default_model == DEFAULT_CHAT_MODEL

    def test_reads_environment(self) -> None:
        """get_client_config picks up overrides from the environment."""
        env = {
            "OPENAI_BASE_URL": "https://proxy.local/v1/",
            "REQUEST_TIMEOUT": "30",
            "DEFAULT_MODEL": "gpt-4o",
        }
        with patch.dict("os.environ", env):
            config = get_client_config()

        assert config.base_url == "https://proxy.local/v1"
        assert config.request_timeout == 30.0
        assert config.default_model == "gpt-4o"

    def test_strips_trailing_slash(self) -> None:
        """Base URL is normalized so paths can be appended."""
        assert ClientConfig(base_url="https://api.test/v1/").base_url == "https://api.test/v1"

    def test_rejects_blank_base_url(self) -> None:
        """Config rejects an empty base URL."""
        with pytest.raises(ValidationError) as exc_info:
            ClientConfig(base_url="   ")

        assert "Base URL" in str(exc_info.value)

    def test_rejects_non_positive_timeout(self) -> None:
        """Config rejects a zero or negative timeout."""
        with pytest.raises(ValidationError) as exc_info:
            ClientConfig(request_timeout=0)

        assert "request_timeout" in str(exc_info.value)

    def test_environment_values_are_validated(self) -> None:
        """Values read from the environment pass through the validators."""
        with patch.dict("os.environ", {"OPENAI_BASE_URL": "  ", "REQUEST_TIMEOUT": ""}):
            with pytest.raises(ValidationError):
                ClientConfig()
