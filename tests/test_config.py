"""Tests for engine configuration."""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from git_scribe.config import EngineConfig, Provider


class TestEngineConfig:
    """Test credential loading and accessors."""

    def test_from_env_reads_both_keys(self):
        config = EngineConfig.from_env(
            environ={"ANTHROPIC_API_KEY": "sk-ant", "OPENAI_API_KEY": "sk-oai"}
        )

        assert config.anthropic_api_key == "sk-ant"
        assert config.openai_api_key == "sk-oai"
        assert config.forced_provider is None

    def test_missing_and_blank_keys_are_absent(self):
        config = EngineConfig.from_env(environ={"OPENAI_API_KEY": "   "})

        assert not config.has_credential(Provider.ANTHROPIC)
        assert not config.has_credential(Provider.OPENAI)

    def test_forced_provider_is_kept(self):
        config = EngineConfig.from_env(
            forced_provider=Provider.OPENAI, environ={"OPENAI_API_KEY": "k"}
        )

        assert config.forced_provider is Provider.OPENAI
        assert config.api_key(Provider.OPENAI) == "k"
        assert config.api_key(Provider.ANTHROPIC) is None

    def test_config_is_frozen(self):
        config = EngineConfig(anthropic_api_key="k")

        with pytest.raises(ValidationError):
            config.anthropic_api_key = "other"

    @patch("git_scribe.config.load_dotenv")
    def test_dotenv_loaded_without_override(self, mock_load_dotenv, monkeypatch):
        """The .env file is loaded once and never overrides real variables."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "from-env")
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        config = EngineConfig.from_env()

        mock_load_dotenv.assert_called_once_with(override=False)
        assert config.anthropic_api_key == "from-env"
        assert config.openai_api_key is None

    @patch("git_scribe.config.load_dotenv")
    def test_explicit_environ_skips_dotenv(self, mock_load_dotenv):
        EngineConfig.from_env(environ={})

        mock_load_dotenv.assert_not_called()

    def test_provider_values_match_cli_spelling(self):
        assert Provider("anthropic") is Provider.ANTHROPIC
        assert Provider("openai") is Provider.OPENAI
        assert Provider.OPENAI.display_name == "OpenAI"
