"""Configuration for git-scribe.

Credentials are read from the environment once at process start and
passed explicitly into the completion engine; nothing here is global.
"""

import logging
import os
from collections.abc import Mapping
from enum import Enum

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

logger = logging.getLogger(__name__)

ANTHROPIC_API_KEY_ENV = "ANTHROPIC_API_KEY"
OPENAI_API_KEY_ENV = "OPENAI_API_KEY"


class Provider(str, Enum):
    """AI completion providers git-scribe can talk to."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"

    @property
    def display_name(self) -> str:
        return {"anthropic": "Anthropic", "openai": "OpenAI"}[self.value]


class EngineConfig(BaseModel):
    """Immutable provider credentials plus an optional forced provider."""

    model_config = ConfigDict(frozen=True)

    anthropic_api_key: str | None = None
    openai_api_key: str | None = None
    forced_provider: Provider | None = None

    @field_validator("anthropic_api_key", "openai_api_key")
    @classmethod
    def blank_key_is_missing(cls, v: str | None) -> str | None:
        """Treat empty or whitespace-only keys as absent."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @classmethod
    def from_env(
        cls,
        forced_provider: Provider | None = None,
        environ: Mapping[str, str] | None = None,
        load_env_file: bool = True,
    ) -> "EngineConfig":
        """Build a config from environment variables.

        Args:
            forced_provider: Provider the user asked for explicitly, if any
            environ: Mapping to read instead of ``os.environ``
            load_env_file: Load a ``.env`` file into ``os.environ`` first

        Returns:
            A frozen EngineConfig
        """
        if load_env_file and environ is None:
            # Existing variables win over the .env file
            load_dotenv(override=False)

        env = os.environ if environ is None else environ

        config = cls(
            anthropic_api_key=env.get(ANTHROPIC_API_KEY_ENV),
            openai_api_key=env.get(OPENAI_API_KEY_ENV),
            forced_provider=forced_provider,
        )
        for provider in Provider:
            if config.has_credential(provider):
                logger.debug(f"Found {provider.display_name} API key")
            else:
                logger.debug(f"No {provider.display_name} API key found")
        return config

    def api_key(self, provider: Provider) -> str | None:
        if provider is Provider.ANTHROPIC:
            return self.anthropic_api_key
        return self.openai_api_key

    def has_credential(self, provider: Provider) -> bool:
        return self.api_key(provider) is not None
