"""Provider selection and text generation."""

import logging
from collections.abc import Mapping

from git_scribe.ai.providers import AnthropicClient, OpenAIClient, ProviderClient
from git_scribe.config import EngineConfig, Provider
from git_scribe.errors import NoProviderAvailableError
from git_scribe.models import PromptRequest

logger = logging.getLogger(__name__)

# Default preference when no provider is forced
DEFAULT_ORDER = (Provider.ANTHROPIC, Provider.OPENAI)


class CompletionEngine:
    """Routes prompts to one of the configured provider clients.

    Selection order:
        1. The forced provider, if set and its client exists
        2. Anthropic, if configured
        3. OpenAI, if configured
        4. Otherwise ``NoProviderAvailableError``

    A forced provider without a client is advisory only: selection falls
    through to the default order and a warning is logged.
    """

    def __init__(
        self,
        clients: Mapping[Provider, ProviderClient] | None = None,
        forced_provider: Provider | None = None,
    ) -> None:
        self.clients: dict[Provider, ProviderClient] = dict(clients or {})
        self.forced_provider = forced_provider

    @classmethod
    def from_config(cls, config: EngineConfig) -> "CompletionEngine":
        """Create a client for every provider that has a credential."""
        clients: dict[Provider, ProviderClient] = {}
        if config.anthropic_api_key:
            clients[Provider.ANTHROPIC] = AnthropicClient(config.anthropic_api_key)
        if config.openai_api_key:
            clients[Provider.OPENAI] = OpenAIClient(config.openai_api_key)
        return cls(clients, forced_provider=config.forced_provider)

    def select_client(self) -> ProviderClient:
        """Pick the client to use for the next call.

        Raises:
            NoProviderAvailableError: If no client is configured
        """
        candidates: list[tuple[bool, Provider]] = []
        if self.forced_provider is not None:
            candidates.append((True, self.forced_provider))
        candidates.extend((False, provider) for provider in DEFAULT_ORDER)

        for forced, provider in candidates:
            client = self.clients.get(provider)
            if client is None:
                if forced:
                    logger.warning(
                        f"Requested provider {provider.display_name} has no API key "
                        "configured, falling back to default selection"
                    )
                continue
            if forced:
                logger.info(f"Using enforced provider: {provider.display_name}")
            elif provider is DEFAULT_ORDER[0]:
                logger.info(f"Using default provider: {provider.display_name}")
            else:
                logger.info(f"Using fallback provider: {provider.display_name}")
            return client

        logger.info("No AI provider available")
        raise NoProviderAvailableError()

    async def generate_text(self, system_prompt: str, user_message: str) -> str:
        """Generate text for one system prompt / user message pair.

        Raises:
            NoProviderAvailableError: If no client is configured
            ProviderError: If the selected provider call fails
        """
        logger.debug(f"Generating text with system prompt: {system_prompt}")
        logger.debug(f"User message: {user_message}")

        client = self.select_client()
        request = PromptRequest(system=system_prompt, user=user_message)
        text = await client.complete(request)

        logger.debug(f"Received {len(text)} chars from {client.provider.display_name}")
        return text
