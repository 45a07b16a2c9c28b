"""Completion provider clients.

Each client speaks exactly one wire protocol: ``AnthropicClient`` posts to
the Anthropic Messages API over httpx, ``OpenAIClient`` goes through
LiteLLM's chat completion interface. Both raise ``ProviderError`` for any
transport or API failure and never retry.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx
import litellm
from litellm import acompletion

from git_scribe.config import Provider
from git_scribe.errors import ProviderError
from git_scribe.models import PromptRequest

logger = logging.getLogger(__name__)

MAX_TOKENS = 4096

DEFAULT_ANTHROPIC_MODEL = "claude-sonnet-4-20250514"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"

ANTHROPIC_API_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_API_VERSION = "2023-06-01"

# Same as the vendor SDKs: completions can take minutes for long diffs
DEFAULT_TIMEOUT = 600.0

OPENAI_TEMPERATURE = 0.7
NO_RESPONSE_TEXT = "No response available."


class ProviderClient(ABC):
    """A remote text-completion endpoint."""

    provider: Provider

    def __init__(self, api_key: str, model: str) -> None:
        self.api_key = api_key
        self.model = model

    @abstractmethod
    async def complete(self, request: PromptRequest) -> str:
        """Send one system/user prompt pair and return the generated text.

        Raises:
            ProviderError: On any transport or API failure
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self.model!r})"


class AnthropicClient(ProviderClient):
    """Client for the Anthropic Messages API."""

    provider = Provider.ANTHROPIC

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_ANTHROPIC_MODEL,
        max_tokens: int = MAX_TOKENS,
        http_client: httpx.AsyncClient | None = None,
        base_url: str = ANTHROPIC_API_URL,
    ) -> None:
        super().__init__(api_key, model)
        self.max_tokens = max_tokens
        self.base_url = base_url
        self._http_client = http_client
        self.headers = {
            "x-api-key": api_key,
            "anthropic-version": ANTHROPIC_API_VERSION,
            "content-type": "application/json",
        }

    def build_payload(self, request: PromptRequest) -> dict[str, Any]:
        return {
            "model": self.model,
            "system": request.system,
            "messages": [{"role": "user", "content": request.user}],
            "max_tokens": self.max_tokens,
        }

    async def complete(self, request: PromptRequest) -> str:
        payload = self.build_payload(request)
        logger.debug("Sending request to Anthropic API")
        try:
            if self._http_client is not None:
                response = await self._http_client.post(
                    self.base_url, headers=self.headers, json=payload
                )
                data = self._read_response(response)
            else:
                async with httpx.AsyncClient(timeout=DEFAULT_TIMEOUT) as client:
                    response = await client.post(
                        self.base_url, headers=self.headers, json=payload
                    )
                    data = self._read_response(response)
        except httpx.HTTPError as e:
            raise ProviderError(self.provider.value, str(e)) from e

        logger.debug("Received response from Anthropic API")
        return self.extract_text(data)

    def _read_response(self, response: httpx.Response) -> dict[str, Any]:
        if response.is_error:
            raise ProviderError(self.provider.value, self._error_message(response))
        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(
                self.provider.value, f"Invalid JSON in response: {e}"
            ) from e
        if not isinstance(data, dict):
            raise ProviderError(self.provider.value, "Unexpected response body")
        return data

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Prefer the API's own error message over the bare status line."""
        try:
            body = response.json()
            message = body["error"]["message"]
        except (ValueError, KeyError, TypeError):
            message = response.text or response.reason_phrase
        return f"HTTP {response.status_code}: {message}"

    @staticmethod
    def extract_text(data: dict[str, Any]) -> str:
        """Join all text content blocks with a single space."""
        blocks = data.get("content") or []
        texts = [
            block.get("text", "")
            for block in blocks
            if isinstance(block, dict) and block.get("type") == "text"
        ]
        return " ".join(texts)


class OpenAIClient(ProviderClient):
    """Client for OpenAI chat completions, routed through LiteLLM."""

    provider = Provider.OPENAI

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_OPENAI_MODEL,
        max_tokens: int = MAX_TOKENS,
        temperature: float = OPENAI_TEMPERATURE,
    ) -> None:
        super().__init__(api_key, model)
        self.max_tokens = max_tokens
        self.temperature = temperature

        # Configure LiteLLM
        litellm.suppress_debug_info = True  # We handle our own logging
        litellm.drop_params = True

    def build_messages(self, request: PromptRequest) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": request.system},
            {"role": "user", "content": request.user},
        ]

    async def complete(self, request: PromptRequest) -> str:
        logger.debug("Sending request to OpenAI API")
        try:
            response = await acompletion(
                model=self.model,
                messages=self.build_messages(request),
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                api_key=self.api_key,
                custom_llm_provider="openai",
            )
        except Exception as e:
            raise ProviderError(self.provider.value, str(e)) from e

        logger.debug("Received response from OpenAI API")
        choices = getattr(response, "choices", None) or []
        if not choices:
            return NO_RESPONSE_TEXT
        content = choices[0].message.content
        return content if content else NO_RESPONSE_TEXT
