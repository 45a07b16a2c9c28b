"""Exception hierarchy for git-scribe.

Every failure the CLI knows how to report derives from ``GitScribeError``.
Errors raised by ``pygit2`` itself are not wrapped and propagate unchanged.
"""


class GitScribeError(Exception):
    """Base exception for git-scribe errors."""


class NoProviderAvailableError(GitScribeError):
    """Raised when no AI provider credential is configured."""

    def __init__(self) -> None:
        super().__init__(
            "No AI provider available. Please set ANTHROPIC_API_KEY or "
            "OPENAI_API_KEY environment variable."
        )


class ProviderError(GitScribeError):
    """Raised when a completion provider call fails at transport or API level."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider} API error: {message}")
        self.provider = provider
        self.message = message


class ResponseParseError(GitScribeError):
    """Raised when model output does not have the expected JSON shape."""

    def __init__(self, raw_response: str, detail: str | None = None) -> None:
        message = "Failed to parse AI response as JSON array of file groups."
        if detail:
            message += f" ({detail})"
        super().__init__(f"{message} Response was: {raw_response}")
        self.raw_response = raw_response


class RepositoryError(GitScribeError):
    """Raised when a git repository, reference or branch cannot be used."""


class ExternalToolError(GitScribeError):
    """Raised when an external helper program fails."""

    def __init__(self, tool: str, message: str) -> None:
        super().__init__(f"{tool}: {message}")
        self.tool = tool
        self.message = message
