"""AI integration for git-scribe.

Provider clients for Anthropic and OpenAI, the completion engine that
chooses between them, and the prompt-driven features built on top.
"""

from .analyzer import ChangeAnalyzer
from .engine import CompletionEngine
from .orchestrator import HistorySummarizer, PrDescriptionBuilder
from .providers import AnthropicClient, OpenAIClient, ProviderClient
from .writers import CommitMessageBuilder, DiffSummarizer

__all__ = [
    "CompletionEngine",
    "ProviderClient",
    "AnthropicClient",
    "OpenAIClient",
    "ChangeAnalyzer",
    "CommitMessageBuilder",
    "DiffSummarizer",
    "PrDescriptionBuilder",
    "HistorySummarizer",
]
