"""git-scribe - AI-assisted commit messages, pull requests and change grouping.

Library API:

    from git_scribe import CompletionEngine, EngineConfig, ChangeAnalyzer

    engine = CompletionEngine.from_config(EngineConfig.from_env())
    groups = await ChangeAnalyzer(engine).analyze_changes(staged, unstaged)
"""

__version__ = "0.1.0"

from git_scribe.ai import (
    ChangeAnalyzer,
    CommitMessageBuilder,
    CompletionEngine,
    DiffSummarizer,
    HistorySummarizer,
    PrDescriptionBuilder,
)
from git_scribe.config import EngineConfig, Provider
from git_scribe.diff_format import diff_stats, format_diff
from git_scribe.errors import (
    ExternalToolError,
    GitScribeError,
    NoProviderAvailableError,
    ProviderError,
    RepositoryError,
    ResponseParseError,
)
from git_scribe.models import DiffLine, LineKind
from git_scribe.repository import GitRepository

__all__ = [
    # Core API
    "CompletionEngine",
    "EngineConfig",
    "Provider",
    "ChangeAnalyzer",
    "CommitMessageBuilder",
    "DiffSummarizer",
    "PrDescriptionBuilder",
    "HistorySummarizer",
    "GitRepository",
    "DiffLine",
    "LineKind",
    "format_diff",
    "diff_stats",
    # Exceptions
    "GitScribeError",
    "NoProviderAvailableError",
    "ProviderError",
    "ResponseParseError",
    "RepositoryError",
    "ExternalToolError",
    # Metadata
    "__version__",
]
