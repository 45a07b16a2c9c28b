"""Multi-step flows: pull request drafts, history summaries and the annotated log.

These compose repository queries with the commit message and diff summary
builders. Provider calls are issued one at a time, in commit order.
"""

import logging

from git_scribe.ai.engine import CompletionEngine
from git_scribe.ai.prompts import PR_DESCRIPTION_INSTRUCTION
from git_scribe.ai.writers import CommitMessageBuilder, DiffSummarizer
from git_scribe.errors import GitScribeError
from git_scribe.models import HistoryEntry, LogEntry, PullRequestDraft
from git_scribe.repository import GitRepository

logger = logging.getLogger(__name__)

DEFAULT_BASE_BRANCH = "main"

HISTORY_SEPARATOR = "\n---\n\n"


class PrDescriptionBuilder:
    """Drafts a pull request title and body from the branch diff."""

    def __init__(self, engine: CompletionEngine, repository: GitRepository) -> None:
        self.repository = repository
        self.commit_builder = CommitMessageBuilder(engine)
        self.summarizer = DiffSummarizer(engine)

    async def build(
        self,
        base: str | None = None,
        title: str | None = None,
        body: str | None = None,
    ) -> PullRequestDraft:
        """Build a draft, generating whichever of title and body is missing.

        Args:
            base: Base branch to diff against (``main`` when omitted)
            title: Title to use instead of a generated one
            body: Body to use instead of a generated one

        Returns:
            A PullRequestDraft whose ``base`` is only set when given explicitly

        Raises:
            RepositoryError: If the base branch cannot be found
            GitScribeError: If the model returns an empty title
        """
        base_branch = base or DEFAULT_BASE_BRANCH
        diff = self.repository.branch_diff(base_branch)
        logger.info(f"Drafting pull request against {base_branch} ({len(diff)} diff lines)")

        if title is None:
            commit_message = await self.commit_builder.generate_commit_message(diff)
            lines = commit_message.strip().splitlines()
            if not lines:
                raise GitScribeError("Failed to generate PR title")
            title = lines[0]

        if body is None:
            body = await self.summarizer.summarize_diff(diff, PR_DESCRIPTION_INSTRUCTION)

        return PullRequestDraft(title=title, body=body, base=base)


class HistorySummarizer:
    """Summarizes commits one at a time, newest first."""

    def __init__(self, engine: CompletionEngine, repository: GitRepository) -> None:
        self.repository = repository
        self.commit_builder = CommitMessageBuilder(engine)
        self.summarizer = DiffSummarizer(engine)

    async def summarize_history(
        self,
        reference: str = "HEAD",
        count: int = 5,
        custom_prompt: str | None = None,
    ) -> list[HistoryEntry]:
        start = None if reference == "HEAD" else reference
        commits = self.repository.log(start, limit=count)

        entries: list[HistoryEntry] = []
        for commit in commits:
            logger.info(f"Summarizing commit {commit.short_id}")
            diff = self.repository.commit_diff(commit.id)
            summary = await self.summarizer.summarize_diff(diff, custom_prompt)
            entries.append(HistoryEntry(commit=commit, summary=summary))
        return entries

    async def annotate_log(
        self, branch: str | None = None, limit: int = 10
    ) -> list[LogEntry]:
        """Pair each commit with a generated commit-message style summary."""
        entries: list[LogEntry] = []
        for commit in self.repository.log(branch, limit=limit):
            diff = self.repository.commit_diff(commit.id)
            ai_summary = await self.commit_builder.generate_commit_message(diff)
            entries.append(LogEntry(commit=commit, ai_summary=ai_summary))
        return entries


def render_history(entries: list[HistoryEntry]) -> str:
    return HISTORY_SEPARATOR.join(entry.render() for entry in entries)
