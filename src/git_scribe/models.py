"""Pydantic models for diffs, prompts and commit data."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class LineKind(str, Enum):
    """Origin of a diff line, valued by its patch marker."""

    ADDITION = "+"
    DELETION = "-"
    CONTEXT = " "


class DiffLine(BaseModel):
    """One line of a diff, without its trailing newline."""

    model_config = ConfigDict(frozen=True)

    kind: LineKind
    text: str
    path: str | None = None


class DiffStats(BaseModel):
    """Aggregate counts for a diff."""

    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0

    def __str__(self) -> str:
        return (
            f"Changes: {self.files_changed} files changed, "
            f"{self.insertions} insertions(+), {self.deletions} deletions(-)"
        )


class PromptRequest(BaseModel):
    """A single system prompt / user message pair sent to a provider."""

    model_config = ConfigDict(frozen=True)

    system: str
    user: str


# A group of file paths that belong to one coherent change, and the ordered
# list of such groups returned by change analysis.
FileGroup = list[str]
GroupingResult = list[FileGroup]


class CommitInfo(BaseModel):
    """Commit metadata needed for summaries and log output."""

    id: str
    short_id: str
    author: str
    timestamp: datetime
    message: str = ""

    @property
    def summary(self) -> str:
        """First line of the commit message."""
        lines = self.message.strip().splitlines()
        return lines[0] if lines else ""


class HistoryEntry(BaseModel):
    """AI summary of a single commit in a history walk."""

    commit: CommitInfo
    summary: str

    def render(self) -> str:
        title = self.commit.summary or "No summary"
        return f"Commit {self.commit.short_id} - {title}\n{self.summary}\n"


class LogEntry(BaseModel):
    """Commit shown in the annotated log, with its generated description."""

    commit: CommitInfo
    ai_summary: str


class PullRequestDraft(BaseModel):
    """Title, body and optional base branch for a pull request."""

    title: str
    body: str
    base: str | None = None
