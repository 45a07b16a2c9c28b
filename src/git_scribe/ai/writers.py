"""Commit message and diff summary generation."""

import logging
from collections.abc import Sequence

from git_scribe.ai.engine import CompletionEngine
from git_scribe.ai.prompts import (
    COMMIT_SYSTEM_PROMPT,
    COMMIT_USER_TEMPLATE,
    CUSTOM_INSTRUCTION_TEMPLATE,
    NO_CHANGES_MESSAGE,
    SUMMARY_SYSTEM_PROMPT,
    SUMMARY_USER_TEMPLATE,
)
from git_scribe.diff_format import format_diff
from git_scribe.models import DiffLine

logger = logging.getLogger(__name__)


class CommitMessageBuilder:
    """Writes commit messages for a diff.

    Formatting rules (summary length, wrapping) are requested in the prompt
    only; the model's text is returned as-is.
    """

    def __init__(self, engine: CompletionEngine) -> None:
        self.engine = engine

    async def generate_commit_message(self, diff: Sequence[DiffLine]) -> str:
        changes = format_diff(diff, annotate_paths=True)
        if not changes:
            logger.info("Empty diff, skipping commit message generation")
            return NO_CHANGES_MESSAGE

        return await self.engine.generate_text(
            COMMIT_SYSTEM_PROMPT, COMMIT_USER_TEMPLATE.format(diff=changes)
        )


class DiffSummarizer:
    """Summarizes a diff in prose, optionally steered by a custom instruction."""

    def __init__(self, engine: CompletionEngine) -> None:
        self.engine = engine

    @staticmethod
    def system_prompt(custom_prompt: str | None = None) -> str:
        if custom_prompt:
            return CUSTOM_INSTRUCTION_TEMPLATE.format(
                base=SUMMARY_SYSTEM_PROMPT, custom=custom_prompt
            )
        return SUMMARY_SYSTEM_PROMPT

    async def summarize_diff(
        self, diff: Sequence[DiffLine], custom_prompt: str | None = None
    ) -> str:
        diff_text = format_diff(diff)
        return await self.engine.generate_text(
            self.system_prompt(custom_prompt),
            SUMMARY_USER_TEMPLATE.format(diff=diff_text),
        )
