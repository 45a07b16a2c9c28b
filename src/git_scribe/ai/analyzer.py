"""Group working-tree changes into coherent features with an AI model."""

import logging
from collections.abc import Sequence

from pydantic import TypeAdapter, ValidationError

from git_scribe.ai.engine import CompletionEngine
from git_scribe.ai.prompts import (
    GROUPING_SYSTEM_PROMPT,
    GROUPING_USER_TEMPLATE,
    NO_FOCUS,
)
from git_scribe.diff_format import format_diff
from git_scribe.errors import ResponseParseError
from git_scribe.models import DiffLine, GroupingResult

logger = logging.getLogger(__name__)

_GROUPS_ADAPTER = TypeAdapter(list[list[str]])


def parse_groups(raw_response: str) -> GroupingResult:
    """Parse a model response that must be a JSON array of arrays of paths.

    Raises:
        ResponseParseError: If the text is not valid JSON of that shape
    """
    try:
        return _GROUPS_ADAPTER.validate_json(raw_response, strict=True)
    except ValidationError as e:
        raise ResponseParseError(raw_response, detail=e.errors()[0]["msg"]) from e


class ChangeAnalyzer:
    """Suggests how staged and unstaged changes split into commits."""

    def __init__(self, engine: CompletionEngine) -> None:
        self.engine = engine

    def build_changes_text(
        self, staged_diff: Sequence[DiffLine], unstaged_diff: Sequence[DiffLine]
    ) -> str:
        staged = format_diff(staged_diff, annotate_paths=True, line_prefix="[Staged]")
        unstaged = format_diff(
            unstaged_diff, annotate_paths=True, line_prefix="[Unstaged]"
        )
        return staged + unstaged

    async def analyze_changes(
        self,
        staged_diff: Sequence[DiffLine],
        unstaged_diff: Sequence[DiffLine],
        custom_focus: str | None = None,
    ) -> GroupingResult:
        """Ask the model to group changed files by feature.

        Args:
            staged_diff: Lines of the HEAD-to-index diff
            unstaged_diff: Lines of the index-to-working-tree diff
            custom_focus: Optional extra guidance for the grouping

        Returns:
            Ordered groups of file paths; empty when there are no changes

        Raises:
            ResponseParseError: If the model output is not a JSON array of arrays
        """
        all_changes = self.build_changes_text(staged_diff, unstaged_diff)
        if not all_changes:
            logger.info("No changes to analyze")
            return []

        user_message = GROUPING_USER_TEMPLATE.format(
            focus=custom_focus or NO_FOCUS, diff=all_changes
        )
        response = await self.engine.generate_text(GROUPING_SYSTEM_PROMPT, user_message)

        groups = parse_groups(response)
        logger.info(f"Model proposed {len(groups)} group(s)")
        return groups
