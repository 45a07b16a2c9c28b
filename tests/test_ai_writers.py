"""Tests for commit message and diff summary generation."""

from unittest.mock import AsyncMock, Mock

import pytest

from git_scribe.ai.engine import CompletionEngine
from git_scribe.ai.prompts import COMMIT_SYSTEM_PROMPT, SUMMARY_SYSTEM_PROMPT
from git_scribe.ai.writers import CommitMessageBuilder, DiffSummarizer
from git_scribe.models import DiffLine, LineKind

DIFF = [
    DiffLine(kind=LineKind.CONTEXT, text="import os", path="app.py"),
    DiffLine(kind=LineKind.DELETION, text="DEBUG = True", path="app.py"),
    DiffLine(kind=LineKind.ADDITION, text="DEBUG = False", path="app.py"),
]


def mock_engine(reply: str) -> Mock:
    engine = Mock(spec=CompletionEngine)
    engine.generate_text = AsyncMock(return_value=reply)
    return engine


class TestCommitMessageBuilder:
    """Test commit message generation."""

    @pytest.mark.asyncio
    async def test_empty_diff_returns_literal_without_call(self):
        engine = mock_engine("unused")

        message = await CommitMessageBuilder(engine).generate_commit_message([])

        assert message == "No changes detected."
        engine.generate_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_model_text_returned_unmodified(self):
        """Output is not reformatted, even when it breaks the prompt's rules."""
        reply = "Disabled debug mode in production settings which was a long line.\n"
        engine = mock_engine(reply)

        message = await CommitMessageBuilder(engine).generate_commit_message(DIFF)

        assert message == reply

    @pytest.mark.asyncio
    async def test_prompt_uses_path_annotated_changes(self):
        engine = mock_engine("Disable debug mode")

        await CommitMessageBuilder(engine).generate_commit_message(DIFF)

        system_prompt, user_message = engine.generate_text.call_args.args
        assert system_prompt == COMMIT_SYSTEM_PROMPT
        assert "-DEBUG = True (app.py)\n+DEBUG = False (app.py)\n" in user_message
        assert "import os" not in user_message

    def test_prompt_states_format_rules(self):
        assert "imperative mood" in COMMIT_SYSTEM_PROMPT
        assert "max 50 chars" in COMMIT_SYSTEM_PROMPT
        assert "72" in COMMIT_SYSTEM_PROMPT


class TestDiffSummarizer:
    """Test prose diff summaries."""

    @pytest.mark.asyncio
    async def test_plain_diff_in_user_message(self):
        engine = mock_engine("Turns off debug mode.")

        summary = await DiffSummarizer(engine).summarize_diff(DIFF)

        assert summary == "Turns off debug mode."
        system_prompt, user_message = engine.generate_text.call_args.args
        assert system_prompt == SUMMARY_SYSTEM_PROMPT
        assert user_message == (
            "Please summarize this git diff:\n```\n"
            " import os\n-DEBUG = True\n+DEBUG = False\n\n```"
        )

    @pytest.mark.asyncio
    async def test_custom_prompt_appended_to_system_prompt(self):
        engine = mock_engine("ok")

        await DiffSummarizer(engine).summarize_diff(DIFF, "List only modified functions")

        system_prompt = engine.generate_text.call_args.args[0]
        assert system_prompt == (
            f"{SUMMARY_SYSTEM_PROMPT} Additional instruction: List only modified functions"
        )
        assert ".." not in system_prompt
