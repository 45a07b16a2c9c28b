"""Tests for the gh and pager wrappers."""

import subprocess
from unittest.mock import patch

import pytest

from git_scribe.errors import ExternalToolError
from git_scribe.external import build_pr_command, create_pull_request, page_output
from git_scribe.models import PullRequestDraft


def completed(returncode: int = 0, stdout: str = "", stderr: str = ""):
    return subprocess.CompletedProcess(
        args=["gh"], returncode=returncode, stdout=stdout, stderr=stderr
    )


class TestCreatePullRequest:
    """Test gh pr create invocation."""

    def test_command_without_base(self):
        draft = PullRequestDraft(title="Add thing", body="Body text")

        assert build_pr_command(draft) == [
            "gh", "pr", "create", "--title", "Add thing", "--body", "Body text"
        ]

    def test_command_with_base(self):
        draft = PullRequestDraft(title="t", body="b", base="develop")

        assert build_pr_command(draft)[-2:] == ["--base", "develop"]

    @patch("git_scribe.external.subprocess.run")
    def test_success_returns_stdout(self, mock_run):
        mock_run.return_value = completed(stdout="https://github.com/o/r/pull/1\n")

        url = create_pull_request(PullRequestDraft(title="t", body="b"))

        assert url == "https://github.com/o/r/pull/1"

    @patch("git_scribe.external.subprocess.run")
    def test_failure_includes_stderr(self, mock_run):
        mock_run.return_value = completed(returncode=1, stderr="no upstream branch\n")

        with pytest.raises(ExternalToolError, match="Failed to create PR: no upstream branch"):
            create_pull_request(PullRequestDraft(title="t", body="b"))

    @patch("git_scribe.external.subprocess.run", side_effect=FileNotFoundError)
    def test_missing_gh(self, mock_run):
        with pytest.raises(ExternalToolError, match="GitHub CLI not found"):
            create_pull_request(PullRequestDraft(title="t", body="b"))


class TestPageOutput:
    """Test feeding text to the pager."""

    @patch("git_scribe.external.subprocess.run")
    @patch("git_scribe.external.shutil.which", return_value="/usr/bin/less")
    def test_text_sent_on_stdin(self, mock_which, mock_run):
        mock_run.return_value = completed()

        assert page_output("\x1b[33mcommit abc\x1b[0m\n") is True

        args, kwargs = mock_run.call_args
        assert args[0] == ["less", "-R"]
        assert kwargs["input"] == "\x1b[33mcommit abc\x1b[0m\n"

    @patch("git_scribe.external.subprocess.run")
    @patch("git_scribe.external.shutil.which", return_value=None)
    def test_no_pager_installed(self, mock_which, mock_run):
        assert page_output("text") is False
        mock_run.assert_not_called()

    @patch("git_scribe.external.subprocess.run")
    @patch("git_scribe.external.shutil.which", return_value="/usr/bin/less")
    def test_pager_failure(self, mock_which, mock_run):
        mock_run.return_value = completed(returncode=2)

        with pytest.raises(ExternalToolError, match="exited with status 2"):
            page_output("text")
