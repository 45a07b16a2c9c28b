"""Wrappers around the external programs git-scribe drives: ``gh`` and a pager."""

import logging
import shutil
import subprocess

from git_scribe.errors import ExternalToolError
from git_scribe.models import PullRequestDraft

logger = logging.getLogger(__name__)

GH_BINARY = "gh"
PAGER_COMMAND = ["less", "-R"]


def build_pr_command(draft: PullRequestDraft) -> list[str]:
    command = [GH_BINARY, "pr", "create", "--title", draft.title, "--body", draft.body]
    if draft.base:
        command.extend(["--base", draft.base])
    return command


def create_pull_request(draft: PullRequestDraft) -> str:
    """Create a pull request with the GitHub CLI.

    Returns:
        Whatever ``gh`` printed on stdout (normally the PR URL)

    Raises:
        ExternalToolError: If ``gh`` is missing or exits non-zero
    """
    command = build_pr_command(draft)
    logger.debug(f"Running {' '.join(command[:3])} (base={draft.base})")
    try:
        result = subprocess.run(command, capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        raise ExternalToolError(
            GH_BINARY, "GitHub CLI not found. Install it from https://cli.github.com/"
        ) from e

    if result.returncode != 0:
        raise ExternalToolError(
            GH_BINARY, f"Failed to create PR: {result.stderr.strip()}"
        )
    return result.stdout.strip()


def page_output(text: str) -> bool:
    """Feed ANSI-coloured text to ``less -R``.

    Returns:
        False when no pager is installed, so the caller can print instead
    """
    if shutil.which(PAGER_COMMAND[0]) is None:
        logger.debug("Pager not found, printing directly")
        return False

    result = subprocess.run(PAGER_COMMAND, input=text, text=True, check=False)
    if result.returncode != 0:
        raise ExternalToolError(
            PAGER_COMMAND[0], f"exited with status {result.returncode}"
        )
    return True
