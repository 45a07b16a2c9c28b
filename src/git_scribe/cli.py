"""Command-line interface for git-scribe."""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

import typer
from rich import print
from rich.console import Console
from rich.markup import escape

from git_scribe.ai.analyzer import ChangeAnalyzer
from git_scribe.ai.engine import CompletionEngine
from git_scribe.ai.orchestrator import (
    HistorySummarizer,
    PrDescriptionBuilder,
    render_history,
)
from git_scribe.ai.writers import CommitMessageBuilder, DiffSummarizer
from git_scribe.config import EngineConfig, Provider
from git_scribe.diff_format import diff_stats
from git_scribe.external import create_pull_request, page_output
from git_scribe.models import LogEntry
from git_scribe.repository import GitRepository

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="git-scribe",
    help="AI-assisted commit messages, pull requests, diff summaries and feature-grouped staging",
    no_args_is_help=True,
)

console = Console()

NOISY_LOGGERS = ("litellm", "LiteLLM", "httpx", "httpcore")

LOG_SEPARATOR = "-" * 40


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("git_scribe").setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)


def _build_engine(model: Provider | None) -> CompletionEngine:
    """Read credentials once and create the completion engine."""
    if model:
        logger.info(f"Using enforced model provider: {model.display_name}")
    else:
        logger.info("Using default model provider selection")
    config = EngineConfig.from_env(forced_provider=model)
    return CompletionEngine.from_config(config)


def _forced_provider(ctx: typer.Context) -> Provider | None:
    return (ctx.obj or {}).get("model")


def _print_model_text(text: str) -> None:
    """Print model output verbatim, without rich markup interpretation."""
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def _run(coro: Coroutine[Any, Any, None]) -> None:
    """Run one command coroutine and turn failures into exit codes."""
    try:
        asyncio.run(coro)
    except KeyboardInterrupt:
        print("\n[red]Operation cancelled by user[/red]")
        raise typer.Exit(130)
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        raise typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging"
    ),
    model: Provider | None = typer.Option(
        None,
        "--model",
        case_sensitive=False,
        help="Force a specific AI model provider (e.g., 'anthropic' or 'openai')",
    ),
) -> None:
    """Generate commit messages, PR descriptions and summaries with AI."""
    _configure_logging(verbose)
    ctx.obj = {"model": model}


@app.command()
def version() -> None:
    """Show the version and exit."""
    from git_scribe import __version__

    print(f"git-scribe {__version__}")


@app.command()
def add(
    ctx: typer.Context,
    prompt: str | None = typer.Option(
        None,
        "--prompt",
        help="Custom prompt for feature analysis (e.g., 'Focus on UI changes' or 'Look for security-related changes')",
    ),
) -> None:
    """Intelligently stage changes by feature."""
    _run(_add(_forced_provider(ctx), prompt))


async def _add(model: Provider | None, prompt: str | None) -> None:
    engine = _build_engine(model)
    repository = GitRepository.open()

    staged_diff = repository.staged_diff()
    unstaged_diff = repository.unstaged_diff()
    staged_files, unstaged_files = repository.change_groups()

    if not unstaged_files:
        print("No changes to stage.")
        return

    groups = await ChangeAnalyzer(engine).analyze_changes(
        staged_diff, unstaged_diff, prompt
    )
    if not groups:
        print("No changes to stage.")
        return

    # Only the first group is staged; the rest is left for later runs
    changed = set(staged_files) | set(unstaged_files)
    print("\n[bold]Staging files for feature:[/bold]")
    for path in groups[0]:
        if path not in changed:
            logger.warning(f"Skipping {path}: not among the changed files")
            continue
        print(f"  {escape(path)}")
        repository.stage_file(path)

    commit_message = await CommitMessageBuilder(engine).generate_commit_message(
        repository.staged_diff()
    )
    print("\n[bold]Suggested commit message:[/bold]")
    _print_model_text(commit_message)


@app.command()
def pr(
    ctx: typer.Context,
    base: str | None = typer.Option(
        None, "--base", help="Base branch for the PR (e.g., 'main' or 'develop')"
    ),
    title: str | None = typer.Option(
        None, "--title", help="Custom PR title (if not provided, will be AI-generated)"
    ),
    body: str | None = typer.Option(
        None,
        "--body",
        help="Custom PR description (if not provided, will be AI-generated)",
    ),
) -> None:
    """Create a pull request with AI-generated title and description."""
    _run(_pr(_forced_provider(ctx), base, title, body))


async def _pr(
    model: Provider | None, base: str | None, title: str | None, body: str | None
) -> None:
    engine = _build_engine(model)
    repository = GitRepository.open()

    draft = await PrDescriptionBuilder(engine, repository).build(base, title, body)
    url = create_pull_request(draft)

    print("[green]✨ Pull request created successfully![/green]")
    if url:
        print(escape(url))


@app.command()
def diff(
    ctx: typer.Context,
    from_ref: str = typer.Argument(
        "HEAD", metavar="FROM", help="First git reference (branch, commit, or tag)"
    ),
    to_ref: str | None = typer.Argument(
        None, metavar="TO", help="Second git reference (branch, commit, or tag)"
    ),
    staged: bool = typer.Option(
        False, "--staged", "-s", help="Show staged changes instead"
    ),
    prompt: str | None = typer.Option(
        None,
        "--prompt",
        help="Custom prompt for AI summarization (e.g., 'Focus on security changes' or 'List only modified functions')",
    ),
) -> None:
    """Summarize changes between git references."""
    _run(_diff(_forced_provider(ctx), from_ref, to_ref, staged, prompt))


async def _diff(
    model: Provider | None,
    from_ref: str,
    to_ref: str | None,
    staged: bool,
    prompt: str | None,
) -> None:
    engine = _build_engine(model)
    repository = GitRepository.open()

    if staged:
        lines = repository.staged_diff()
    else:
        lines = repository.diff_between(from_ref, to_ref)

    summary = await DiffSummarizer(engine).summarize_diff(lines, prompt)

    print(f"[dim]{diff_stats(lines)}[/dim]")
    print("[bold]Changes Summary:[/bold]")
    _print_model_text(summary)


@app.command()
def commit(ctx: typer.Context) -> None:
    """Generate a commit message for staged changes and commit them."""
    _run(_commit(_forced_provider(ctx)))


async def _commit(model: Provider | None) -> None:
    engine = _build_engine(model)
    repository = GitRepository.open()

    if not repository.has_staged_changes():
        print("No changes to commit")
        return

    message = await CommitMessageBuilder(engine).generate_commit_message(
        repository.staged_diff()
    )
    commit_id = repository.create_commit(message)

    print(f"[green]Created commit {commit_id[:7]} with message:[/green]")
    _print_model_text(message)


@app.command()
def history(
    ctx: typer.Context,
    reference: str = typer.Argument(
        "HEAD", help="Git reference to start from (branch, commit, or tag)"
    ),
    count: int = typer.Option(
        5, "--count", "-c", min=1, help="Number of commits to summarize"
    ),
    prompt: str | None = typer.Option(
        None,
        "--prompt",
        help="Custom prompt for AI summarization (e.g., 'Focus on API changes' or 'Summarize in bullet points')",
    ),
) -> None:
    """Summarize git history."""
    _run(_history(_forced_provider(ctx), reference, count, prompt))


async def _history(
    model: Provider | None, reference: str, count: int, prompt: str | None
) -> None:
    engine = _build_engine(model)
    repository = GitRepository.open()

    entries = await HistorySummarizer(engine, repository).summarize_history(
        reference, count, prompt
    )

    print("[bold]Git History Summary:[/bold]\n")
    _print_model_text(render_history(entries))


@app.command()
def log(
    ctx: typer.Context,
    branch: str | None = typer.Option(
        None, "--branch", "-b", help="Show commits from this branch"
    ),
    limit: int = typer.Option(
        10, "--limit", "-l", min=1, help="Limit the number of commits shown"
    ),
) -> None:
    """Show commit history with AI-generated summaries."""
    _run(_log(_forced_provider(ctx), branch, limit))


async def _log(model: Provider | None, branch: str | None, limit: int) -> None:
    engine = _build_engine(model)
    repository = GitRepository.open()

    entries = await HistorySummarizer(engine, repository).annotate_log(branch, limit)
    output = render_log(entries)

    if not page_output(output):
        typer.echo(output)


def render_log(entries: list[LogEntry]) -> str:
    """Render log entries as ANSI-coloured text for a pager."""
    log_console = Console(
        force_terminal=True, color_system="standard", soft_wrap=True, highlight=False
    )
    with log_console.capture() as capture:
        for entry in entries:
            commit = entry.commit
            log_console.print()
            log_console.print(f"[yellow]commit {commit.id}[/yellow]")
            log_console.print(f"Author: {escape(commit.author)}")
            log_console.print(
                f"Date:   {commit.timestamp.strftime('%Y-%m-%d %H:%M:%S')}\n"
            )

            log_console.print("[cyan]AI Summary:[/cyan]")
            log_console.print(escape(entry.ai_summary.replace("\n", "\n    ")))

            log_console.print(f"\n[bright_black]{LOG_SEPARATOR}[/bright_black]")

            if commit.message:
                log_console.print("[green]Original Message:[/green]")
                log_console.print(escape(commit.message.strip().replace("\n", "\n    ")))

            log_console.print()
    return capture.get()


if __name__ == "__main__":
    app()
