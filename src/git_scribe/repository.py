"""Thin wrapper around pygit2 for the repository queries git-scribe needs."""

import logging
from datetime import UTC, datetime
from pathlib import Path

import pygit2
from pygit2.enums import DiffOption, FileStatus, SortMode

from git_scribe.errors import RepositoryError
from git_scribe.models import CommitInfo, DiffLine, LineKind

logger = logging.getLogger(__name__)

_ORIGINS = {
    "+": LineKind.ADDITION,
    "-": LineKind.DELETION,
    " ": LineKind.CONTEXT,
}

_STAGED_FLAGS = (
    FileStatus.INDEX_NEW
    | FileStatus.INDEX_MODIFIED
    | FileStatus.INDEX_DELETED
    | FileStatus.INDEX_RENAMED
    | FileStatus.INDEX_TYPECHANGE
)
_UNSTAGED_FLAGS = (
    FileStatus.WT_NEW
    | FileStatus.WT_MODIFIED
    | FileStatus.WT_DELETED
    | FileStatus.WT_RENAMED
    | FileStatus.WT_TYPECHANGE
)


def diff_to_lines(diff: pygit2.Diff) -> list[DiffLine]:
    """Convert a pygit2 diff into DiffLine records in traversal order.

    Only additions, deletions and context lines are kept; file headers,
    hunk headers and end-of-file markers are dropped.
    """
    lines: list[DiffLine] = []
    for patch in diff:
        if patch is None:
            continue
        path = patch.delta.new_file.path
        for hunk in patch.hunks:
            for line in hunk.lines:
                kind = _ORIGINS.get(line.origin)
                if kind is None:
                    continue
                text = line.content
                if text.endswith("\n"):
                    text = text[:-1]
                lines.append(DiffLine(kind=kind, text=text, path=path))
    return lines


class GitRepository:
    """Repository access for diffs, history, staging and commits."""

    def __init__(self, repo: pygit2.Repository) -> None:
        self.repo = repo

    @classmethod
    def open(cls, path: str | Path | None = None) -> "GitRepository":
        """Open the repository containing ``path`` (default: current directory).

        Raises:
            RepositoryError: If no repository is found
        """
        start = str(path or Path.cwd())
        git_dir = pygit2.discover_repository(start)
        if git_dir is None:
            raise RepositoryError(f"Not a git repository: {start}")
        logger.debug(f"Opened repository at {git_dir}")
        return cls(pygit2.Repository(git_dir))

    @property
    def workdir(self) -> Path | None:
        return Path(self.repo.workdir) if self.repo.workdir else None

    def _empty_tree(self) -> pygit2.Tree:
        oid = self.repo.TreeBuilder().write()
        return self.repo.get(oid)

    def _head_tree(self) -> pygit2.Tree:
        if self.repo.head_is_unborn:
            return self._empty_tree()
        return self.repo.head.peel(pygit2.Tree)

    # Diffs

    def staged_diff(self) -> list[DiffLine]:
        """Changes recorded in the index relative to HEAD."""
        diff = self.repo.index.diff_to_tree(self._head_tree())
        return diff_to_lines(diff)

    def unstaged_diff(self) -> list[DiffLine]:
        """Working tree changes not yet in the index, untracked files included."""
        flags = (
            DiffOption.INCLUDE_UNTRACKED
            | DiffOption.RECURSE_UNTRACKED_DIRS
            | DiffOption.SHOW_UNTRACKED_CONTENT
        )
        diff = self.repo.index.diff_to_workdir(flags=flags)
        return diff_to_lines(diff)

    def has_staged_changes(self) -> bool:
        """Whether the index differs from HEAD, including changes with no diff lines."""
        return any(flags & _STAGED_FLAGS for flags in self.repo.status().values())

    def change_groups(self) -> tuple[list[str], list[str]]:
        """Split changed paths into (staged, unstaged) by status flags."""
        staged: list[str] = []
        unstaged: list[str] = []
        for path, flags in sorted(self.repo.status().items()):
            if flags & _STAGED_FLAGS:
                staged.append(path)
            if flags & _UNSTAGED_FLAGS:
                unstaged.append(path)
        return staged, unstaged

    def resolve_commit(self, reference: str) -> pygit2.Commit:
        """Resolve a branch, tag, revision expression or hash prefix to a commit.

        Raises:
            RepositoryError: If the reference cannot be resolved
        """
        try:
            obj = self.repo.revparse_single(reference)
            return obj.peel(pygit2.Commit)
        except (KeyError, ValueError, pygit2.GitError) as e:
            raise RepositoryError(f"Could not resolve git reference: {reference}") from e

    def diff_between(self, from_ref: str, to_ref: str | None = None) -> list[DiffLine]:
        """Tree-to-tree diff between two references; ``to_ref`` defaults to HEAD."""
        from_tree = self.resolve_commit(from_ref).tree
        to_tree = self.resolve_commit(to_ref or "HEAD").tree
        return diff_to_lines(from_tree.diff_to_tree(to_tree))

    def commit_diff(self, commit_id: str) -> list[DiffLine]:
        """Changes introduced by a single commit relative to its first parent."""
        commit = self.resolve_commit(commit_id)
        flags = DiffOption.PATIENCE | DiffOption.MINIMAL
        if commit.parents:
            parent_tree = commit.parents[0].tree
            diff = parent_tree.diff_to_tree(commit.tree, flags=flags, context_lines=3)
        else:
            diff = commit.tree.diff_to_tree(flags=flags, context_lines=3, swap=True)
        return diff_to_lines(diff)

    def find_base_commit(self, base: str) -> pygit2.Commit:
        """Find a base branch locally, then as ``origin/<base>``."""
        try:
            branch = self.repo.branches.local.get(base)
            if branch is None:
                branch = self.repo.branches.remote.get(f"origin/{base}")
        except ValueError:
            # Not a valid branch name
            branch = None
        if branch is None:
            raise RepositoryError(f"Base branch '{base}' not found")
        return branch.peel(pygit2.Commit)

    def branch_diff(self, base: str) -> list[DiffLine]:
        """Diff from the base branch tree to the HEAD tree."""
        base_commit = self.find_base_commit(base)
        head_tree = self.repo.head.peel(pygit2.Tree)
        return diff_to_lines(base_commit.tree.diff_to_tree(head_tree))

    # History

    def log(self, start: str | None = None, limit: int = 10) -> list[CommitInfo]:
        """Commits reachable from ``start`` (branch or any reference) or HEAD."""
        if start is None:
            if self.repo.head_is_unborn:
                return []
            oid = self.repo.head.target
        else:
            oid = self.resolve_commit(start).id

        commits: list[CommitInfo] = []
        for commit in self.repo.walk(oid, SortMode.TIME):
            if len(commits) >= limit:
                break
            commits.append(self._commit_info(commit))
        return commits

    @staticmethod
    def _commit_info(commit: pygit2.Commit) -> CommitInfo:
        return CommitInfo(
            id=str(commit.id),
            short_id=str(commit.id)[:7],
            author=f"{commit.author.name} <{commit.author.email}>",
            timestamp=datetime.fromtimestamp(commit.commit_time, tz=UTC),
            message=commit.message,
        )

    # Index and commits

    def stage_file(self, path: str) -> None:
        """Stage a path, recording a deletion when it no longer exists."""
        index = self.repo.index
        workdir = self.workdir
        if workdir is not None and not (workdir / path).exists():
            index.remove(path)
        else:
            index.add(path)
        index.write()
        logger.debug(f"Staged {path}")

    def create_commit(self, message: str) -> str:
        """Commit the current index on HEAD and return the new commit id."""
        index = self.repo.index
        tree = index.write_tree()
        signature = self.repo.default_signature
        parents = [] if self.repo.head_is_unborn else [self.repo.head.target]
        oid = self.repo.create_commit(
            "HEAD", signature, signature, message, tree, parents
        )
        logger.info(f"Created commit {str(oid)[:7]}")
        return str(oid)
