"""Shared fixtures: throwaway git repositories built with pygit2."""

from pathlib import Path

import pygit2
import pytest

BASE_TIME = 1_700_000_000


class RepoBuilder:
    """Small helper for writing files and committing in a test repository."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.repo = pygit2.init_repository(str(path), initial_head="main")
        self.repo.config["user.name"] = "Test User"
        self.repo.config["user.email"] = "test@example.com"
        self._commits = 0

    def write(self, name: str, content: str) -> Path:
        file_path = self.path / name
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content)
        return file_path

    def stage(self, *names: str) -> None:
        for name in names:
            self.repo.index.add(name)
        self.repo.index.write()

    def commit(self, message: str, *names: str) -> str:
        """Stage ``names`` and commit; commit times increase by one minute each."""
        self.stage(*names)
        tree = self.repo.index.write_tree()
        parents = [] if self.repo.head_is_unborn else [self.repo.head.target]
        signature = pygit2.Signature(
            "Test User", "test@example.com", BASE_TIME + 60 * self._commits, 0
        )
        self._commits += 1
        oid = self.repo.create_commit(
            "HEAD", signature, signature, message, tree, parents
        )
        return str(oid)


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    return RepoBuilder(tmp_path / "repo")
