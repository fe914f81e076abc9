"""Pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from promptline.core.context import EvaluationContext
from promptline.core.errors import GitError
from promptline.git import StatusSummary
from promptline.shells import Shell


class FakeRepository:
    """Stands in for promptline.git.Repository without running git."""

    def __init__(
        self,
        workdir: Path | None = Path("/home/alice/src/project"),
        branch: str | None = "main",
        commit: str | None = "1a2b3c4",
        stashes: list[str] | None = None,
        status: StatusSummary | None = None,
        fail: bool = False,
    ) -> None:
        self.workdir = workdir
        self.git_dir = (workdir or Path("/srv/bare.git")) / ".git"
        self._branch = branch
        self._commit = commit
        self._stashes = stashes or []
        self._status = status or StatusSummary()
        self._fail = fail

    @property
    def is_bare(self) -> bool:
        return self.workdir is None

    def _check(self) -> None:
        if self._fail:
            raise GitError("git failed")

    def branch(self) -> str | None:
        self._check()
        return self._branch

    def commit(self) -> str | None:
        self._check()
        return self._commit

    def status(self) -> StatusSummary:
        self._check()
        return self._status

    def stashes(self) -> Iterator[str]:
        self._check()
        yield from self._stashes


@pytest.fixture
def make_context():
    """Build an evaluation context with a fixed repository (or none)."""

    def factory(repository: FakeRepository | None = None, **kwargs) -> EvaluationContext:
        values = {
            "current_dir": Path("/home/alice"),
            "home_dir": Path("/home/alice"),
            "shell": Shell.BASH,
        }
        values.update(kwargs)
        return EvaluationContext.with_repository(repository, **values)

    return factory


@pytest.fixture
def context(make_context) -> EvaluationContext:
    """Context in the home directory with no repository."""
    return make_context()
