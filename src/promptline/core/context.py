"""Evaluation context: everything a render may look at."""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from promptline.core.color import StyleTable
from promptline.git import DEFAULT_TIMEOUT, Repository
from promptline.shells import Shell

_UNDISCOVERED = object()


class RepositoryBorrowedError(RuntimeError):
    """The repository was accessed while exclusively borrowed."""


@dataclass
class EvaluationContext:
    """Live data for one render.

    The repository is discovered lazily on first access, so templates that
    never mention a git component never start git. Handlers read it through
    :attr:`repository`; a handler that walks mutable repository state uses
    :meth:`exclusive_repository`, and no other access is allowed while that
    borrow is held.

    Attributes:
        current_dir: Directory the prompt is drawn in
        home_dir: The user's home directory
        jobs: Job count string, None when there are no jobs
        last_status: Exit status of the previous command
        environ: Environment variable lookup
        shell: Shell the prompt is rendered for
        styles: Style keyword table
        color: Whether style markers produce escape sequences
        git_timeout: Seconds to wait for each git command
    """

    current_dir: Path
    home_dir: Path | None = None
    jobs: str | None = None
    last_status: int = 0
    environ: Mapping[str, str] = field(default_factory=dict)
    shell: Shell = Shell.BASH
    styles: StyleTable = field(default_factory=StyleTable)
    color: bool = True
    git_timeout: float = DEFAULT_TIMEOUT
    _repository: object = field(default=_UNDISCOVERED, repr=False)
    _borrowed: bool = field(default=False, repr=False)

    @classmethod
    def from_environment(cls, **kwargs: object) -> EvaluationContext:
        """Build a context for the running process.

        Keyword arguments override the values read from the process.
        """
        values: dict[str, object] = {
            "current_dir": Path.cwd(),
            "home_dir": Path.home(),
            "environ": os.environ,
        }
        values.update(kwargs)
        return cls(**values)  # type: ignore[arg-type]

    @classmethod
    def with_repository(cls, repository: Repository | None, **kwargs: object) -> EvaluationContext:
        """Build a context with an already discovered repository (or none)."""
        context = cls(**kwargs)  # type: ignore[arg-type]
        context._repository = repository
        return context

    def _discover(self) -> Repository | None:
        if self._repository is _UNDISCOVERED:
            self._repository = Repository.discover(self.current_dir, self.git_timeout)
        return self._repository  # type: ignore[return-value]

    @property
    def repository(self) -> Repository | None:
        """Shared access to the repository, None when there is none.

        Raises:
            RepositoryBorrowedError: While an exclusive borrow is held
        """
        if self._borrowed:
            raise RepositoryBorrowedError("repository is exclusively borrowed")
        return self._discover()

    @contextmanager
    def exclusive_repository(self) -> Iterator[Repository | None]:
        """Exclusive access to the repository for the duration of a block."""
        if self._borrowed:
            raise RepositoryBorrowedError("repository is already exclusively borrowed")
        repository = self._discover()
        self._borrowed = True
        try:
            yield repository
        finally:
            self._borrowed = False

    def env_present(self, name: str) -> bool:
        return name in self.environ

    def style_sequence(self, name: str) -> str:
        """Escape sequence for a style keyword, wrapped for the shell."""
        if not self.color:
            return ""
        return self.shell.wrap_escape(self.styles.sequence(name))
