"""Read-only access to a git repository through the git executable."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from promptline.core.errors import GitError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 2.0


def run_git(args: list[str], cwd: Path, timeout: float = DEFAULT_TIMEOUT) -> subprocess.CompletedProcess[str]:
    """Run a git command and return the completed process.

    Raises:
        GitError: If git cannot be started or does not finish in time
    """
    try:
        return subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
            timeout=timeout,
            cwd=cwd,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise GitError(f"git {' '.join(args)}: {e}") from e


@dataclass
class StatusSummary:
    """Counts from ``git status --porcelain``."""

    staged: int = 0
    unstaged: int = 0
    untracked: int = 0
    conflicted: int = 0

    @classmethod
    def from_porcelain(cls, output: str) -> StatusSummary:
        summary = cls()
        for line in output.splitlines():
            if len(line) < 2:
                continue
            index, worktree = line[0], line[1]
            if line.startswith("??"):
                summary.untracked += 1
            elif "U" in (index, worktree) or line[:2] in ("AA", "DD"):
                summary.conflicted += 1
            else:
                if index in "MADRCT":
                    summary.staged += 1
                if worktree in "MDT":
                    summary.unstaged += 1
        return summary

    @property
    def is_clean(self) -> bool:
        return not (self.staged or self.unstaged or self.untracked or self.conflicted)

    def __str__(self) -> str:
        parts = [
            f"{symbol}{count}"
            for symbol, count in (
                ("+", self.staged),
                ("*", self.unstaged),
                ("?", self.untracked),
                ("!", self.conflicted),
            )
            if count
        ]
        return "".join(parts)


class Repository:
    """A discovered git repository.

    Attributes:
        git_dir: Absolute path of the ``.git`` directory
        workdir: Root of the working tree, None for bare repositories
    """

    def __init__(self, git_dir: Path, workdir: Path | None, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.git_dir = git_dir
        self.workdir = workdir
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"Repository(git_dir={self.git_dir!r}, workdir={self.workdir!r})"

    @classmethod
    def discover(cls, path: Path, timeout: float = DEFAULT_TIMEOUT) -> Repository | None:
        """Find the repository containing ``path``, if any."""
        try:
            result = run_git(["rev-parse", "--absolute-git-dir", "--is-bare-repository"], path, timeout)
        except GitError as e:
            logger.debug("Repository discovery failed: %s", e)
            return None

        if result.returncode != 0:
            return None

        lines = result.stdout.splitlines()
        if len(lines) < 2:
            return None
        git_dir = Path(lines[0])

        if lines[1].strip() == "true":
            logger.debug("Discovered bare repository at %s", git_dir)
            return cls(git_dir, None, timeout)

        toplevel = run_git(["rev-parse", "--show-toplevel"], path, timeout)
        workdir = Path(toplevel.stdout.strip()) if toplevel.returncode == 0 and toplevel.stdout.strip() else None
        logger.debug("Discovered repository at %s", workdir or git_dir)
        return cls(git_dir, workdir, timeout)

    @property
    def is_bare(self) -> bool:
        return self.workdir is None

    @property
    def path(self) -> Path:
        return self.workdir if self.workdir is not None else self.git_dir

    def _git(self, *args: str) -> subprocess.CompletedProcess[str]:
        return run_git(list(args), self.path, self.timeout)

    def _git_output(self, *args: str) -> str:
        """Stdout of a git command that must succeed.

        Raises:
            GitError: If git exits non-zero
        """
        result = self._git(*args)
        if result.returncode != 0:
            message = result.stderr.strip() or f"exit status {result.returncode}"
            raise GitError(f"git {' '.join(args)}: {message}")
        return result.stdout

    def branch(self) -> str | None:
        """Short name of the checked-out branch, None when HEAD is detached."""
        result = self._git("symbolic-ref", "--quiet", "--short", "HEAD")
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def commit(self) -> str | None:
        """Abbreviated id of HEAD, None on an unborn branch."""
        result = self._git("rev-parse", "--short", "HEAD")
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def status(self) -> StatusSummary:
        """Summarize the working tree status.

        Raises:
            GitError: If the status cannot be computed
        """
        return StatusSummary.from_porcelain(self._git_output("status", "--porcelain=v1"))

    def stashes(self) -> Iterator[str]:
        """Iterate over stash entries, newest first.

        Raises:
            GitError: If the stash list cannot be read
        """
        output = self._git_output("stash", "list", "--format=%gd")
        for line in output.splitlines():
            if line:
                yield line
