"""Components backed by the git repository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from promptline.core.errors import GitError
from promptline.core.fragments import Value

if TYPE_CHECKING:
    from promptline.core.context import EvaluationContext

logger = logging.getLogger(__name__)


def branch(context: EvaluationContext, options: dict[str, str]) -> Value | None:
    repository = context.repository
    if repository is None:
        return None
    try:
        name = repository.branch()
    except GitError as e:
        logger.debug("git_branch: %s", e)
        return None
    return Value(name) if name else None


def commit(context: EvaluationContext, options: dict[str, str]) -> Value | None:
    repository = context.repository
    if repository is None:
        return None
    try:
        commit_id = repository.commit()
    except GitError as e:
        logger.debug("git_commit: %s", e)
        return None
    return Value(commit_id) if commit_id else None


def stash(context: EvaluationContext, options: dict[str, str]) -> Value | None:
    """Number of stash entries followed by ``+``, e.g. ``3+``."""
    with context.exclusive_repository() as repository:
        if repository is None or repository.is_bare:
            return None
        count = 0
        try:
            for _entry in repository.stashes():
                count += 1
        except GitError as e:
            logger.debug("git_stash: %s", e)
            return None

    if count == 0:
        return None
    return Value(f"{count}+")


def status(context: EvaluationContext, options: dict[str, str]) -> Value | None:
    """Working tree summary.

    Raises:
        GitError: If a working tree is present but its status cannot be read
    """
    repository = context.repository
    if repository is None or repository.is_bare:
        return None
    summary = repository.status()
    if summary.is_clean:
        return None
    return Value(str(summary))
