"""Handlers producing the output of each template component.

A handler receives the evaluation context and the component's options.
It removes every option it understands from the mapping and returns a
fragment, or None when it has nothing to show.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from promptline.components import cwd, git, system
from promptline.core.fragments import Fragment
from promptline.core.tokens import ComponentName

if TYPE_CHECKING:
    from promptline.core.context import EvaluationContext

Handler = Callable[["EvaluationContext", dict[str, str]], "Fragment | None"]

HANDLERS: dict[ComponentName, Handler] = {
    ComponentName.CWD: cwd.display,
    ComponentName.GIT_BRANCH: git.branch,
    ComponentName.GIT_COMMIT: git.commit,
    ComponentName.GIT_STASH: git.stash,
    ComponentName.GIT_STATUS: git.status,
    ComponentName.HOSTNAME: system.hostname,
    ComponentName.JOBS: system.jobs,
    ComponentName.USER: system.user,
}

__all__ = ["HANDLERS", "Handler"]
