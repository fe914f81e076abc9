"""Components describing the session: host, user and jobs."""

from __future__ import annotations

import getpass
import socket
from typing import TYPE_CHECKING

from promptline.core.fragments import Value

if TYPE_CHECKING:
    from promptline.core.context import EvaluationContext

NO_JOBS = "__empty__"


def hostname(context: EvaluationContext, options: dict[str, str]) -> Value | None:
    name = socket.gethostname().split(".", 1)[0]
    return Value(name) if name else None


def user(context: EvaluationContext, options: dict[str, str]) -> Value | None:
    for variable in ("USER", "LOGNAME"):
        name = context.environ.get(variable)
        if name:
            return Value(name)
    try:
        name = getpass.getuser()
    except (KeyError, OSError):
        return None
    return Value(name) if name else None


def jobs(context: EvaluationContext, options: dict[str, str]) -> Value | None:
    if not context.jobs or context.jobs == NO_JOBS:
        return None
    return Value(context.jobs)
