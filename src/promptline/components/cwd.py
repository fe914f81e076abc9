"""Current working directory component."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from promptline.core.errors import InvalidOptionsError
from promptline.core.fragments import Value

if TYPE_CHECKING:
    from promptline.core.context import EvaluationContext


class CwdStyle(Enum):
    """How much of the path to show."""

    DEFAULT = "default"
    SHORT = "short"
    LONG = "long"


def replace_home_dir(current_dir: Path, home_dir: Path | None) -> str:
    """Replace the home directory portion of the path with ``~``.

    Examples:
        >>> replace_home_dir(Path("/home/foo/bar/baz"), Path("/home/foo"))
        '~/bar/baz'
    """
    if home_dir is None:
        return str(current_dir)
    if current_dir == home_dir:
        return "~"
    try:
        relative = current_dir.relative_to(home_dir)
    except ValueError:
        return str(current_dir)
    return f"~/{relative}"


def shorten(current_dir: Path, home_dir: Path, repo_root: Path) -> str:
    """Abbreviate the directories between home and the repository.

    Every directory between ``home_dir`` and the repository's parent is
    reduced to its first character; the repository directory and anything
    below it are kept whole.

    Examples:
        >>> shorten(Path("/home/foo/axx/bxx/repo/cxx"), Path("/home/foo"), Path("/home/foo/axx/bxx/repo"))
        '~/a/b/repo/cxx'
    """
    try:
        current_dir.relative_to(home_dir)
        outer = repo_root.parent.relative_to(home_dir)
        rest = current_dir.relative_to(repo_root.parent)
    except ValueError:
        return replace_home_dir(current_dir, home_dir)

    short_parts = [part[0] for part in outer.parts]
    return replace_home_dir(home_dir.joinpath(*short_parts, *rest.parts), home_dir)


def display(context: EvaluationContext, options: dict[str, str]) -> Value:
    raw_style = options.pop("style", CwdStyle.DEFAULT.value)
    try:
        style = CwdStyle(raw_style)
    except ValueError:
        raise InvalidOptionsError("cwd", {"style": raw_style}) from None

    current_dir = context.current_dir

    match style:
        case CwdStyle.LONG:
            output = str(current_dir)
        case CwdStyle.SHORT:
            repository = context.repository
            if repository is None or repository.workdir is None or context.home_dir is None:
                output = replace_home_dir(current_dir, context.home_dir)
            else:
                output = shorten(current_dir, context.home_dir, repository.workdir)
        case _:
            output = replace_home_dir(current_dir, context.home_dir)

    return Value(output)
