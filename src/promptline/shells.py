"""Shell specific escaping and init scripts."""

from __future__ import annotations

import shlex
from enum import Enum

ZSH_INIT = """\
_promptline_precmd() {
    local exit_code=$?
    local job_count=${#jobstates}
    if [[ $job_count -eq 0 ]]; then
        job_count=__empty__
    fi
    PROMPT="$(__CMD__ run --shell zsh --status "$exit_code" --jobs "$job_count" --template __TEMPLATE__)"
}

autoload -Uz add-zsh-hook
add-zsh-hook precmd _promptline_precmd
"""

BASH_INIT = """\
_promptline_prompt_command() {
    local exit_code=$?
    local job_count
    job_count=$(jobs -p | wc -l | tr -d ' ')
    if [[ $job_count -eq 0 ]]; then
        job_count=__empty__
    fi
    PS1="$(__CMD__ run --shell bash --status "$exit_code" --jobs "$job_count" --template __TEMPLATE__)"
}

if [[ ";${PROMPT_COMMAND[*]:-};" != *";_promptline_prompt_command;"* ]]; then
    PROMPT_COMMAND="_promptline_prompt_command${PROMPT_COMMAND:+;$PROMPT_COMMAND}"
fi
"""


class Shell(Enum):
    """Shells a prompt can be rendered for."""

    BASH = "bash"
    ZSH = "zsh"

    def wrap_escape(self, sequence: str) -> str:
        """Mark an escape sequence as zero-width for the shell's line editor."""
        if not sequence:
            return ""
        if self is Shell.ZSH:
            return f"%{{{sequence}%}}"
        return f"\\[{sequence}\\]"

    def escape_value(self, text: str) -> str:
        """Quote computed text so prompt expansion shows it literally.

        Bash expands ``$``, backticks and backslashes in ``PS1``; zsh
        treats ``%`` as the start of a prompt escape.

        Examples:
            >>> Shell.BASH.escape_value("$(id)")
            '\\\\$(id)'
            >>> Shell.ZSH.escape_value("100%done")
            '100%%done'
        """
        if self is Shell.ZSH:
            return text.replace("%", "%%")
        return text.replace("\\", "\\\\").replace("$", "\\$").replace("`", "\\`")

    def init_script(self, command: list[str], template: str) -> str:
        """Snippet to source from the shell's startup file.

        Args:
            command: Argument vector that starts promptline
            template: Template passed to every ``run`` call
        """
        script = ZSH_INIT if self is Shell.ZSH else BASH_INIT
        script = script.replace("__CMD__", shlex.join(command))
        return script.replace("__TEMPLATE__", shlex.quote(template))
