"""Command-line interface for promptline."""

from __future__ import annotations

import argparse
import logging
import os
import shutil
import sys
from pathlib import Path

from promptline import __version__
from promptline.config.loader import load_config
from promptline.config.schema import Config
from promptline.core.context import EvaluationContext
from promptline.core.errors import PromptError
from promptline.core.evaluator import render_prompt
from promptline.core.parser import parse
from promptline.shells import Shell

logger = logging.getLogger(__name__)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="promptline",
        description="Render a shell prompt from a template",
        epilog='Example: eval "$(promptline init zsh)"',
    )

    parser.add_argument(
        "--config",
        type=Path,
        metavar="FILE",
        help="Configuration file path (default: ~/.config/promptline/config.yaml)",
    )

    parser.add_argument(
        "--config-dir",
        type=Path,
        metavar="DIR",
        help="Drop-in configuration directory (default: ~/.config/promptline/conf.d/)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug information to stderr",
    )

    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Print the prompt")
    run.add_argument(
        "--shell",
        "-s",
        type=Shell,
        choices=list(Shell),
        required=True,
        metavar="SHELL",
        help="Shell the prompt is rendered for (bash, zsh)",
    )
    run.add_argument(
        "--jobs",
        "-j",
        default="",
        help="Number of background jobs (empty or __empty__ for none)",
    )
    run.add_argument(
        "--status",
        type=int,
        default=0,
        help="Exit status of the previous command",
    )
    run.add_argument(
        "--template",
        "-t",
        metavar="TEMPLATE",
        help="Prompt template (default: from configuration)",
    )
    run.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colors",
    )

    init = subparsers.add_parser("init", help="Print the shell init script")
    init.add_argument(
        "shell",
        type=Shell,
        choices=list(Shell),
        metavar="SHELL",
        help="Shell to initialize (bash, zsh)",
    )
    init.add_argument(
        "template",
        nargs="?",
        help="Prompt template (default: from configuration)",
    )

    return parser.parse_args(args)


def executable_command() -> list[str]:
    """Argument vector that starts this promptline.

    ``sys.argv[0]`` is used when it is an executable file. Under
    ``python -m promptline.cli`` it points at the module source instead,
    so the installed script on ``PATH`` or the current interpreter is
    used in that case.
    """
    argv0 = Path(sys.argv[0]).resolve() if sys.argv and sys.argv[0] else None
    if argv0 is not None and argv0.is_file() and os.access(argv0, os.X_OK):
        return [str(argv0)]

    installed = shutil.which("promptline")
    if installed:
        logger.debug("Not an executable: %s, using %s", argv0, installed)
        return [installed]

    logger.debug("Not an executable: %s, using the interpreter", argv0)
    return [sys.executable, "-m", "promptline.cli"]


def run(parsed: argparse.Namespace, config: Config) -> str:
    """Render the prompt for the ``run`` command."""
    styles = config.style_table()
    tokens = parse(parsed.template or config.template, styles)

    context = EvaluationContext.from_environment(
        jobs=parsed.jobs or None,
        last_status=parsed.status,
        shell=parsed.shell,
        styles=styles,
        color=config.color and not parsed.no_color,
        git_timeout=config.git_timeout,
    )
    return render_prompt(tokens, context)


def init(parsed: argparse.Namespace, config: Config) -> str:
    """Build the init script for the ``init`` command."""
    template = parsed.template or config.template
    # Fail early rather than on every prompt draw
    parse(template, config.style_table())
    return parsed.shell.init_script(executable_command(), template)


def main(args: list[str] | None = None) -> int:
    """Main entry point.

    Args:
        args: Command-line arguments

    Returns:
        Exit code
    """
    parsed = parse_args(args)

    if parsed.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(name)s: %(message)s",
        )

    try:
        config = load_config(
            config_path=parsed.config,
            dropin_dir=parsed.config_dir,
        )

        if parsed.command == "init":
            output = init(parsed, config)
        else:
            output = run(parsed, config)
    except KeyboardInterrupt:
        return 130
    except PromptError as e:
        logger.debug("Render failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(output)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
