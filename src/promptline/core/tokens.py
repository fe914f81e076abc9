"""Template token tree produced by the parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

RESERVED_KEYWORDS = frozenset({"end", "else"})

ENV_CONDITION_PREFIX = "env_"


class ComponentName(Enum):
    """Closed set of dynamic components a template may reference."""

    CWD = "cwd"
    GIT_BRANCH = "git_branch"
    GIT_COMMIT = "git_commit"
    GIT_STASH = "git_stash"
    GIT_STATUS = "git_status"
    HOSTNAME = "hostname"
    JOBS = "jobs"
    USER = "user"

    @classmethod
    def from_identifier(cls, identifier: str) -> ComponentName:
        """Resolve an identifier, raising ValueError for unknown names."""
        return cls(identifier)


@dataclass(frozen=True)
class LastCommandStatusZero:
    """Holds when the previous command exited with status 0."""

    def to_identifier(self) -> str:
        return "last_command_status"


@dataclass(frozen=True)
class EnvironmentVariablePresent:
    """Holds when the named environment variable is set."""

    name: str

    def to_identifier(self) -> str:
        return f"{ENV_CONDITION_PREFIX}{self.name}"


Condition = LastCommandStatusZero | EnvironmentVariablePresent


def parse_condition(identifier: str) -> Condition:
    """Resolve a condition identifier.

    Raises:
        ValueError: If the identifier names no known condition
    """
    if identifier == "last_command_status":
        return LastCommandStatusZero()
    if identifier.startswith(ENV_CONDITION_PREFIX) and len(identifier) > len(ENV_CONDITION_PREFIX):
        return EnvironmentVariablePresent(identifier[len(ENV_CONDITION_PREFIX) :])
    raise ValueError(f"unknown condition: {identifier}")


@dataclass(frozen=True)
class Static:
    """Literal text emitted verbatim."""

    text: str


@dataclass(frozen=True)
class StyleMarker:
    """A color-start or color-reset directive, by style keyword."""

    name: str

    @property
    def is_reset(self) -> bool:
        return self.name == "reset"


@dataclass
class ComponentRef:
    """A dynamic component with its options.

    Attributes:
        name: Which component to run
        options: Option key to value, in template order
    """

    name: ComponentName
    options: dict[str, str] = field(default_factory=dict)


@dataclass
class Conditional:
    """Emit ``left`` when ``condition`` holds, else ``right`` if present."""

    condition: Condition
    left: list[Token]
    right: list[Token] | None = None


Token = Static | StyleMarker | ComponentRef | Conditional


def serialize(tokens: list[Token]) -> str:
    """Convert a token tree back to template syntax.

    Parsing the result yields a tree equal to ``tokens`` for any tree that
    came out of the parser.

    Examples:
        >>> serialize([ComponentRef(ComponentName.CWD, {"style": "short"}), Static(" $ ")])
        '{cwd style=short} $ '
    """
    parts: list[str] = []

    for token in tokens:
        match token:
            case Static(text=text):
                parts.append(text)
            case StyleMarker(name=name):
                parts.append(f"{{{name}}}")
            case ComponentRef(name=name, options=options):
                pairs = "".join(f" {key}={value}" for key, value in options.items())
                parts.append(f"{{{name.value}{pairs}}}")
            case Conditional(condition=condition, left=left, right=right):
                parts.append(f"{{if {condition.to_identifier()}}}")
                parts.append(serialize(left))
                if right is not None:
                    parts.append("{else}")
                    parts.append(serialize(right))
                parts.append("{end}")

    return "".join(parts)
