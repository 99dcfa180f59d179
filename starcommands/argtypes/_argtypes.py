from __future__ import annotations

import re
from abc import ABC
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Self

from ..config import Messages

if TYPE_CHECKING:
    from ..config import ConfigStorage
    from ..host import Server


@dataclass
class CompletionContext:
    """
    Everything a completion tag may look at.

    Attributes:
        server: Live registries (online players, worlds, materials, ...)
        custom_options: Named lists registered by the embedding application
        config: Backing store for ``.config(path)`` lists, if one is loaded
        messages: User-facing rejection messages
    """

    server: Server
    custom_options: dict[str, list[str]] = field(default_factory=dict)
    config: ConfigStorage | None = None
    messages: Messages = field(default_factory=Messages)


class CompletionTag(ABC):
    """
    Base class for positional argument tags.

    A tag lists tab completion candidates for its position, validates the
    raw token a sender typed there and converts it to the value the handler
    receives. Subclasses that can be written as a string in
    ``@tab_completion`` set ``pattern``.
    """

    pattern: ClassVar[re.Pattern[str] | None] = None

    @classmethod
    def from_match(cls, match: re.Match[str]) -> Self:
        return cls()

    def candidates(self, ctx: CompletionContext) -> list[str]:
        """Completion candidates, built fresh on every call."""
        return []

    def validate(self, ctx: CompletionContext, value: str) -> None:
        """
        Check a raw token.

        Raises:
            CommandException: with the message to show the sender
        """
        return None

    def coerce(self, ctx: CompletionContext, value: str) -> Any:
        """Convert an already validated token."""
        return value

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return vars(self) == vars(other)

    def __hash__(self) -> int:
        return hash((type(self), tuple(sorted(vars(self).items()))))

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"{type(self).__name__}({args})"
