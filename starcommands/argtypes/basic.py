import re
from typing import Self

from ..errors import CommandException
from ._argtypes import CompletionContext, CompletionTag


class RangeTag(CompletionTag):
    """
    ``.range(lo-hi)``: suggests ``lo`` up to but excluding ``hi``.

    Only the integer format is validated. The bound itself is a completion
    hint and is not enforced, so ``.range(1-10)`` accepts ``42``.
    """

    pattern = re.compile(r"\.range\((\d+)-(\d+)\)")

    def __init__(self, lo: int, hi: int):
        self.lo = lo
        self.hi = hi

    @classmethod
    def from_match(cls, match: re.Match[str]) -> Self:
        return cls(int(match.group(1)), int(match.group(2)))

    def candidates(self, ctx: CompletionContext) -> list[str]:
        return [str(i) for i in range(self.lo, self.hi)]

    def validate(self, ctx: CompletionContext, value: str) -> None:
        try:
            int(value)
        except ValueError:
            raise CommandException(ctx.messages.not_a_number) from None

    def coerce(self, ctx: CompletionContext, value: str) -> int:
        return int(value)


class BooleanTag(CompletionTag):
    pattern = re.compile(r"\.boolean")

    def candidates(self, ctx: CompletionContext) -> list[str]:
        return ["true", "false"]

    def validate(self, ctx: CompletionContext, value: str) -> None:
        if value.lower() not in ("true", "false"):
            raise CommandException(ctx.messages.not_a_boolean)

    def coerce(self, ctx: CompletionContext, value: str) -> bool:
        return value.lower() == "true"


class EmptyTag(CompletionTag):
    """``.empty``: any text, but nothing to suggest."""

    pattern = re.compile(r"\.empty")


class FreeTextTag(CompletionTag):
    """``.text``, and every parameter without a declared tag."""

    pattern = re.compile(r"\.text")
