import logging
import re
from typing import Self

from ..errors import CommandException
from ._argtypes import CompletionContext, CompletionTag

logger = logging.getLogger(__name__)


class ListTag(CompletionTag):
    """A token must be one of a list of strings resolved at request time."""

    def options(self, ctx: CompletionContext) -> list[str]:
        raise NotImplementedError

    def candidates(self, ctx: CompletionContext) -> list[str]:
        return list(self.options(ctx))

    def validate(self, ctx: CompletionContext, value: str) -> None:
        if value not in self.options(ctx):
            raise CommandException(ctx.messages.not_in_list)


class ConfigListTag(ListTag):
    """``.config(dotted.path)``: the string list at that path in the config."""

    pattern = re.compile(r"\.config\(([\w.]+)\)")

    def __init__(self, path: str):
        self.path = path

    @classmethod
    def from_match(cls, match: re.Match[str]) -> Self:
        return cls(match.group(1))

    def options(self, ctx: CompletionContext) -> list[str]:
        if ctx.config is None:
            logger.debug("no config loaded for .config(%s)", self.path)
            return []
        return ctx.config.get_string_list(self.path)


class CustomListTag(ListTag):
    """
    A list registered at runtime with ``Resolver.register_custom_options``.

    Any tag string that is not one of the builtin forms names one of these.
    """

    def __init__(self, id: str):
        self.id = id

    def options(self, ctx: CompletionContext) -> list[str]:
        options = ctx.custom_options.get(self.id)
        if options is None:
            logger.warning("no custom options registered under %r", self.id)
            return []
        return options
