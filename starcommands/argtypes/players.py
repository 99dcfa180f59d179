import re

from ..errors import CommandException
from ..host import Player, World
from ._argtypes import CompletionContext, CompletionTag


class PlayerTag(CompletionTag):
    """
    ``.player``: a player who is online right now.

    Suggestions come from the server's online list at the time of the
    request, sorted by name. The handler receives the host's player object.
    """

    pattern = re.compile(r"\.player")

    def candidates(self, ctx: CompletionContext) -> list[str]:
        return sorted(player.name for player in ctx.server.online_players())

    def validate(self, ctx: CompletionContext, value: str) -> None:
        if ctx.server.get_player(value) is None:
            raise CommandException(ctx.messages.unknown_player)

    def coerce(self, ctx: CompletionContext, value: str) -> Player | None:
        return ctx.server.get_player(value)


class WorldTag(CompletionTag):
    pattern = re.compile(r"\.world")

    def candidates(self, ctx: CompletionContext) -> list[str]:
        return sorted(world.name for world in ctx.server.worlds())

    def validate(self, ctx: CompletionContext, value: str) -> None:
        if ctx.server.get_world(value) is None:
            raise CommandException(ctx.messages.unknown_world)

    def coerce(self, ctx: CompletionContext, value: str) -> World | None:
        return ctx.server.get_world(value)
