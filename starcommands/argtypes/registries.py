import re
from enum import Enum

from ..config import Messages
from ..errors import CommandException
from ._argtypes import CompletionContext, CompletionTag


class RegistryTag(CompletionTag):
    """
    Base class for tags backed by one of the server's enum registries.

    Tokens are matched against member names after upper-casing, so
    ``diamond_sword`` selects ``Material.DIAMOND_SWORD``.
    """

    def registry(self, ctx: CompletionContext) -> type[Enum]:
        raise NotImplementedError

    def rejection(self, messages: Messages) -> str:
        raise NotImplementedError

    def candidates(self, ctx: CompletionContext) -> list[str]:
        return sorted(member.name for member in self.registry(ctx))

    def validate(self, ctx: CompletionContext, value: str) -> None:
        if value.upper() not in self.registry(ctx).__members__:
            raise CommandException(self.rejection(ctx.messages))

    def coerce(self, ctx: CompletionContext, value: str) -> Enum:
        return self.registry(ctx)[value.upper()]


class MaterialTag(RegistryTag):
    pattern = re.compile(r"\.material")

    def registry(self, ctx: CompletionContext) -> type[Enum]:
        return ctx.server.materials

    def rejection(self, messages: Messages) -> str:
        return messages.unknown_material


class SoundTag(RegistryTag):
    pattern = re.compile(r"\.sound")

    def registry(self, ctx: CompletionContext) -> type[Enum]:
        return ctx.server.sounds

    def rejection(self, messages: Messages) -> str:
        return messages.unknown_sound


class EntityTag(RegistryTag):
    pattern = re.compile(r"\.entity")

    def registry(self, ctx: CompletionContext) -> type[Enum]:
        return ctx.server.entity_types

    def rejection(self, messages: Messages) -> str:
        return messages.unknown_entity
