"""Fake plugin host and sample commands shared by the tests."""

from dataclasses import dataclass
from enum import Enum

import pytest

from starcommands import (
    ConfigStorage,
    ConsoleSender,
    OptionalArg,
    Player,
    Resolver,
    Server,
    TimeUnit,
    command,
    cooldown,
    default,
    permission,
    subcommand,
    tab_completion,
)


class Material(Enum):
    STONE = 1
    DIAMOND_SWORD = 2
    ACACIA_LOG = 3
    DIRT = 4


class Sound(Enum):
    ENTITY_VILLAGER_NO = 1
    BLOCK_NOTE_BLOCK_BASS = 2


class EntityType(Enum):
    ZOMBIE = 1
    CREEPER = 2
    PIG = 3


@dataclass
class FakeWorld:
    name: str


class MessageLog:
    def send_message(self, message):
        self.messages.append(message)

    @property
    def texts(self) -> list[str]:
        return [str(message) for message in self.messages]


class FakePlayer(MessageLog, Player):
    def __init__(self, name: str, uuid: str, permissions: set[str] | None = None):
        self.name = name
        self.uuid = uuid
        self.permissions = permissions or set()
        self.messages = []

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions

    def __repr__(self):
        return f"FakePlayer({self.name!r})"


class FakeConsole(MessageLog, ConsoleSender):
    def __init__(self):
        self.messages = []


class FakeServer(Server):
    materials = Material
    sounds = Sound
    entity_types = EntityType

    def __init__(self, players=(), worlds=()):
        self.players = list(players)
        self.world_list = list(worlds)

    def online_players(self):
        return list(self.players)

    def worlds(self):
        return list(self.world_list)


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# =============================================================================
# Sample commands
# =============================================================================


@command(
    "punish",
    "/punish <ban|kick|mute> <player> <reason> <days>",
    description="Punish a user",
    aliases=("p", "pun"),
)
@permission("commands.admin.punish")
class PunishCommand:
    def __init__(self):
        self.calls = []

    @subcommand("ban", "/punish ban <player> <reason> <days>")
    @tab_completion(".player", ".empty", ".range(1-10)")
    @permission("commands.admin.punish.ban")
    async def ban(self, sender, player, reason, days):
        self.calls.append(("ban", sender, player, reason, days))

    @subcommand("kick", "/punish kick <player> [reason]")
    @tab_completion(".player", ".empty")
    async def kick(self, sender, player, reason: OptionalArg[str]):
        self.calls.append(("kick", sender, player, reason))

    @subcommand("mute")
    @tab_completion(".player", ".config(punish.reasons)")
    def mute(self, sender, player, reason):
        self.calls.append(("mute", sender, player, reason))


@command("give", description="Give an item")
class GiveCommand:
    def __init__(self):
        self.calls = []

    @default
    @tab_completion(".player", ".material", ".range(1-65)")
    async def give(self, sender, player, material, amount: OptionalArg[int]):
        self.calls.append((player, material, amount))
        return f"Gave {amount or 1} {material.name} to {player.name}"


@command("heal")
@cooldown(5, TimeUnit.SECONDS, bypass="heal.bypass")
class HealCommand:
    def __init__(self):
        self.calls = 0

    @default
    async def heal(self, sender):
        self.calls += 1


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def steve():
    return FakePlayer("Steve", "8667ba71-b85a-4004-af54-457a9734eed7")


@pytest.fixture
def alex():
    return FakePlayer("Alex", "ec561538-f3fd-461d-aff5-086b22154bce", {"commands.admin.punish"})


@pytest.fixture
def moderator():
    return FakePlayer(
        "Mod",
        "069a79f4-44e9-4726-a5be-fca90e38aaf5",
        {"commands.admin.punish", "commands.admin.punish.ban"},
    )


@pytest.fixture
def console():
    return FakeConsole()


@pytest.fixture
def server(steve, alex, moderator):
    return FakeServer(
        players=[steve, alex, moderator],
        worlds=[FakeWorld("world_nether"), FakeWorld("world")],
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def config():
    return ConfigStorage.from_dict({"punish": {"reasons": ["griefing", "spam"]}})


@pytest.fixture
def resolver(server, config, clock):
    return Resolver(server, config=config, clock=clock)


@pytest.fixture
def punish(resolver):
    (registered,) = resolver.register(PunishCommand())
    return registered


@pytest.fixture
def give(resolver):
    (registered,) = resolver.register(GiveCommand())
    return registered


@pytest.fixture
def heal(resolver):
    (registered,) = resolver.register(HealCommand())
    return registered
