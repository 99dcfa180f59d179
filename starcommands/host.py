"""
Interfaces to the plugin host.

starcommands never talks to a server directly; the embedding application
implements these classes on top of whatever bridge it uses.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Protocol

if TYPE_CHECKING:
    from .text import TextComponent


class CommandSender(ABC):
    """Anything that can run a command."""

    name: str
    is_player: bool = False

    @abstractmethod
    def send_message(self, message: str | TextComponent) -> None: ...

    @abstractmethod
    def has_permission(self, permission: str) -> bool: ...


class Player(CommandSender):
    """An online player. ``uuid`` is stable across renames."""

    uuid: str
    is_player = True


class ConsoleSender(CommandSender):
    """The server console. It holds every permission."""

    name = "CONSOLE"

    def has_permission(self, permission: str) -> bool:
        return True


class World(Protocol):
    name: str


class Server(ABC):
    """
    Read-only view of the live registries used for tab completion.

    ``materials``, ``sounds`` and ``entity_types`` are enum classes whose
    member names are the upper-case identifiers players type.
    """

    materials: type[Enum]
    sounds: type[Enum]
    entity_types: type[Enum]

    @abstractmethod
    def online_players(self) -> Iterable[Player]: ...

    @abstractmethod
    def worlds(self) -> Iterable[World]: ...

    def get_player(self, name: str) -> Player | None:
        """Look up an online player by name, ignoring case."""
        for player in self.online_players():
            if player.name.casefold() == name.casefold():
                return player
        return None

    def get_world(self, name: str) -> World | None:
        for world in self.worlds():
            if world.name == name:
                return world
        return None


class HostCommand(Protocol):
    name: str
    aliases: tuple[str, ...]

    async def execute(
        self, sender: CommandSender, alias: str, args: list[str]
    ) -> bool: ...

    async def tab_complete(
        self, sender: CommandSender, alias: str, args: list[str]
    ) -> list[str]: ...


class CommandMap(ABC):
    """The host's command registry."""

    @abstractmethod
    def register(self, fallback_prefix: str, command: HostCommand) -> None: ...

    @abstractmethod
    def get(self, name: str) -> HostCommand | None: ...

    @abstractmethod
    def unregister(self, name: str) -> HostCommand | None: ...


class SimpleCommandMap(CommandMap):
    """
    In-memory command map.

    Commands are reachable by name, by each alias and by ``prefix:name``.
    Later registrations win.
    """

    def __init__(self):
        self._commands: dict[str, HostCommand] = {}

    def register(self, fallback_prefix: str, command: HostCommand) -> None:
        labels = [command.name, *command.aliases]
        labels += [f"{fallback_prefix}:{label}" for label in labels]
        for label in labels:
            self._commands[label.lower()] = command

    def get(self, name: str) -> HostCommand | None:
        return self._commands.get(name.lower())

    def unregister(self, name: str) -> HostCommand | None:
        command = self.get(name)
        if command is not None:
            self._commands = {
                label: cmd for label, cmd in self._commands.items() if cmd is not command
            }
        return command

    def command_names(self) -> list[str]:
        """Unique command names (not aliases), in registration order."""
        seen: set[str] = set()
        names = []
        for cmd in self._commands.values():
            if cmd.name not in seen:
                seen.add(cmd.name)
                names.append(cmd.name)
        return names

    async def dispatch(self, sender: CommandSender, line: str) -> bool:
        """Run a chat line such as ``/punish ban Steve``. False if unknown."""
        segments = line.removeprefix("/").split()
        if not segments:
            return False

        command = self.get(segments[0])
        if command is None:
            return False
        return await command.execute(sender, segments[0], segments[1:])

    async def tab_complete(self, sender: CommandSender, line: str) -> list[str]:
        text = line.removeprefix("/")

        if " " not in text:
            # still typing the command name
            return [f"/{name}" for name in self._labels() if name.startswith(text.lower())]

        label, *args = text.split(" ")
        command = self.get(label)
        if command is None:
            return []
        return await command.tab_complete(sender, label, args)

    def _labels(self) -> list[str]:
        return sorted(label for label in self._commands if ":" not in label)

