"""
Command resolution: picks the handler for a sender's arguments, checks every
gate in order, converts the arguments and runs the handler.

Order of checks for ``execute``:
    cooldown -> command permission -> audience -> handler selection
    (+ handler permission) -> argument count -> argument validation -> run
"""

from __future__ import annotations

import inspect
import logging
import threading
import time
from typing import TYPE_CHECKING, Any, Callable, Iterable

from .argtypes import CompletionContext
from .command import CommandSpec, HandlerSpec, Permission, extract
from .config import ConfigStorage, Messages
from .cooldowns import CooldownTracker
from .errors import CommandException, DeclarationError, NoDefaultHandlerError
from .host import CommandMap, SimpleCommandMap
from .text import TextComponent

if TYPE_CHECKING:
    from .host import CommandSender, Server

logger = logging.getLogger(__name__)


class RegisteredCommand:
    """The object handed to the host's command map for one command."""

    def __init__(self, resolver: Resolver, spec: CommandSpec):
        self.resolver = resolver
        self.spec = spec

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def aliases(self) -> tuple[str, ...]:
        return self.spec.aliases

    @property
    def description(self) -> str:
        return self.spec.description

    @property
    def usage(self) -> str:
        return self.spec.usage

    @property
    def permission(self) -> str | None:
        return self.spec.permission.node if self.spec.permission else None

    @property
    def permission_message(self) -> str | None:
        return self.spec.permission.message if self.spec.permission else None

    async def execute(self, sender: CommandSender, alias: str, args: list[str]) -> bool:
        return await self.resolver.execute(sender, self.spec, alias, args)

    async def tab_complete(
        self, sender: CommandSender, alias: str, args: list[str]
    ) -> list[str]:
        return await self.resolver.complete(sender, self.spec, alias, args)

    def __repr__(self) -> str:
        return f"RegisteredCommand({self.name!r})"


class Resolver:
    """
    Owns everything commands share at runtime: the custom option lists, the
    config, the cooldown tracker and the registered commands.

    One resolver is created when the embedding plugin starts and dropped
    when it stops.
    """

    def __init__(
        self,
        server: Server,
        command_map: CommandMap | None = None,
        *,
        config: ConfigStorage | None = None,
        messages: Messages | None = None,
        fallback_prefix: str = "starcommands",
        clock: Callable[[], float] = time.time,
    ):
        self.server = server
        self.command_map = command_map if command_map is not None else SimpleCommandMap()
        self.config = config
        self.fallback_prefix = fallback_prefix
        self.cooldowns = CooldownTracker(clock)
        self.commands: dict[str, RegisteredCommand] = {}

        self._fixed_messages = messages
        self.messages = messages or Messages.from_config(config)

        self._options_lock = threading.Lock()
        self._custom_options: dict[str, list[str]] = {}

    # =========================================================================
    # Registration
    # =========================================================================

    def register(
        self, *definitions: Any, unregister: bool = False
    ) -> list[RegisteredCommand]:
        """
        Register command classes (or instances of them) with the host.

        A definition with a declaration error is logged and skipped; the
        others are still registered.

        Args:
            *definitions: Classes decorated with ``@command``, or instances
            unregister: Remove any existing host command with the same name first
        """
        registered: list[RegisteredCommand] = []

        for definition in definitions:
            try:
                spec = extract(definition)
            except DeclarationError as e:
                logger.error("could not register %r: %s", definition, e)
                continue

            if unregister:
                existing = self.command_map.unregister(spec.name)
                if existing is not None:
                    logger.info("unregistered existing command /%s", spec.name)

            command = RegisteredCommand(self, spec)
            self.command_map.register(self.fallback_prefix, command)
            self.commands[spec.name.lower()] = command
            registered.append(command)
            logger.debug(
                "registered /%s (%d subcommands)", spec.name, len(spec.subcommands)
            )

        return registered

    def get(self, name: str) -> RegisteredCommand | None:
        return self.commands.get(name.lower())

    def register_custom_options(self, id: str, options: Iterable[str]) -> None:
        """Register the list a custom tab completion id resolves to."""
        with self._options_lock:
            self._custom_options[id] = list(options)

    def reload_config(self) -> None:
        if self.config is not None:
            self.config.reload()
        if self._fixed_messages is None:
            self.messages = Messages.from_config(self.config)

    def reset(self) -> None:
        """Forget custom options and cooldowns, as on a fresh start."""
        with self._options_lock:
            self._custom_options.clear()
        self.cooldowns.clear()

    @property
    def context(self) -> CompletionContext:
        with self._options_lock:
            options = {k: list(v) for k, v in self._custom_options.items()}
        return CompletionContext(
            server=self.server,
            custom_options=options,
            config=self.config,
            messages=self.messages,
        )

    # =========================================================================
    # Execution
    # =========================================================================

    async def execute(
        self, sender: CommandSender, spec: CommandSpec, alias: str, args: list[str]
    ) -> bool:
        """
        Run a command for a sender.

        Every user error is reported to the sender; returns whether the
        handler ran to completion.
        """
        try:
            handler, values = self.resolve(sender, spec, args)
        except CommandException as err:
            logger.debug("/%s %s rejected for %s", alias, " ".join(args), sender.name)
            self._send_error(sender, err.message)
            return False
        except NoDefaultHandlerError as e:
            logger.error("%s", e)
            return False

        try:
            output = handler.function(sender, *values)
            if inspect.isawaitable(output):
                output = await output
        except CommandException as err:
            self._send_error(sender, err.message)
            return False
        except Exception:
            logger.exception("error while running /%s %s", alias, " ".join(args))
            return False

        if isinstance(output, (str, TextComponent)) and output:
            sender.send_message(output)

        self.cooldowns.record(sender, spec.cooldown)
        return True

    def resolve(
        self, sender: CommandSender, spec: CommandSpec, args: list[str]
    ) -> tuple[HandlerSpec, list[Any]]:
        """
        Pick the handler and build its arguments without running it.

        Raises:
            CommandException: for anything the sender should be told about
            NoDefaultHandlerError: if the command has nothing to run
        """
        if self.cooldowns.is_in_cooldown(sender):
            seconds = self.cooldowns.remaining_seconds(sender)
            raise CommandException(self.messages.cooldown.format(seconds=seconds))

        self._check_permission(sender, spec.permission)

        if spec.console_only and sender.is_player:
            raise CommandException(self.messages.console_only)
        if spec.player_only and not sender.is_player:
            raise CommandException(self.messages.player_only)

        handler, supplied = self.select_handler(sender, spec, args)

        if not handler.accepts(len(supplied)):
            raise CommandException(handler.usage)

        return handler, self.build_arguments(handler, supplied)

    def select_handler(
        self, sender: CommandSender, spec: CommandSpec, args: list[str]
    ) -> tuple[HandlerSpec, list[str]]:
        """The handler to run and the arguments left for it."""
        if not args:
            if spec.subcommands:
                raise CommandException(spec.usage)
            if spec.default is None:
                raise NoDefaultHandlerError(spec.name)
            handler, supplied = spec.default, []
        elif spec.subcommands:
            found = spec.subcommand(args[0])
            if found is None:
                raise CommandException(spec.usage)
            handler, supplied = found, args[1:]
        else:
            if spec.default is None:
                raise NoDefaultHandlerError(spec.name)
            handler, supplied = spec.default, args

        self._check_permission(sender, handler.permission)
        return handler, list(supplied)

    def build_arguments(self, handler: HandlerSpec, supplied: list[str]) -> list[Any]:
        ctx = self.context
        values: list[Any] = []

        for index, token in enumerate(supplied):
            tag = handler.tag(index)
            if tag is None:
                # no tag declared for this position; passed through as typed
                values.append(token)
                continue
            tag.validate(ctx, token)
            values.append(tag.coerce(ctx, token))

        # optional trailing parameter left out
        values.extend([None] * (handler.declared_arity - len(values)))
        return values

    # =========================================================================
    # Tab completion
    # =========================================================================

    async def complete(
        self, sender: CommandSender, spec: CommandSpec, alias: str, args: list[str]
    ) -> list[str]:
        """
        Suggestions for the last token of ``args`` (the one being typed).
        """
        if not args or not self._has_permission(sender, spec.permission):
            return []

        partial = args[-1].lower()

        if spec.subcommands:
            if len(args) == 1:
                options = [
                    handler.name
                    for handler in spec.subcommands.values()
                    if handler.name and self._has_permission(sender, handler.permission)
                ]
            else:
                handler = spec.subcommand(args[0])
                if handler is None or not self._has_permission(
                    sender, handler.permission
                ):
                    return []
                options = self._candidates(handler, len(args) - 2)
        elif spec.default is not None:
            if not self._has_permission(sender, spec.default.permission):
                return []
            options = self._candidates(spec.default, len(args) - 1)
        else:
            return []

        return [option for option in options if option.lower().startswith(partial)]

    def _candidates(self, handler: HandlerSpec, index: int) -> list[str]:
        tag = handler.tag(index)
        if tag is None:
            return []
        return tag.candidates(self.context)

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _has_permission(sender: CommandSender, permission: Permission | None) -> bool:
        return permission is None or sender.has_permission(permission.node)

    def _check_permission(
        self, sender: CommandSender, permission: Permission | None
    ) -> None:
        if permission is not None and not sender.has_permission(permission.node):
            raise CommandException(permission.message)

    @staticmethod
    def _send_error(sender: CommandSender, message: str | TextComponent) -> None:
        message = TextComponent(message)
        if not message.data.get("color"):
            message.color("red")
        sender.send_message(message)
