"""
Command declarations and the extractor that turns them into specs.

Example:
    @command("punish", description="Punish a user", aliases=("p",))
    @permission("commands.admin.punish")
    @cooldown(5, TimeUnit.SECONDS)
    class PunishCommand:
        @subcommand("ban", "/punish ban <player> <reason> <days>")
        @tab_completion(".player", ".empty", ".range(1-10)")
        @permission("commands.admin.punish.ban")
        async def ban(self, sender, player, reason, days): ...

        @subcommand("kick")
        @tab_completion(".player", ".empty")
        async def kick(self, sender, player, reason: OptionalArg[str]): ...
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, get_origin, get_type_hints

from .argtypes import CompletionTag, parse_tag
from .errors import (
    ConflictingAudienceError,
    DuplicateDefaultHandlerError,
    DuplicateOptionalMarkerError,
    DuplicateSubcommandError,
    IllegalOptionalPlacementError,
    InvalidHandlerSignatureError,
    MissingCommandDeclarationError,
)

type Handler = Callable[..., Awaitable[Any] | Any]


class OptionalArg[T]:
    """
    Marks the trailing parameter of a handler as optional.

    Use ``OptionalArg[int]`` as the annotation of the last parameter. When
    the sender leaves it out the handler receives ``None``.
    """


class TimeUnit(Enum):
    MILLISECONDS = 0.001
    SECONDS = 1
    MINUTES = 60
    HOURS = 60 * 60
    DAYS = 60 * 60 * 24


@dataclass(frozen=True)
class Permission:
    node: str
    message: str = "Sorry, you don't have permission to use this command."


@dataclass(frozen=True)
class CooldownSpec:
    """
    Wait time between two runs of a command by the same sender.

    Attributes:
        time: Amount of ``unit`` to wait
        unit: Unit of ``time``
        console_too: Whether the console is held to the cooldown as well
        bypass_permission: Players holding this permission skip the cooldown
    """

    time: float
    unit: TimeUnit = TimeUnit.SECONDS
    console_too: bool = False
    bypass_permission: str = ""

    @property
    def seconds(self) -> float:
        return self.time * self.unit.value


@dataclass(frozen=True)
class HandlerSpec:
    """
    One callable of a command: a named subcommand, or the default handler
    (``name is None``).

    ``parameters`` lists the positional parameters after the sender. When
    ``optional`` is set the last of them may be left out.
    """

    name: str | None
    usage: str
    function: Handler = field(compare=False)
    parameters: tuple[str, ...] = ()
    tags: tuple[CompletionTag, ...] = ()
    permission: Permission | None = None
    optional: bool = False
    qualname: str = ""

    def __post_init__(self):
        if not self.qualname:
            qualname = getattr(self.function, "__qualname__", repr(self.function))
            object.__setattr__(self, "qualname", qualname)

    @property
    def declared_arity(self) -> int:
        return len(self.parameters)

    @property
    def required_arity(self) -> int:
        return self.declared_arity - 1 if self.optional else self.declared_arity

    def accepts(self, supplied: int) -> bool:
        return self.required_arity <= supplied <= self.declared_arity

    def tag(self, index: int) -> CompletionTag | None:
        """The tag for a position, or None past the declared tags."""
        if index < len(self.tags):
            return self.tags[index]
        return None


@dataclass(frozen=True)
class CommandSpec:
    name: str
    usage: str
    description: str = ""
    aliases: tuple[str, ...] = ()
    console_only: bool = False
    player_only: bool = False
    permission: Permission | None = None
    cooldown: CooldownSpec | None = None
    default: HandlerSpec | None = None
    subcommands: Mapping[str, HandlerSpec] = field(default_factory=dict, hash=False)
    definition: Any = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        # read-only view over a private copy
        object.__setattr__(self, "subcommands", MappingProxyType(dict(self.subcommands)))

    def subcommand(self, name: str) -> HandlerSpec | None:
        return self.subcommands.get(name.lower())

    def subcommand_names(self) -> list[str]:
        return [spec.name for spec in self.subcommands.values() if spec.name]


@dataclass(frozen=True)
class _CommandMeta:
    name: str
    usage: str | None
    description: str
    aliases: tuple[str, ...]
    console_only: bool
    player_only: bool


@dataclass(frozen=True)
class _SubcommandMeta:
    name: str
    usage: str | None


# =============================================================================
# Decorators
# =============================================================================


def command(
    name: str,
    usage: str | None = None,
    *,
    description: str = "",
    aliases: tuple[str, ...] = (),
    console_only: bool = False,
    player_only: bool = False,
):
    """
    Declare a class as a command.

    Args:
        name: The command name.
        usage: Sent when the command is used wrong. Built from the handlers
            when left out.
        description: Shown by the host's help.
        aliases: Additional command labels.
        console_only: Only the console may run it.
        player_only: Only players may run it.
    """

    def decorator[C: type](cls: C) -> C:
        meta = _CommandMeta(name, usage, description, tuple(aliases), console_only, player_only)
        setattr(cls, "_command", meta)
        return cls

    return decorator


def subcommand(name: str, usage: str | None = None):
    """Declare a method as the handler of ``/<command> <name> ...``."""

    def decorator[F: Handler](func: F) -> F:
        setattr(func, "_subcommand", _SubcommandMeta(name, usage))
        return func

    return decorator


def default[F: Handler](func: F) -> F:
    """Declare a method as the handler used when the command has no subcommands."""
    setattr(func, "_default", True)
    return func


def tab_completion(*tags: str | CompletionTag):
    """Declare one completion tag per positional parameter, in order."""

    def decorator[F: Handler](func: F) -> F:
        setattr(func, "_tab_completion", tags)
        return func

    return decorator


def permission(node: str, message: str | None = None):
    """Require a permission for a whole command (on the class) or one handler."""
    perm = Permission(node) if message is None else Permission(node, message)

    def decorator[T](obj: T) -> T:
        setattr(obj, "_permission", perm)
        return obj

    return decorator


def cooldown(
    time: float,
    unit: TimeUnit = TimeUnit.SECONDS,
    *,
    console_too: bool = False,
    bypass: str = "",
):
    def decorator[C: type](cls: C) -> C:
        setattr(cls, "_cooldown", CooldownSpec(time, unit, console_too, bypass))
        return cls

    return decorator


# =============================================================================
# Extraction
# =============================================================================


def _is_optional_marker(hint: Any) -> bool:
    if hint is OptionalArg or get_origin(hint) is OptionalArg:
        return True
    # unresolvable string annotation
    return isinstance(hint, str) and hint.split("[")[0].strip() == "OptionalArg"


def _handler_functions(cls: type) -> dict[str, Callable]:
    """Handler functions by attribute name, base classes first, in declaration order."""
    found: dict[str, Callable] = {}
    for klass in reversed(inspect.getmro(cls)):
        for attr, value in vars(klass).items():
            if hasattr(value, "_subcommand") or hasattr(value, "_default"):
                found[attr] = value
            elif attr in found:
                # overridden by something that isn't a handler
                del found[attr]
    return found


def _build_usage(prefix: str, parameters: tuple[str, ...], optional: bool) -> str:
    usage = prefix
    for i, name in enumerate(parameters):
        name = name.lstrip("_")
        if optional and i == len(parameters) - 1:
            usage += f" [{name}]"
        else:
            usage += f" <{name}>"
    return usage


def _extract_handler(
    command_name: str,
    attr: str,
    function: Callable,
    bound: Handler,
) -> HandlerSpec:
    qualname = f"{command_name}.{attr}"

    sig = inspect.signature(function)
    params = list(sig.parameters.values())[1:]  # Skip self
    if not params:
        raise InvalidHandlerSignatureError(f"{qualname}: handlers must take the sender")

    for param in params:
        if param.kind not in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            raise InvalidHandlerSignatureError(
                f"{qualname}: parameter {param.name!r} must be positional"
            )

    try:
        hints = get_type_hints(function)
    except Exception:
        hints = {}

    positional = params[1:]  # Skip sender
    markers = [
        param.name
        for param in positional
        if _is_optional_marker(hints.get(param.name, param.annotation))
    ]
    if len(markers) > 1:
        raise DuplicateOptionalMarkerError(qualname)
    if markers and markers[0] != positional[-1].name:
        raise IllegalOptionalPlacementError(qualname, markers[0])

    names = tuple(param.name for param in positional)
    tags = tuple(parse_tag(tag) for tag in getattr(function, "_tab_completion", ()))
    sub: _SubcommandMeta | None = getattr(function, "_subcommand", None)
    name = sub.name if sub else None

    prefix = f"/{command_name} {name}" if name else f"/{command_name}"
    usage = (sub.usage if sub else None) or _build_usage(prefix, names, bool(markers))

    return HandlerSpec(
        name=name,
        usage=usage,
        function=bound,
        parameters=names,
        tags=tags,
        permission=getattr(function, "_permission", None),
        optional=bool(markers),
    )


def extract(definition: Any) -> CommandSpec:
    """
    Build the spec of a command class (or an instance of one).

    Raises:
        DeclarationError: if the class is not a valid command
    """
    cls = definition if isinstance(definition, type) else type(definition)
    meta: _CommandMeta | None = getattr(cls, "_command", None)
    if meta is None:
        raise MissingCommandDeclarationError(cls)
    if meta.console_only and meta.player_only:
        raise ConflictingAudienceError(meta.name)

    instance = cls() if isinstance(definition, type) else definition

    default_handler: HandlerSpec | None = None
    subcommands: dict[str, HandlerSpec] = {}

    for attr, function in _handler_functions(cls).items():
        handler = _extract_handler(meta.name, attr, function, getattr(instance, attr))

        if handler.name is None:
            if default_handler is not None:
                raise DuplicateDefaultHandlerError(meta.name)
            default_handler = handler
        else:
            key = handler.name.lower()
            if key in subcommands:
                raise DuplicateSubcommandError(meta.name, handler.name)
            subcommands[key] = handler

    usage = meta.usage
    if usage is None:
        if subcommands:
            names = "|".join(spec.name for spec in subcommands.values() if spec.name)
            usage = f"/{meta.name} <{names}>"
        elif default_handler is not None:
            usage = default_handler.usage
        else:
            usage = f"/{meta.name}"

    if default_handler is not None and meta.usage is not None:
        # the default handler answers to the command's own usage line
        default_handler = replace(default_handler, usage=meta.usage)

    return CommandSpec(
        name=meta.name,
        usage=usage,
        description=meta.description,
        aliases=meta.aliases,
        console_only=meta.console_only,
        player_only=meta.player_only,
        permission=getattr(cls, "_permission", None),
        cooldown=getattr(cls, "_cooldown", None),
        default=default_handler,
        subcommands=subcommands,
        definition=instance,
    )
