from .argtypes import CompletionContext, CompletionTag, parse_tag
from .command import (
    CommandSpec,
    CooldownSpec,
    HandlerSpec,
    OptionalArg,
    Permission,
    TimeUnit,
    command,
    cooldown,
    default,
    extract,
    permission,
    subcommand,
    tab_completion,
)
from .config import ConfigStorage, Messages
from .cooldowns import CooldownTracker
from .errors import (
    CommandException,
    DeclarationError,
    NoDefaultHandlerError,
    StarCommandsException,
)
from .host import CommandMap, CommandSender, ConsoleSender, Player, Server, SimpleCommandMap
from .resolver import RegisteredCommand, Resolver
from .text import TextComponent

__all__ = (
    # ./command.py
    "command",
    "subcommand",
    "default",
    "tab_completion",
    "permission",
    "cooldown",
    "extract",
    "OptionalArg",
    "TimeUnit",
    "Permission",
    "CooldownSpec",
    "CommandSpec",
    "HandlerSpec",
    # ./argtypes
    "CompletionContext",
    "CompletionTag",
    "parse_tag",
    # ./resolver.py
    "Resolver",
    "RegisteredCommand",
    # ./cooldowns.py
    "CooldownTracker",
    # ./config.py
    "ConfigStorage",
    "Messages",
    # ./host.py
    "CommandSender",
    "Player",
    "ConsoleSender",
    "Server",
    "CommandMap",
    "SimpleCommandMap",
    # ./errors.py
    "StarCommandsException",
    "CommandException",
    "DeclarationError",
    "NoDefaultHandlerError",
    # ./text.py
    "TextComponent",
)
