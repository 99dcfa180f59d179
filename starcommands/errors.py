from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .text import TextComponent


class StarCommandsException(Exception):
    """Base class for starcommands exceptions"""

    pass


class CommandException(StarCommandsException):
    """A user-facing rejection; the message is sent back to the sender"""

    def __init__(self, message: str | TextComponent):
        super().__init__(str(message))
        self.message = message


# =============================================================================
# Declaration errors (raised once, at registration)
# =============================================================================


class DeclarationError(StarCommandsException):
    """A command definition is malformed and cannot be registered"""

    pass


class MissingCommandDeclarationError(DeclarationError):
    def __init__(self, definition: object):
        name = getattr(definition, "__name__", type(definition).__name__)
        super().__init__(f"@command not found on {name!r}")


class DuplicateOptionalMarkerError(DeclarationError):
    def __init__(self, handler: str):
        super().__init__(
            f"{handler}: there can only be one OptionalArg parameter, at the end"
        )


class IllegalOptionalPlacementError(DeclarationError):
    def __init__(self, handler: str, parameter: str):
        super().__init__(
            f"{handler}: OptionalArg parameter {parameter!r} must be the last parameter"
        )


class DuplicateDefaultHandlerError(DeclarationError):
    def __init__(self, command: str):
        super().__init__(f"{command}: only one @default handler is allowed")


class DuplicateSubcommandError(DeclarationError):
    def __init__(self, command: str, subcommand: str):
        super().__init__(f"{command}: subcommand {subcommand!r} is declared twice")


class ConflictingAudienceError(DeclarationError):
    def __init__(self, command: str):
        super().__init__(f"{command}: console_only and player_only are both set")


class InvalidHandlerSignatureError(DeclarationError):
    pass


class NoDefaultHandlerError(StarCommandsException):
    """A command without subcommands was run but has no @default handler"""

    def __init__(self, command: str):
        super().__init__(f"{command}: no @default handler to run")
