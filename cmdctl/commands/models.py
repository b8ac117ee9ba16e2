from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from cmdctl.senders import CommandSender

DEFAULT_PERMISSION_MESSAGE = "You do not have permission to use that command"

Identifier = tuple[str, ...]

F = TypeVar("F", bound=Callable[..., Any])


class CommandMetadata(BaseModel):
    cmd: str
    aliases: list[str] = Field(default_factory=list)
    permissions: list[str] = Field(default_factory=list)
    permission_message: str = DEFAULT_PERMISSION_MESSAGE
    sender_type: type[CommandSender] | None = None
    description: str = ""
    usage: str = ""

    model_config = ConfigDict(frozen=True)


@dataclass(frozen=True, eq=False)
class CommandDescriptor:
    """A registered handler and the constraints checked before it runs.

    ``identifiers`` keeps declaration order with the primary identifier
    first. Descriptors compare by identity, so two handlers declaring the
    same command are both kept.
    """

    identifiers: tuple[Identifier, ...]
    permissions: tuple[str, ...]
    permission_message: str
    sender_type: type[CommandSender]
    handler: Callable[..., Any]
    varargs: bool = False
    description: str = ""
    usage: str = ""

    @property
    def primary(self) -> Identifier:
        return self.identifiers[0]

    @property
    def name(self) -> str:
        return " ".join(self.primary)

    @property
    def aliases(self) -> list[str]:
        return [" ".join(identifier) for identifier in self.identifiers[1:]]

    def invoke(self, sender: CommandSender, args: list[str]) -> Any:
        if self.varargs:
            return self.handler(sender, *args)
        return self.handler(sender, args)


def command_handler(
    cmd: str,
    aliases: list[str] | None = None,
    permissions: list[str] | None = None,
    permission_message: str = DEFAULT_PERMISSION_MESSAGE,
    sender_type: type[CommandSender] | None = None,
    description: str = "",
    usage: str = "",
) -> Callable[[F], F]:
    """
    Decorator marking a function or method as a command handler.

    The command may contain spaces to target a subcommand; the handler then
    receives only the arguments after the subcommand path.

    Usage:
        @command_handler("warp set", permissions=["warp.set"])
        def set_warp(self, sender: PlayerSender, args: list[str]) -> str:
            return f"Warp {args[0]} set"
    """

    def decorator(func: F) -> F:
        func.__command_metadata__ = CommandMetadata(  # type: ignore[attr-defined]
            cmd=cmd,
            aliases=aliases or [],
            permissions=permissions or [],
            permission_message=permission_message,
            sender_type=sender_type,
            description=description or (func.__doc__ or "").strip().split("\n")[0],
            usage=usage,
        )
        return func

    return decorator


def get_command_metadata(func: Any) -> CommandMetadata | None:
    metadata = getattr(func, "__command_metadata__", None)
    return metadata if isinstance(metadata, CommandMetadata) else None
