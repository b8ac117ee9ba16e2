"""Command controller: registration and dispatch.

Handlers register with declarative metadata (``command_handler``) against
root commands the host already knows. At dispatch time the controller picks
the longest matching identifier, checks the sender's type and permissions,
strips the subcommand path from the arguments and invokes the handler:

    sender types "/team create Red"
          ↓
    host resolves "team" → bound to this controller
          ↓
    match: "team create" beats "team" → consumes 1 argument
          ↓
    sender type ok? permissions ok? → handler(sender, ["Red"])
          ↓
    non-None return value → MessageRenderer.send(sender, value)
"""
from __future__ import annotations

import inspect
import logging
import typing
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from cmdctl.commands.matcher import CommandMatch, match_command
from cmdctl.commands.models import (
    CommandDescriptor,
    CommandMetadata,
    Identifier,
    get_command_metadata,
)
from cmdctl.commands.registry import CommandRegistry
from cmdctl.config import Settings
from cmdctl.errors import InvalidHandlerError, InvalidIdentifierError
from cmdctl.formatting.chat import MessageRenderer, translate_color_codes
from cmdctl.host import HostCommandTable, RawCommand
from cmdctl.senders import CommandSender

logger = logging.getLogger(__name__)

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
_ARG_SEQUENCE_TYPES = (list, tuple, Sequence)


class DispatchOutcome(StrEnum):
    UNMATCHED = "unmatched"
    SENDER_REJECTED = "sender_rejected"
    PERMISSION_DENIED = "permission_denied"
    COMPLETED = "completed"
    FAULTED = "faulted"


@dataclass(frozen=True)
class DispatchResult:
    outcome: DispatchOutcome
    handled: bool
    match: CommandMatch | None = None


def inspect_handler(
    handler: Callable[..., Any], sender_type: type[CommandSender] | None = None
) -> tuple[type[CommandSender], bool]:
    """Validate the (sender, args) shape of ``handler``.

    Returns the sender type the handler requires and whether the arguments
    are taken as ``*args``. Raises InvalidHandlerError otherwise.
    """
    if not callable(handler):
        raise InvalidHandlerError(handler, "not callable")
    try:
        signature = inspect.signature(handler)
    except (TypeError, ValueError) as e:
        raise InvalidHandlerError(handler, f"signature unavailable ({e})") from e

    params = list(signature.parameters.values())
    if len(params) != 2:
        raise InvalidHandlerError(handler, f"expected 2 parameters, found {len(params)}")
    sender_param, args_param = params
    if sender_param.kind not in _POSITIONAL:
        raise InvalidHandlerError(handler, "sender must be a positional parameter")
    varargs = args_param.kind is inspect.Parameter.VAR_POSITIONAL
    if not varargs and args_param.kind not in _POSITIONAL:
        raise InvalidHandlerError(handler, "arguments must be a positional parameter or *args")

    target = handler if inspect.isroutine(handler) else getattr(handler, "__call__", handler)
    try:
        hints = typing.get_type_hints(target)
    except TypeError:
        hints = {}
    except NameError as e:
        raise InvalidHandlerError(handler, f"unresolvable annotation ({e})") from e

    annotated = hints.get(sender_param.name, CommandSender)
    if not (isinstance(annotated, type) and issubclass(annotated, CommandSender)):
        raise InvalidHandlerError(handler, f"first parameter must be a CommandSender, not {annotated!r}")

    args_hint = hints.get(args_param.name)
    if args_hint is not None:
        if varargs:
            if args_hint is not str:
                raise InvalidHandlerError(handler, f"*args must be str, not {args_hint!r}")
        elif (typing.get_origin(args_hint) or args_hint) not in _ARG_SEQUENCE_TYPES:
            raise InvalidHandlerError(handler, f"arguments must be a sequence of str, not {args_hint!r}")

    if sender_type is None:
        return annotated, varargs
    if not issubclass(sender_type, annotated):
        raise InvalidHandlerError(
            handler, f"declared sender type {sender_type.__name__} is not a {annotated.__name__}"
        )
    return sender_type, varargs


def _split_identifiers(metadata: CommandMetadata) -> list[Identifier]:
    if not metadata.cmd.strip():
        raise InvalidIdentifierError("command handler must have a non-blank base command")
    identifiers: list[Identifier] = []
    for text in [metadata.cmd, *metadata.aliases]:
        if not text.strip():
            continue
        identifier = tuple(text.split())
        if identifier not in identifiers:
            identifiers.append(identifier)
    return identifiers


class CommandController:
    """Routes host commands to registered handlers.

    Build one through ``create_controller`` and hand it to everything that
    registers commands.
    """

    def __init__(
        self,
        host: HostCommandTable,
        settings: Settings,
        renderer: MessageRenderer,
    ) -> None:
        self._host = host
        self._settings = settings
        self._renderer = renderer
        self._registry = CommandRegistry()

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    # --- Registration ---

    def register(
        self, handler: Callable[..., Any], metadata: CommandMetadata | None = None
    ) -> CommandDescriptor | None:
        """Register one handler.

        Returns the descriptor, or None when none of its identifiers has a
        host command to attach to.
        """
        metadata = metadata or get_command_metadata(handler)
        if metadata is None:
            raise InvalidHandlerError(handler, "no command metadata")
        sender_type, varargs = inspect_handler(handler, metadata.sender_type)

        identifiers: list[Identifier] = []
        roots: list[RawCommand] = []
        for identifier in _split_identifiers(metadata):
            raw = self._host.resolve(identifier[0])
            if raw is None:
                logger.warning(
                    "Unable to register command with root identifier (or alias) %s: "
                    "no host command is registered with that name",
                    identifier[0],
                )
                continue
            # Dispatch sees the canonical name, so store the root under it
            identifier = (raw.name, *identifier[1:])
            if identifier not in identifiers:
                identifiers.append(identifier)
            if raw not in roots:
                roots.append(raw)

        if not identifiers:
            logger.debug("Command %r has no resolvable identifiers, not registered", metadata.cmd)
            return None

        descriptor = CommandDescriptor(
            identifiers=tuple(identifiers),
            permissions=tuple(metadata.permissions),
            permission_message=metadata.permission_message,
            sender_type=sender_type,
            handler=handler,
            varargs=varargs,
            description=metadata.description,
            usage=metadata.usage or f"/{' '.join(identifiers[0])} [arguments]",
        )
        if self._settings.reject_duplicate_identifiers:
            self._registry.add_unique(descriptor)
        else:
            self._registry.add(descriptor)
        for raw in roots:
            self._host.bind(raw, self)
        logger.info("Registered command: %s (sender: %s)", descriptor.name, sender_type.__name__)
        return descriptor

    def register_commands(self, owner: object) -> list[CommandDescriptor]:
        """Register every ``command_handler`` callable found on ``owner``.

        ``owner`` is an instance or a module. Handlers are taken in declaration
        order; ones with the wrong shape are skipped so the rest still register.
        """
        registered: list[CommandDescriptor] = []
        for name in _member_names(owner):
            static = inspect.getattr_static(owner, name, None)
            metadata = get_command_metadata(getattr(static, "__func__", static))
            if metadata is None:
                continue
            member = getattr(owner, name)
            try:
                descriptor = self.register(member, metadata)
            except InvalidHandlerError as e:
                logger.debug("Skipping %s: %s", name, e)
                continue
            if descriptor is not None:
                registered.append(descriptor)
        return registered

    def unregister(self, descriptor: CommandDescriptor) -> bool:
        removed = self._registry.remove(descriptor)
        if removed:
            logger.info("Unregistered command: %s", descriptor.name)
        return removed

    # --- Dispatch ---

    def match(self, command_name: str, args: Sequence[str]) -> CommandMatch | None:
        return match_command(self._registry, command_name, args)

    def can_use(self, sender: CommandSender, descriptor: CommandDescriptor) -> bool:
        return isinstance(sender, descriptor.sender_type) and all(
            sender.has_permission(node) for node in descriptor.permissions
        )

    def execute(self, sender: CommandSender, command_name: str, args: Sequence[str]) -> DispatchResult:
        match = self.match(command_name, args)
        if match is None:
            logger.debug("No command matches %s %s", command_name, list(args))
            return DispatchResult(DispatchOutcome.UNMATCHED, handled=False)
        descriptor = match.descriptor

        if not isinstance(sender, descriptor.sender_type):
            message = self._settings.sender_rejection_message.replace(
                "{sender_type}", descriptor.sender_type.display_name
            )
            sender.send_message(self._decode(message))
            return DispatchResult(DispatchOutcome.SENDER_REJECTED, handled=True, match=match)

        for node in descriptor.permissions:
            if not sender.has_permission(node):
                logger.info("%s lacks %s for /%s", sender.name, node, " ".join(match.identifier))
                sender.send_message(self._decode(descriptor.permission_message))
                return DispatchResult(DispatchOutcome.PERMISSION_DENIED, handled=True, match=match)

        try:
            result = descriptor.invoke(sender, match.trim(args))
            if result is not None:
                self._renderer.send(sender, result)
        except Exception:
            logger.exception(
                "Error executing command /%s for %s", " ".join(match.identifier), sender.name
            )
            sender.send_message(self._decode(self._settings.internal_error_message))
            return DispatchResult(
                DispatchOutcome.FAULTED,
                handled=self._settings.fault_reports_handled,
                match=match,
            )

        return DispatchResult(DispatchOutcome.COMPLETED, handled=True, match=match)

    def dispatch(self, sender: CommandSender, command_name: str, args: Sequence[str]) -> bool:
        return self.execute(sender, command_name, args).handled

    def on_command(
        self, sender: CommandSender, command: RawCommand, label: str, args: Sequence[str]
    ) -> bool:
        # Route on the canonical name; the label may be a host-level alias
        return self.dispatch(sender, command.name, args)

    def _decode(self, text: str) -> str:
        return translate_color_codes(text, self._settings.color_escape_char)


def _member_names(owner: object) -> list[str]:
    if inspect.ismodule(owner):
        return list(vars(owner))
    names: list[str] = []
    for klass in type(owner).__mro__:
        for name in vars(klass):
            if name not in names:
                names.append(name)
    for name in getattr(owner, "__dict__", {}):
        if name not in names:
            names.append(name)
    return names


def create_controller(
    host: HostCommandTable,
    settings: Settings | None = None,
    renderer: MessageRenderer | None = None,
) -> CommandController:
    settings = settings or Settings()
    renderer = renderer or MessageRenderer(alt_char=settings.color_escape_char)
    return CommandController(host=host, settings=settings, renderer=renderer)
