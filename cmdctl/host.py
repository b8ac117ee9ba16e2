"""Host command table.

Stands in for the platform that owns top-level command names. Commands are
declared here first; a dispatcher then binds itself as the executor of the
roots it wants to serve, and ``execute`` routes raw lines to that executor.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from cmdctl.senders import CommandSender

logger = logging.getLogger(__name__)


class CommandExecutor(Protocol):
    def on_command(
        self, sender: CommandSender, command: RawCommand, label: str, args: Sequence[str]
    ) -> bool: ...


@dataclass(eq=False)
class RawCommand:
    name: str
    aliases: tuple[str, ...] = ()
    description: str = ""
    executor: CommandExecutor | None = field(default=None, repr=False)


class HostCommandTable:
    def __init__(self, unknown_command_message: str = 'Unknown command. Type "/help" for help.'):
        self._unknown_command_message = unknown_command_message
        self._commands: dict[str, RawCommand] = {}
        self._labels: dict[str, RawCommand] = {}
        self._lock = threading.Lock()

    def declare(self, name: str, aliases: Iterable[str] = (), description: str = "") -> RawCommand:
        key = name.strip().lower()
        if len(key.split()) != 1:
            raise ValueError(f"Invalid host command name: {name!r}")
        with self._lock:
            existing = self._commands.get(key)
            if existing is not None:
                return existing
            raw = RawCommand(name=key, aliases=tuple(a.lower() for a in aliases), description=description)
            self._commands[key] = raw
            for alias in raw.aliases:
                # Canonical names take precedence over aliases
                self._labels.setdefault(alias, raw)
            self._labels[key] = raw
        logger.debug("Declared host command: %s", key)
        return raw

    def resolve(self, token: str) -> RawCommand | None:
        with self._lock:
            return self._labels.get(token.lower())

    def bind(self, raw: RawCommand, executor: CommandExecutor) -> None:
        with self._lock:
            if raw.executor is executor:
                return
            replaced = raw.executor is not None
            raw.executor = executor
        if replaced:
            logger.warning("Host command %s executor replaced", raw.name)

    def commands(self) -> list[RawCommand]:
        with self._lock:
            return list(self._commands.values())

    def execute(self, sender: CommandSender, line: str) -> bool:
        """Run a raw "/label arg ..." line as ``sender``.

        Falls back to the unknown command message when nothing handles it.
        """
        parts = line.strip().removeprefix("/").split()
        if not parts:
            return False
        label, args = parts[0], parts[1:]

        raw = self.resolve(label)
        handled = False
        if raw is not None and raw.executor is not None:
            handled = raw.executor.on_command(sender, raw, label, args)
        if not handled:
            sender.send_message(self._unknown_command_message)
        return handled
