"""Command senders: whoever issues a command line.

The sender class is the capability a handler asks for. A handler whose
first parameter is annotated ``PlayerSender`` only accepts players, one
annotated ``CommandSender`` accepts anybody.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable

from cmdctl.formatting.chat import strip_color
from cmdctl.permissions import permission_granted

logger = logging.getLogger(__name__)


class CommandSender(ABC):
    display_name = "sender"

    def __init__(self) -> None:
        self.messages: list[str] = []

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def has_permission(self, node: str) -> bool: ...

    def send_message(self, text: str) -> None:
        self.messages.append(text)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class ConsoleSender(CommandSender):
    """The operator console. Holds every permission."""

    display_name = "console"

    @property
    def name(self) -> str:
        return "CONSOLE"

    def has_permission(self, node: str) -> bool:
        return True

    def send_message(self, text: str) -> None:
        super().send_message(text)
        logger.info("[console] %s", strip_color(text))


class PlayerSender(CommandSender):
    """An in-world actor with a granted set of permission nodes."""

    display_name = "player"

    def __init__(self, name: str, permissions: Iterable[str] = (), op: bool = False) -> None:
        super().__init__()
        self._name = name
        self.permissions = set(permissions)
        self.op = op

    @property
    def name(self) -> str:
        return self._name

    def has_permission(self, node: str) -> bool:
        return self.op or permission_granted(self.permissions, node)
