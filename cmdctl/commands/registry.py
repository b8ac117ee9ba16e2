from __future__ import annotations

import logging
import threading
from collections.abc import Iterator

from cmdctl.commands.models import CommandDescriptor, Identifier
from cmdctl.errors import IdentifierConflictError

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Insertion-ordered set of live command descriptors.

    Writers take the lock; readers iterate a snapshot so a registration that
    lands mid-dispatch is simply not seen by that dispatch.
    """

    def __init__(self) -> None:
        self._descriptors: list[CommandDescriptor] = []
        self._lock = threading.Lock()

    def add(self, descriptor: CommandDescriptor) -> bool:
        with self._lock:
            if any(d is descriptor for d in self._descriptors):
                return False
            self._descriptors.append(descriptor)
        logger.debug("Registry now holds %d commands", len(self._descriptors))
        return True

    def add_unique(self, descriptor: CommandDescriptor) -> bool:
        """Like ``add``, but raise IdentifierConflictError if any identifier is taken."""
        with self._lock:
            if any(d is descriptor for d in self._descriptors):
                return False
            for identifier in descriptor.identifiers:
                if self._declares(self._descriptors, identifier):
                    raise IdentifierConflictError(identifier)
            self._descriptors.append(descriptor)
        return True

    def remove(self, descriptor: CommandDescriptor) -> bool:
        with self._lock:
            for i, d in enumerate(self._descriptors):
                if d is descriptor:
                    del self._descriptors[i]
                    return True
        return False

    def snapshot(self) -> tuple[CommandDescriptor, ...]:
        with self._lock:
            return tuple(self._descriptors)

    def find(self, identifier: Identifier) -> list[CommandDescriptor]:
        """Return descriptors declaring ``identifier`` (root compared case-insensitively)."""
        return self._declares(self.snapshot(), identifier)

    @staticmethod
    def _declares(descriptors, identifier: Identifier) -> list[CommandDescriptor]:
        root, rest = identifier[0].casefold(), identifier[1:]
        return [
            d
            for d in descriptors
            if any(i[0].casefold() == root and i[1:] == rest for i in d.identifiers)
        ]

    def __iter__(self) -> Iterator[CommandDescriptor]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        with self._lock:
            return len(self._descriptors)

    def __contains__(self, descriptor: object) -> bool:
        return any(d is descriptor for d in self.snapshot())
