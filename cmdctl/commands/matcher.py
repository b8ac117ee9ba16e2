from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import NamedTuple

from cmdctl.commands.models import CommandDescriptor, Identifier


class CommandMatch(NamedTuple):
    descriptor: CommandDescriptor
    identifier: Identifier

    @property
    def consumed(self) -> int:
        """Number of arguments taken up by the subcommand path."""
        return len(self.identifier) - 1

    def trim(self, args: Sequence[str]) -> list[str]:
        return list(args[self.consumed :])


def identifier_matches(identifier: Identifier, command_name: str, args: Sequence[str]) -> bool:
    if identifier[0].casefold() != command_name.casefold():
        return False
    if len(args) < len(identifier) - 1:
        return False
    return all(identifier[i] == args[i - 1] for i in range(1, len(identifier)))


def match_command(
    descriptors: Iterable[CommandDescriptor], command_name: str, args: Sequence[str]
) -> CommandMatch | None:
    """Find the most specific identifier matching ``command_name`` + ``args``.

    The longest fully-matching identifier wins. On equal length the first one
    seen wins, so registration order decides ties.
    """
    best: CommandMatch | None = None
    for descriptor in descriptors:
        for identifier in descriptor.identifiers:
            if not identifier_matches(identifier, command_name, args):
                continue
            if best is None or len(identifier) > len(best.identifier):
                best = CommandMatch(descriptor, identifier)
    return best
