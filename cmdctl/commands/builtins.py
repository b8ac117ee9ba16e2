from __future__ import annotations

import logging

from cmdctl.commands.controller import CommandController
from cmdctl.commands.models import command_handler
from cmdctl.formatting.chat import ChatColor
from cmdctl.senders import CommandSender

logger = logging.getLogger(__name__)


class BuiltinCommands:
    def __init__(self, controller: CommandController) -> None:
        self._controller = controller

    @command_handler("help", aliases=["?"], usage="/help [command]")
    def help(self, sender: CommandSender, args: list[str]) -> list[str]:
        """List the commands you can use, or show details for one."""
        if args:
            return self._command_help(sender, args)

        lines = [f"{ChatColor.GOLD}Available commands:"]
        for descriptor in self._controller.registry:
            if not self._controller.can_use(sender, descriptor):
                continue
            line = f"{ChatColor.YELLOW}/{descriptor.name}"
            if descriptor.description:
                line += f"{ChatColor.WHITE} - {descriptor.description}"
            lines.append(line)
        if len(lines) == 1:
            return ["You cannot use any commands."]
        lines.append(f"{ChatColor.GRAY}Type /help <command> for details on a specific command.")
        return lines

    def _command_help(self, sender: CommandSender, args: list[str]) -> list[str]:
        match = self._controller.match(args[0], args[1:])
        topic = " ".join(args)
        if match is None or not self._controller.can_use(sender, match.descriptor):
            return [f"No help available for: {topic}"]
        descriptor = match.descriptor
        lines = [
            f"{ChatColor.GOLD}Command: {ChatColor.WHITE}/{descriptor.name}",
            f"{ChatColor.GOLD}Usage: {ChatColor.WHITE}{descriptor.usage}",
        ]
        if descriptor.aliases:
            lines.append(f"{ChatColor.GOLD}Aliases: {ChatColor.WHITE}{', '.join(descriptor.aliases)}")
        if descriptor.description:
            lines.append(descriptor.description)
        return lines


def register_builtins(controller: CommandController) -> None:
    registered = controller.register_commands(BuiltinCommands(controller))
    logger.info("Registered %d builtin commands", len(registered))
