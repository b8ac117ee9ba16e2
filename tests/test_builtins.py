import pytest

from cmdctl.commands.builtins import register_builtins
from cmdctl.commands.models import command_handler
from cmdctl.formatting.chat import strip_color
from cmdctl.senders import CommandSender, PlayerSender


class TeamCommands:
    @command_handler("team", description="Show your team")
    def team(self, sender: CommandSender, args: list[str]) -> str:
        return "No team"

    @command_handler(
        "team create",
        permissions=["team.create"],
        description="Create a team",
        usage="/team create <name>",
    )
    def create(self, sender: PlayerSender, args: list[str]) -> None:
        pass


@pytest.fixture
def help_controller(controller):
    register_builtins(controller)
    controller.register_commands(TeamCommands())
    return controller


def _plain(sender) -> list[str]:
    return [strip_color(m) for m in sender.messages]


def test_help_lists_usable_commands(help_controller, make_player):
    player = make_player()
    assert help_controller.dispatch(player, "help", []) is True
    lines = _plain(player)
    assert lines[0] == "Available commands:"
    assert "/team - Show your team" in lines
    assert not any(line.startswith("/team create") for line in lines)


def test_help_includes_permitted_commands(help_controller, make_player):
    player = make_player(permissions={"team.create"})
    help_controller.dispatch(player, "help", [])
    assert "/team create - Create a team" in _plain(player)


def test_help_hides_commands_for_wrong_sender(help_controller, console):
    help_controller.dispatch(console, "help", [])
    lines = _plain(console)
    assert "/team - Show your team" in lines
    assert not any(line.startswith("/team create") for line in lines)


def test_help_alias(help_controller, make_player):
    player = make_player()
    assert help_controller.dispatch(player, "?", []) is True
    assert _plain(player)[0] == "Available commands:"


def test_help_for_command(help_controller, make_player):
    player = make_player(permissions={"team.create"})
    help_controller.dispatch(player, "help", ["team", "create"])
    assert _plain(player) == [
        "Command: /team create",
        "Usage: /team create <name>",
        "Create a team",
    ]


def test_help_for_command_shows_aliases(help_controller, make_player):
    player = make_player()
    help_controller.dispatch(player, "help", ["help"])
    lines = _plain(player)
    assert "Command: /help" in lines
    assert "Aliases: ?" in lines
    assert "Usage: /help [command]" in lines


def test_help_for_unknown_or_forbidden(help_controller, make_player):
    player = make_player()
    help_controller.dispatch(player, "help", ["team", "create"])
    help_controller.dispatch(player, "help", ["nothing"])
    assert _plain(player) == [
        "No help available for: team create",
        "No help available for: nothing",
    ]
