from cmdctl.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.host_commands == ["help", "?"]
    assert settings.fault_reports_handled is True
    assert settings.reject_duplicate_identifiers is False
    assert settings.color_escape_char == "&"


def test_host_commands_from_string():
    settings = Settings(_env_file=None, host_commands="team, warp ,,help")
    assert settings.host_commands == ["team", "warp", "help"]


def test_host_commands_from_env(monkeypatch):
    monkeypatch.setenv("HOST_COMMANDS", "team,warp")
    monkeypatch.setenv("FAULT_REPORTS_HANDLED", "false")
    settings = Settings(_env_file=None)
    assert settings.host_commands == ["team", "warp"]
    assert settings.fault_reports_handled is False


def test_sender_rejection_message_template():
    settings = Settings(_env_file=None)
    assert settings.sender_rejection_message.replace("{sender_type}", "player").endswith("by a player")


def test_console_token_defaults_to_unset():
    settings = Settings(_env_file=None)
    assert settings.console_token is None
