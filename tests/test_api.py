from tests.conftest import CONSOLE_HEADERS


def test_console_runs_help(client):
    resp = client.post(
        "/commands", json={"sender": "ops", "line": "/help"}, headers=CONSOLE_HEADERS
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["handled"] is True
    assert data["messages"][0] == "Available commands:"
    assert any(m.startswith("/help") for m in data["messages"])


def test_unknown_command_is_unhandled(client):
    resp = client.post("/commands", json={"sender": "alice", "line": "/nope now"})
    assert resp.status_code == 200
    assert resp.json() == {
        "handled": False,
        "messages": ['Unknown command. Type "/help" for help.'],
    }


def test_player_permissions_come_from_store(client):
    from cmdctl.commands.models import CommandMetadata
    from cmdctl.senders import PlayerSender

    controller = client.app.state.controller

    def set_warp(sender: PlayerSender, args: list[str]) -> str:
        return f"&aWarp {args[0]} set"

    controller.register(
        set_warp,
        CommandMetadata(cmd="warp set", permissions=["warp.set"], permission_message="&cDenied"),
    )

    allowed = client.post("/commands", json={"sender": "alice", "line": "/warp set home"})
    assert allowed.json() == {"handled": True, "messages": ["Warp home set"]}

    denied = client.post("/commands", json={"sender": "stranger", "line": "/warp set home"})
    assert denied.json() == {"handled": True, "messages": ["Denied"]}

    console = client.post(
        "/commands",
        json={"sender": "ops", "line": "/warp set home"},
        headers=CONSOLE_HEADERS,
    )
    assert console.json() == {
        "handled": True,
        "messages": ["This command must be sent by a player"],
    }


def test_list_commands(client):
    resp = client.get("/commands")
    assert resp.status_code == 200
    data = resp.json()
    assert data == [
        {
            "name": "help",
            "aliases": ["?"],
            "permissions": [],
            "sender_type": "sender",
            "description": "List the commands you can use, or show details for one.",
            "usage": "/help [command]",
        }
    ]


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "commands": 1}


def test_invalid_request(client):
    resp = client.post("/commands", json={"sender": "alice"})
    assert resp.status_code == 422


def test_sender_named_console_is_a_player(client):
    from cmdctl.commands.models import CommandMetadata
    from cmdctl.senders import CommandSender

    ran = []

    def purge(sender: CommandSender, args: list[str]) -> None:
        ran.append(sender.name)

    client.app.state.controller.register(
        purge, CommandMetadata(cmd="team purge", permissions=["team.purge"], permission_message="&cDenied")
    )

    for name in ("console", "Console", "CONSOLE"):
        resp = client.post("/commands", json={"sender": name, "line": "/team purge"})
        assert resp.json() == {"handled": True, "messages": ["Denied"]}
    assert ran == []


def test_wrong_console_token_is_forbidden(client):
    resp = client.post(
        "/commands",
        json={"sender": "ops", "line": "/help"},
        headers={"X-Console-Token": "guess"},
    )
    assert resp.status_code == 403


def test_console_token_unset_is_forbidden(client, settings):
    client.app.state.settings = settings.model_copy(update={"console_token": None})
    resp = client.post(
        "/commands", json={"sender": "ops", "line": "/help"}, headers=CONSOLE_HEADERS
    )
    assert resp.status_code == 403


def test_sender_is_required(client):
    resp = client.post("/commands", json={"line": "/help"})
    assert resp.status_code == 422
