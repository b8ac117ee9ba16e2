import pytest
from fastapi.testclient import TestClient

from cmdctl.commands.builtins import register_builtins
from cmdctl.commands.controller import CommandController, create_controller
from cmdctl.config import Settings
from cmdctl.formatting.chat import MessageRenderer
from cmdctl.host import HostCommandTable
from cmdctl.main import app
from cmdctl.permissions import PermissionStore
from cmdctl.senders import ConsoleSender, PlayerSender

TEST_SETTINGS = Settings(
    _env_file=None,
    log_json=False,
    host_commands=["help", "?", "team", "warp"],
    permissions_path="/nonexistent/permissions.yaml",
    console_token="test-console-token",
)

CONSOLE_HEADERS = {"X-Console-Token": "test-console-token"}

PERMISSIONS_YAML = """
version: "1.0"
default_nodes:
  - warp.use
groups:
  builders:
    - warp.set
  admins:
    - team.*
users:
  alice:
    groups: [builders]
  bob:
    groups: [admins]
    nodes: [warp.set]
  root:
    op: true
"""


@pytest.fixture
def settings() -> Settings:
    return TEST_SETTINGS


@pytest.fixture
def host(settings: Settings) -> HostCommandTable:
    table = HostCommandTable(unknown_command_message=settings.unknown_command_message)
    for name in settings.host_commands:
        table.declare(name)
    return table


@pytest.fixture
def renderer() -> MessageRenderer:
    return MessageRenderer()


@pytest.fixture
def controller(host, settings, renderer) -> CommandController:
    return create_controller(host, settings, renderer)


@pytest.fixture
def console() -> ConsoleSender:
    return ConsoleSender()


@pytest.fixture
def make_player():
    def _make(name: str = "steve", permissions=(), op: bool = False) -> PlayerSender:
        return PlayerSender(name, permissions=permissions, op=op)

    return _make


@pytest.fixture
def permissions_file(tmp_path):
    path = tmp_path / "permissions.yaml"
    path.write_text(PERMISSIONS_YAML)
    return path


@pytest.fixture
def client(settings: Settings, host: HostCommandTable, permissions_file) -> TestClient:
    controller = create_controller(host, settings)
    register_builtins(controller)

    app.state.settings = settings
    app.state.host = host
    app.state.controller = controller
    app.state.permission_store = PermissionStore(permissions_file)

    return TestClient(app, raise_server_exceptions=False)
