import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from cmdctl.api.router import router as commands_router
from cmdctl.commands.builtins import register_builtins
from cmdctl.commands.controller import create_controller
from cmdctl.config import Settings
from cmdctl.host import HostCommandTable
from cmdctl.logging_config import configure_logging
from cmdctl.permissions import PermissionStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    configure_logging(
        level=settings.log_level, json_format=settings.log_json, log_file=settings.log_file
    )

    host = HostCommandTable(unknown_command_message=settings.unknown_command_message)
    for name in settings.host_commands:
        host.declare(name)

    controller = create_controller(host, settings)
    register_builtins(controller)

    app.state.settings = settings
    app.state.host = host
    app.state.controller = controller
    app.state.permission_store = PermissionStore(Path(settings.permissions_path))

    logger.info("cmdctl started with %d commands", len(controller.registry))
    yield
    logger.info("cmdctl shutting down")


app = FastAPI(title="cmdctl", lifespan=lifespan)
app.include_router(commands_router)
