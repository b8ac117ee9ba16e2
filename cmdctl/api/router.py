from __future__ import annotations

import logging

from fastapi import APIRouter, Header, HTTPException, Request

from cmdctl.api.security import validate_console_token
from cmdctl.dependencies import get_controller, get_host, get_permission_store, get_settings
from cmdctl.formatting.chat import strip_color
from cmdctl.models import CommandInfo, CommandRequest, CommandResponse, HealthResponse
from cmdctl.senders import CommandSender, ConsoleSender, PlayerSender

logger = logging.getLogger(__name__)

router = APIRouter()


def _build_sender(request: Request, name: str, console_token: str | None) -> CommandSender:
    if console_token is not None:
        if not validate_console_token(console_token, get_settings(request).console_token):
            logger.warning("Invalid console token for sender %s", name)
            raise HTTPException(status_code=403, detail="Forbidden")
        return ConsoleSender()
    # Names are never trusted as the console; they map to store-backed players
    store = get_permission_store(request)
    return PlayerSender(name, permissions=store.nodes_for(name), op=store.is_op(name))


@router.post("/commands", response_model=CommandResponse)
def run_command(
    request: Request,
    body: CommandRequest,
    x_console_token: str | None = Header(default=None),
) -> CommandResponse:
    # Sync endpoint: FastAPI runs it in the threadpool, handlers may block
    sender = _build_sender(request, body.sender, x_console_token)
    logger.info("Incoming [%s]: %s", sender.name, body.line[:80])
    handled = get_host(request).execute(sender, body.line)
    return CommandResponse(
        handled=handled,
        messages=[strip_color(m) for m in sender.messages],
    )


@router.get("/commands", response_model=list[CommandInfo])
def list_commands(request: Request) -> list[CommandInfo]:
    return [
        CommandInfo(
            name=descriptor.name,
            aliases=descriptor.aliases,
            permissions=list(descriptor.permissions),
            sender_type=descriptor.sender_type.display_name,
            description=descriptor.description,
            usage=descriptor.usage,
        )
        for descriptor in get_controller(request).registry
    ]


@router.get("/health", response_model=HealthResponse)
def health(request: Request) -> HealthResponse:
    return HealthResponse(status="ok", commands=len(get_controller(request).registry))
