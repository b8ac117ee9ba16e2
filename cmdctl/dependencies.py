from fastapi import Request

from cmdctl.commands.controller import CommandController
from cmdctl.config import Settings
from cmdctl.host import HostCommandTable
from cmdctl.permissions import PermissionStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_host(request: Request) -> HostCommandTable:
    return request.app.state.host


def get_controller(request: Request) -> CommandController:
    return request.app.state.controller


def get_permission_store(request: Request) -> PermissionStore:
    return request.app.state.permission_store
