from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


def permission_granted(granted: Iterable[str], node: str) -> bool:
    """Check a node against granted nodes.

    Supports exact nodes, "*" for everything, and "prefix.*" which covers
    the prefix itself and every node below it.
    """
    for entry in granted:
        if entry == node or entry == "*":
            return True
        if entry.endswith(".*"):
            prefix = entry[:-2]
            if node == prefix or node.startswith(prefix + "."):
                return True
    return False


class UserEntry(BaseModel):
    groups: list[str] = Field(default_factory=list)
    nodes: list[str] = Field(default_factory=list)
    op: bool = False


class PermissionsFile(BaseModel):
    version: str = "1.0"
    default_nodes: list[str] = Field(default_factory=list)
    groups: dict[str, list[str]] = Field(default_factory=dict)
    users: dict[str, UserEntry] = Field(default_factory=dict)


class PermissionStore:
    """Resolves the permission nodes granted to each named sender."""

    def __init__(self, permissions_path: Path):
        self.permissions_path = permissions_path
        self._data = PermissionsFile()
        self._load()

    def _load(self) -> None:
        try:
            if not self.permissions_path.exists():
                logger.warning(
                    f"Permissions file not found at {self.permissions_path}. Using defaults only."
                )
                return

            with open(self.permissions_path) as f:
                data = yaml.safe_load(f) or {}

            self._data = PermissionsFile.model_validate(data)
            logger.info(
                "Loaded permissions for %d users and %d groups from %s",
                len(self._data.users),
                len(self._data.groups),
                self.permissions_path,
            )
        except Exception as e:
            logger.error(
                f"Failed to load permissions: {e}. Granting no permissions.",
                exc_info=True,
            )
            self._data = PermissionsFile()

    def nodes_for(self, name: str) -> set[str]:
        nodes = set(self._data.default_nodes)
        user = self._data.users.get(name)
        if user is None:
            return nodes
        for group in user.groups:
            if group not in self._data.groups:
                logger.warning("User %s references unknown group %s", name, group)
                continue
            nodes.update(self._data.groups[group])
        nodes.update(user.nodes)
        return nodes

    def is_op(self, name: str) -> bool:
        user = self._data.users.get(name)
        return bool(user and user.op)
