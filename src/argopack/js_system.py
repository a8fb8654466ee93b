from __future__ import annotations

import logging
import shutil
from enum import Enum
from pathlib import Path

# package.json is read leniently (trailing commas, comments from templates)
import json5

from argopack.context import ExecutionContext
from argopack.internal_config import (
    LIST_COMMAND,
    NPM_LIST_PARAMETERS,
    YARN_LIST_PARAMETERS,
    package_manager_override,
)

logger: logging.Logger = logging.getLogger(__name__)


class PackageManager(str, Enum):
    NPM = "npm"
    YARN = "yarn"

    def list_arguments(self, package: str) -> list[str]:
        """Return the ``list`` invocation that reports *package*'s installed version."""
        if self is PackageManager.NPM:
            return [*LIST_COMMAND, package, *NPM_LIST_PARAMETERS]
        return [*LIST_COMMAND, *YARN_LIST_PARAMETERS, package]

    def command(self, package: str) -> list[str]:
        return [self.value, *self.list_arguments(package)]


def _declared_package_manager(root: Path) -> PackageManager | None:
    """Read the corepack ``packageManager`` field from ``package.json``, if any."""
    package_json = root.joinpath("package.json")
    if not package_json.is_file():
        return None
    try:
        manifest = json5.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning(f"Could not read {package_json}: {exc}")
        return None
    if not isinstance(manifest, dict):
        return None

    declared = str(manifest.get("packageManager", "")).strip().lower()
    name = declared.split("@", 1)[0]
    for manager in PackageManager:
        if name == manager.value:
            return manager
    return None


def detect_package_manager(root: Path) -> PackageManager:
    """Pick the package manager that owns the project at *root*."""
    forced = package_manager_override()
    if forced:
        return PackageManager(forced)

    declared = _declared_package_manager(root)
    if declared is not None:
        return declared

    if root.joinpath("yarn.lock").is_file() and shutil.which("yarn"):
        return PackageManager.YARN
    return PackageManager.NPM


class JsSystem(object):
    """Run package manager commands for a project."""

    def __init__(
        self,
        ctx: ExecutionContext,
        manager: PackageManager | None = None,
        timeout: float | None = None,
    ) -> None:
        self.ctx = ctx
        self.manager = (
            manager if manager is not None else detect_package_manager(ctx.root)
        )
        self.timeout = timeout if timeout is not None else ctx.command_timeout

    def call(self, package: str) -> tuple[str, str | None, PackageManager]:
        """List *package* and return ``(output, error, manager)``."""
        logger.debug(f"Using {self.manager.value} to list {package}")
        output, error = self.ctx.capture(
            self.manager.command(package), timeout=self.timeout
        )
        return output, error, self.manager
