from __future__ import annotations

import logging
import os
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

logger: logging.Logger = logging.getLogger(__name__)


def _get_package_version(name: str) -> str:
    """Return the installed version of *name*, or ``"0"`` if not found."""
    try:
        return _pkg_version(name)
    except PackageNotFoundError:
        return "0"


ARGOPACK_VERSION = _get_package_version("argopack")

GIT_ADMIN_TEMPLATE = "https://github.com/Shopify/argo-admin-template.git"
GIT_CHECKOUT_TEMPLATE = "https://github.com/Shopify/argo-checkout-template.git"

ARGO_ADMIN_RENDERER_PACKAGE = "@shopify/argo-admin"
ARGO_CHECKOUT_RENDERER_PACKAGE = "@shopify/argo-checkout"

CHECKOUT_MIN_NODE_MAJOR = 10
CHECKOUT_MIN_NODE_MINOR = 16

# relative to the extension project root
SCRIPT_PATH = ("build", "main.js")

LIST_COMMAND = ("list",)
NPM_LIST_PARAMETERS = ("--json", "--prod=true", "--depth=0")
YARN_LIST_PARAMETERS = ("--pattern",)

PACKAGE_MANAGER_TIMEOUT_SECONDS = 60.0
VERSION_PROBE_TIMEOUT_SECONDS = 10.0
GIT_CLONE_TIMEOUT_SECONDS = 300.0

PACKAGE_MANAGER_ENV = "ARGOPACK_PACKAGE_MANAGER"
COMMAND_TIMEOUT_ENV = "ARGOPACK_COMMAND_TIMEOUT"


def package_manager_override() -> str:
    """Return ``"npm"`` or ``"yarn"`` when forced via the environment, else ``""``."""
    value = os.environ.get(PACKAGE_MANAGER_ENV, "").strip().lower()
    if value in {"npm", "yarn"}:
        return value
    if value:
        logger.warning(f"Ignoring unsupported {PACKAGE_MANAGER_ENV}={value!r}")
    return ""


def resolve_command_timeout(default: float = PACKAGE_MANAGER_TIMEOUT_SECONDS) -> float:
    """Return the child process timeout, honouring ``ARGOPACK_COMMAND_TIMEOUT``."""
    raw = os.environ.get(COMMAND_TIMEOUT_ENV, "").strip()
    if not raw:
        return default
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {COMMAND_TIMEOUT_ENV}={raw!r}")
        return default
    if timeout <= 0:
        logger.warning(f"Ignoring non-positive {COMMAND_TIMEOUT_ENV}={raw!r}")
        return default
    return timeout
