from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Protocol

from argopack import messages
from argopack.context import ExecutionContext
from argopack.internal_config import VERSION_PROBE_TIMEOUT_SECONDS

NODE_VERSION_PATTERN = re.compile(r"v?(\d+)\.(\d+)(?:\.(\d+))?")

logger: logging.Logger = logging.getLogger(__name__)


class DependencyCheck(Protocol):
    def describe(self) -> str: ...

    def check(self, context: ExecutionContext) -> bool: ...


def parse_node_version(output: str) -> tuple[int, int] | None:
    """Parse ``node --version`` output such as ``v14.17.0`` into ``(major, minor)``."""
    match = NODE_VERSION_PATTERN.search(output.strip())
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


@dataclass(frozen=True)
class NodeVersionCheck:
    """Require Node.js at or above ``min_major.min_minor``."""

    min_major: int
    min_minor: int = 0

    def describe(self) -> str:
        return messages.message(
            "features.argo.dependencies.node.describe", self.min_major, self.min_minor
        )

    def probe(self, context: ExecutionContext) -> tuple[int, int] | None:
        output, error = context.capture(
            ["node", "--version"], timeout=VERSION_PROBE_TIMEOUT_SECONDS
        )
        if error is not None:
            logger.debug(f"Node.js probe failed: {error}")
            return None
        return parse_node_version(output)

    def check(self, context: ExecutionContext) -> bool:
        installed = self.probe(context)
        if installed is None:
            logger.debug("Node.js is not installed or reported no version")
            return False
        if installed < (self.min_major, self.min_minor):
            logger.debug(
                f"Node.js {installed[0]}.{installed[1]} is older than"
                f" {self.min_major}.{self.min_minor}"
            )
            return False
        return True


def node_installed(min_major: int, min_minor: int = 0) -> NodeVersionCheck:
    return NodeVersionCheck(min_major=min_major, min_minor=min_minor)
