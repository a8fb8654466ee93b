"""Resolve the installed version of an Argo renderer package.

npm reports ``npm list <pkg> --json`` as a JSON document; yarn v1 only
prints a text tree such as::

    yarn list v1.22.4
    ├─ @shopify/argo-checkout-react@0.3.4
    └─ @shopify/argo-checkout@0.3.4
    ✨  Done in 0.42s.

The parser is chosen by the package manager that actually produced the
output.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Callable

from argopack.context import ExecutionContext
from argopack.exceptions import RendererProcessError, RendererVersionNotFoundError
from argopack.js_system import JsSystem, PackageManager

VERSION_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")
TREE_BRANCH_PATTERN = re.compile(r"[├└]─")

logger: logging.Logger = logging.getLogger(__name__)

VersionParser = Callable[[str, str], str | None]


def parse_npm_list_output(output: str, package: str) -> str | None:
    """Return ``dependencies[package].version`` from ``npm list --json`` output."""
    try:
        document = json.loads(output)
    except ValueError:
        logger.debug(f"npm list output is not valid JSON: {output!r}")
        return None
    if not isinstance(document, dict):
        return None

    dependencies = document.get("dependencies")
    if not isinstance(dependencies, dict):
        return None
    entry = dependencies.get(package)
    if not isinstance(entry, dict):
        return None
    version = entry.get("version")
    return version if isinstance(version, str) else None


def parse_yarn_list_output(output: str, package: str) -> str | None:
    """Return the version of the top-level ``<package>@`` entry.

    ``yarn list --pattern`` also prints nested copies under the packages
    that depend on them. Those sit further right in the tree, so a match
    on the leftmost branch column wins. The first match is used only when
    no top-level entry exists.
    """
    # the match must not be preceded by a name character, so that
    # "argo-checkout@" does not match "@shopify/argo-checkout@"
    pattern = re.compile(rf"(?<![\w/@.-]){re.escape(package)}@(\S+)")
    lines = output.splitlines()
    branches = [TREE_BRANCH_PATTERN.search(line) for line in lines]
    top_column = min((branch.start() for branch in branches if branch), default=-1)

    first: str | None = None
    for line, branch in zip(lines, branches):
        match = pattern.search(line)
        if not match:
            continue
        if branch is not None and branch.start() == top_column:
            return match.group(1)
        if first is None:
            first = match.group(1)
    return first


RENDERER_VERSION_PARSERS: dict[PackageManager, VersionParser] = {
    PackageManager.NPM: parse_npm_list_output,
    PackageManager.YARN: parse_yarn_list_output,
}


def extract_renderer_version(
    package: str,
    context: ExecutionContext,
    js_system: JsSystem | None = None,
) -> str:
    """Return the installed semantic version of the renderer *package*."""
    system = js_system if js_system is not None else JsSystem(ctx=context)
    output, error, manager = system.call(package)
    if error is not None:
        context.abort(
            context.message(
                "features.argo.dependencies.argo_renderer_package_error", error
            ),
            RendererProcessError,
        )

    version = RENDERER_VERSION_PARSERS[manager](output, package)
    if version is None or not VERSION_PATTERN.match(version):
        logger.debug(f"No usable version for {package} in {manager.value} output")
        context.abort(
            context.message(
                "features.argo.dependencies.argo_renderer_version_missing", package
            ),
            RendererVersionNotFoundError,
        )

    logger.info(f"Found {package} version {version} via {manager.value}")
    return version
