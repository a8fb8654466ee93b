#! /bin/env python3
from __future__ import annotations

import json
import logging
from pathlib import Path

import typer

from argopack.context import ExecutionContext
from argopack.exceptions import ArgopackError
from argopack.extension import ExtensionVariant
from argopack.internal_config import ARGOPACK_VERSION, resolve_command_timeout

app: typer.Typer = typer.Typer(help="Scaffold and package Argo UI extensions.")
logger: logging.Logger = logging.getLogger(__name__)


def _configure_logging(log_level: str) -> None:
    level = getattr(logging, log_level.upper(), None)
    if not isinstance(level, int):
        raise typer.BadParameter(f"Invalid log level: {log_level!r}")
    logging.basicConfig(
        level=level,
        format="%(relativeCreated)d [%(levelname)s] %(message)s",
    )


def _build_context(root: str, timeout: float) -> ExecutionContext:
    return ExecutionContext(
        root=Path(root),
        command_timeout=timeout if timeout > 0 else resolve_command_timeout(),
    )


def _resolve_variant(extension_type: str) -> ExtensionVariant:
    try:
        return ExtensionVariant.for_type(extension_type)
    except ValueError as exc:
        raise typer.BadParameter(f"{exc}", param_hint="EXTENSION_TYPE") from exc


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"argopack {ARGOPACK_VERSION}")
        raise typer.Exit()


@app.callback()
def _root(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the argopack version and exit.",
    ),
) -> None:
    """Scaffold and package Argo UI extensions."""


@app.command()
def create(
    extension_type: str,
    directory: str,
    identifier: str = "",
    root: str = ".",
    log_level: str = "info",
    timeout: float = 0.0,
) -> None:
    """Clone the template for EXTENSION_TYPE (admin or checkout) into DIRECTORY."""
    _configure_logging(log_level)
    variant = _resolve_variant(extension_type)
    context = _build_context(root, timeout)

    try:
        if not context.root.is_dir():
            context.abort(
                context.message("features.argo.setup.root_missing", context.root)
            )
        target = context.root.joinpath(directory)
        if target.exists() and (not target.is_dir() or any(target.iterdir())):
            context.abort(
                context.message("features.argo.setup.directory_exists", target)
            )
        variant.create(directory, identifier or extension_type.upper(), context)
    except ArgopackError as exc:
        logger.error(f"{exc}")
        raise typer.Exit(code=1) from exc
    logger.info(f"Created {extension_type} extension in {target}")


@app.command()
def config(
    extension_type: str,
    root: str = ".",
    log_level: str = "warning",
    timeout: float = 0.0,
) -> None:
    """Print the config bundle of the built EXTENSION_TYPE project as JSON."""
    _configure_logging(log_level)
    variant = _resolve_variant(extension_type)
    context = _build_context(root, timeout)

    try:
        bundle = variant.config(context)
    except ArgopackError as exc:
        logger.error(f"{exc}")
        raise typer.Exit(code=1) from exc
    typer.echo(json.dumps(bundle.as_dict()))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
