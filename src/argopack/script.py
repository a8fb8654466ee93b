from __future__ import annotations

import base64
import logging
from pathlib import Path

from argopack.context import ExecutionContext
from argopack.exceptions import MissingScriptFileError, ScriptPrepareError
from argopack.internal_config import SCRIPT_PATH

logger: logging.Logger = logging.getLogger(__name__)


def script_path(root: Path) -> Path:
    return root.joinpath(*SCRIPT_PATH)


def locate_script(context: ExecutionContext) -> Path:
    """Return the built extension script, aborting when it has not been built."""
    path = script_path(context.root)
    if not path.is_file():
        logger.debug(f"Missing built script at {path}")
        context.abort(
            context.message("features.argo.missing_file_error"),
            MissingScriptFileError,
        )
    return path


def chomp(data: bytes) -> bytes:
    """Drop one trailing line ending (``\\r\\n``, ``\\n`` or ``\\r``)."""
    if data.endswith(b"\r\n"):
        return data[:-2]
    if data.endswith((b"\n", b"\r")):
        return data[:-1]
    return data


def read_script(path: Path) -> bytes:
    return chomp(path.read_bytes())


def encode_script(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def serialize_script(path: Path, context: ExecutionContext) -> str:
    """Read and base64-encode the script at *path*.

    Every failure is reported with the same generic message; the failing
    stage is kept on the raised :class:`ScriptPrepareError` and the original
    exception is chained to it.
    """
    generic = context.message("features.argo.script_prepare_error")

    try:
        data = read_script(path)
    except (OSError, ValueError) as exc:
        logger.debug(f"Reading {path} failed: {exc!r}")
        raise ScriptPrepareError(generic, stage="read") from exc

    try:
        return encode_script(data)
    except (OSError, TypeError, ValueError) as exc:
        logger.debug(f"Encoding {path} failed: {exc!r}")
        raise ScriptPrepareError(generic, stage="encode") from exc
