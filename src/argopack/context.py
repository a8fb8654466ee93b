"""Execution context shared by the extension commands.

The context owns the project root, user-facing message lookup and every
child process the commands start, so tests can swap ``run_command`` for a
fake without patching :mod:`subprocess` globally.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, NoReturn

from argopack import messages
from argopack.exceptions import AbortError
from argopack.internal_config import resolve_command_timeout

RunCommand = Callable[..., subprocess.CompletedProcess[str]]

logger: logging.Logger = logging.getLogger(__name__)


@dataclass
class ExecutionContext:
    root: Path = field(default_factory=Path.cwd)
    run_command: RunCommand = subprocess.run
    command_timeout: float = field(default_factory=resolve_command_timeout)

    def __post_init__(self) -> None:
        self.root = Path(self.root).expanduser().absolute()

    def message(self, key: str, *args: object) -> str:
        return messages.message(key, *args)

    def abort(
        self,
        message: str,
        error: type[AbortError] = AbortError,
        **details: object,
    ) -> NoReturn:
        """Stop the current command with a user-visible *message*."""
        raise error(message, **details)

    def capture(
        self, cmd: list[str], timeout: float | None = None
    ) -> tuple[str, str | None]:
        """Run *cmd* in the project root and return ``(stdout, error)``.

        ``error`` is ``None`` when the command exited cleanly, otherwise a
        short description of what went wrong.
        """
        logger.debug(f"Running {' '.join(cmd)} in {self.root}")
        if not self.root.is_dir():
            return "", (
                f"{' '.join(cmd)} could not be started:"
                f" {self.root} is not a directory"
            )
        try:
            process = self.run_command(
                cmd,
                capture_output=True,
                check=False,
                text=True,
                cwd=str(self.root),
                timeout=timeout if timeout is not None else self.command_timeout,
            )
        except FileNotFoundError:
            return "", f"{cmd[0]} is not installed or not on PATH"
        except OSError as exc:
            return "", f"{' '.join(cmd)} could not be started: {exc}"
        except subprocess.TimeoutExpired as exc:
            return "", f"{' '.join(cmd)} timed out after {exc.timeout} seconds"

        stdout = f"{process.stdout or ''}"
        if process.returncode != 0:
            stderr = f"{process.stderr or ''}".strip()
            detail = stderr or f"exit status {process.returncode}"
            return stdout, f"{' '.join(cmd)} failed: {detail}"
        return stdout, None

    def system(
        self,
        cmd: list[str],
        cwd: Path | None = None,
        timeout: float | None = None,
    ) -> None:
        """Run *cmd* and raise :class:`subprocess.CalledProcessError` on failure."""
        logger.debug(f"Running {' '.join(cmd)}")
        process = self.run_command(
            cmd,
            capture_output=True,
            check=False,
            text=True,
            cwd=str(cwd if cwd is not None else self.root),
            timeout=timeout if timeout is not None else self.command_timeout,
        )
        if process.returncode != 0:
            raise subprocess.CalledProcessError(
                process.returncode,
                cmd,
                process.stdout,
                process.stderr,
            )
