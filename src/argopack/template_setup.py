from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

from argopack.context import ExecutionContext
from argopack.dependencies import DependencyCheck
from argopack.exceptions import CloneFailedError, DependencyCheckFailedError
from argopack.internal_config import GIT_CLONE_TIMEOUT_SECONDS

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TemplateSetup:
    """Check host prerequisites, then clone an extension template."""

    git_template: str
    dependency_checks: tuple[DependencyCheck, ...] = ()

    def __post_init__(self) -> None:
        # accept any sequence but keep the instance hashable and immutable
        object.__setattr__(self, "dependency_checks", tuple(self.dependency_checks))

    def __call__(
        self, directory: str | Path, identifier: str, context: ExecutionContext
    ) -> None:
        self.check_dependencies(context)
        logger.debug(f"Setting up {identifier} extension in {directory}")
        self.clone_template(directory, context)

    def check_dependencies(self, context: ExecutionContext) -> None:
        """Run every check and abort listing all the ones that failed."""
        failed = [
            check.describe()
            for check in self.dependency_checks
            if not check.check(context)
        ]
        if failed:
            context.abort(
                context.message(
                    "features.argo.dependencies.check_failed",
                    "\n".join(f"  - {description}" for description in failed),
                ),
                DependencyCheckFailedError,
                failed=failed,
            )

    def clone_template(self, directory: str | Path, context: ExecutionContext) -> Path:
        target = context.root.joinpath(directory)
        logger.info(
            context.message("features.argo.setup.cloning", self.git_template, target)
        )
        cmd = ["git", "clone", "--single-branch", self.git_template, str(target)]
        try:
            context.system(cmd, timeout=GIT_CLONE_TIMEOUT_SECONDS)
        except subprocess.CalledProcessError as exc:
            detail = f"{exc.stderr or ''}".strip() or f"exit status {exc.returncode}"
            self._abort_clone(context, detail)
        except subprocess.TimeoutExpired as exc:
            self._abort_clone(context, f"timed out after {exc.timeout} seconds")
        except OSError as exc:
            self._abort_clone(context, f"{exc}")

        # the new project starts without the template's history
        shutil.rmtree(target.joinpath(".git"), ignore_errors=True)
        return target

    def _abort_clone(self, context: ExecutionContext, detail: str) -> NoReturn:
        context.abort(
            context.message(
                "features.argo.setup.clone_error", self.git_template, detail
            ),
            CloneFailedError,
        )
