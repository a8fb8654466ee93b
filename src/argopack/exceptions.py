from __future__ import annotations


class ArgopackError(Exception):
    """Base class for all argopack domain errors."""


class AbortError(RuntimeError, ArgopackError):
    """Raised when a command must stop and report a message to the user."""


class DependencyCheckFailedError(AbortError):
    """Raised when one or more host-tool prerequisites are not met."""

    def __init__(self, message: str, failed: list[str] | None = None) -> None:
        self.failed = list(failed or [])
        super().__init__(message)


class CloneFailedError(AbortError):
    """Raised when the extension template repository cannot be cloned."""


class MissingScriptFileError(FileNotFoundError, AbortError):
    """Raised when the built extension script does not exist."""


class ScriptPrepareError(AbortError):
    """Raised when the built extension script cannot be read or encoded.

    Attributes:
        stage: ``"read"`` or ``"encode"``, the step that failed.
    """

    def __init__(self, message: str, stage: str = "") -> None:
        self.stage = stage
        super().__init__(message)


class RendererProcessError(AbortError):
    """Raised when the package manager listing command fails."""


class RendererVersionNotFoundError(AbortError):
    """Raised when the renderer package version is missing from the listing."""
