from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from argopack.context import ExecutionContext
from argopack.dependencies import node_installed
from argopack.internal_config import (
    ARGO_ADMIN_RENDERER_PACKAGE,
    ARGO_CHECKOUT_RENDERER_PACKAGE,
    CHECKOUT_MIN_NODE_MAJOR,
    CHECKOUT_MIN_NODE_MINOR,
    GIT_ADMIN_TEMPLATE,
    GIT_CHECKOUT_TEMPLATE,
)
from argopack.renderer import extract_renderer_version
from argopack.script import locate_script, serialize_script
from argopack.template_setup import TemplateSetup

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigBundle:
    renderer_version: str
    serialized_script: str

    def as_dict(self) -> dict[str, str]:
        """Return the payload with the field names the packaging service expects."""
        return {
            "renderer_version": self.renderer_version,
            "serialized_script": self.serialized_script,
        }


@dataclass(frozen=True)
class ExtensionVariant:
    """An Argo extension flavour: its template setup and renderer package."""

    setup: TemplateSetup
    renderer_package: str

    def __post_init__(self) -> None:
        if not isinstance(self.setup, TemplateSetup):
            raise TypeError(f"setup must be a TemplateSetup, got {self.setup!r}")
        if not isinstance(self.renderer_package, str) or not self.renderer_package:
            raise ValueError("renderer_package must be a non-empty string")

    @classmethod
    def admin(cls) -> ExtensionVariant:
        return _ADMIN

    @classmethod
    def checkout(cls) -> ExtensionVariant:
        return _CHECKOUT

    @classmethod
    def for_type(cls, name: str) -> ExtensionVariant:
        """Return the built-in variant called *name* (``admin`` or ``checkout``)."""
        variants = {"admin": cls.admin, "checkout": cls.checkout}
        try:
            return variants[name.strip().lower()]()
        except KeyError:
            raise ValueError(
                f"Unknown extension type {name!r}, expected one of: "
                f"{', '.join(sorted(variants))}"
            ) from None

    def create(
        self, directory: str | Path, identifier: str, context: ExecutionContext
    ) -> None:
        self.setup(directory, identifier, context)

    def config(self, context: ExecutionContext) -> ConfigBundle:
        """Build the config bundle for the project at ``context.root``."""
        logger.debug(
            f"Building config bundle for {self.renderer_package} in {context.root}"
        )
        # fail on a missing build before spawning the package manager
        script = locate_script(context)
        renderer_version = extract_renderer_version(self.renderer_package, context)
        return ConfigBundle(
            renderer_version=renderer_version,
            serialized_script=serialize_script(script, context),
        )


# built once at import so every caller, on any thread, shares the same instances
_ADMIN = ExtensionVariant(
    setup=TemplateSetup(git_template=GIT_ADMIN_TEMPLATE),
    renderer_package=ARGO_ADMIN_RENDERER_PACKAGE,
)
_CHECKOUT = ExtensionVariant(
    setup=TemplateSetup(
        git_template=GIT_CHECKOUT_TEMPLATE,
        dependency_checks=(
            node_installed(
                min_major=CHECKOUT_MIN_NODE_MAJOR, min_minor=CHECKOUT_MIN_NODE_MINOR
            ),
        ),
    ),
    renderer_package=ARGO_CHECKOUT_RENDERER_PACKAGE,
)
