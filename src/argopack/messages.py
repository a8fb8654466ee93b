from __future__ import annotations

MESSAGES: dict[str, str] = {
    "features.argo.missing_file_error": "Could not find built extension file.",
    "features.argo.script_prepare_error": (
        "An error occurred while attempting to prepare your script."
    ),
    "features.argo.dependencies.argo_renderer_package_error": (
        "Unable to determine the installed renderer package version: {}"
    ),
    "features.argo.dependencies.argo_renderer_version_missing": (
        "Renderer package {} is not installed or has no valid version."
        " Run your package manager's install command and build again."
    ),
    "features.argo.dependencies.check_failed": (
        "Your environment does not meet the requirements for this extension:\n{}"
    ),
    "features.argo.dependencies.node.describe": (
        "Node.js {}.{} or higher must be installed"
    ),
    "features.argo.setup.cloning": "Cloning template {} into {}",
    "features.argo.setup.clone_error": "Unable to clone the repository {}: {}",
    "features.argo.setup.directory_exists": (
        "Directory {} already exists and is not empty."
    ),
    "features.argo.setup.root_missing": "Project root {} is not a directory.",
}


def message(key: str, *args: object) -> str:
    """Format the user-facing message stored under *key*."""
    return MESSAGES[key].format(*args)
