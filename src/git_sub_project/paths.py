"""Configuration file resolution.

Resolves where the sub-project settings live. Uses environment variables
when available, falls back to conventional locations.

Environment variables:
    GIT_SUB_PROJECT_CONFIG — explicit path to a YAML settings file
    XDG_CONFIG_HOME — base for the per-user file (default: ~/.config)
"""

from __future__ import annotations

import os
from pathlib import Path

PROJECT_CONFIG_NAME = ".sub-project.yaml"
_USER_CONFIG_SUBPATH = "git-sub-project/config.yaml"


def user_config_dir() -> Path:
    """Return the per-user configuration base directory."""
    return Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config")))


def user_config_path() -> Path:
    """Return the path to the per-user config.yaml."""
    return user_config_dir() / _USER_CONFIG_SUBPATH


def project_config_path(root: Path | str) -> Path:
    """Return the path to the project-local .sub-project.yaml under root."""
    return Path(root) / PROJECT_CONFIG_NAME


def config_path(root: Path | str | None = None) -> Path | None:
    """Return the settings file to load, or None when there is none.

    An explicit $GIT_SUB_PROJECT_CONFIG is returned even if it does not
    exist, so that a typo surfaces as an error instead of silent defaults.
    """
    env = os.environ.get("GIT_SUB_PROJECT_CONFIG")
    if env:
        return Path(env).expanduser()

    candidates = []
    if root is not None:
        candidates.append(project_config_path(root))
    candidates.append(user_config_path())

    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None
