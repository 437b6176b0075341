"""Path helpers for locating node-bootstrap configuration and project files."""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "node-bootstrap"
CONFIG_FILENAME = "presets.json"
CONFIG_PATH_ENV = "NODE_BOOTSTRAP_CONFIG"

PACKAGE_JSON_FILENAME = "package.json"
GITIGNORE_FILENAME = ".gitignore"
EDITORCONFIG_FILENAME = ".editorconfig"
ESLINTRC_FILENAME = ".eslintrc.json"
README_FILENAME = "README.md"
LICENSE_FILENAME = "LICENSE"
HUSKY_DIRNAME = ".husky"


def config_dir() -> Path:
    """Return the per-user configuration directory.

    Returns:
        Path to the user config directory for node-bootstrap.

    Example:
        >>> isinstance(config_dir(), Path)
        True
    """
    return Path(user_config_dir(APP_NAME))


def default_config_path() -> Path:
    """Return the preset config path, honouring ``NODE_BOOTSTRAP_CONFIG``.

    Example:
        >>> default_config_path().suffix
        '.json'
    """
    override = os.environ.get(CONFIG_PATH_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return config_dir() / CONFIG_FILENAME


def resolve_project_directory(project_name: str, *, base: Path | None = None) -> Path:
    """Resolve a project name or relative path to an absolute directory.

    Example:
        >>> path = resolve_project_directory("demo", base=Path("/tmp"))
        >>> path.is_absolute(), path.name
        (True, 'demo')
    """
    candidate = Path(project_name).expanduser()
    if not candidate.is_absolute():
        candidate = (base or Path.cwd()) / candidate
    return candidate.resolve()


def package_json_path(project_dir: Path) -> Path:
    return project_dir / PACKAGE_JSON_FILENAME


def husky_hook_path(project_dir: Path, hook: str) -> Path:
    """Return the path of a husky-managed git hook script."""
    return project_dir / HUSKY_DIRNAME / hook
