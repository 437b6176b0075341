"""Preflight checks run before any project file is touched."""

from __future__ import annotations

import shutil
from typing import Callable, Iterable

from . import exec as exec_util
from . import git, io
from .services.errors import DependencyMissingError

REQUIRED_PROGRAMS = ("git", "node", "npm", "npx")
GITHUB_PROGRAM = "gh"
GLOBAL_GIT_SETTINGS = ("user.name", "user.email")

Which = Callable[[str], str | None]


def required_programs(*, github: bool = False) -> tuple[str, ...]:
    """Return the programs a run needs on ``PATH``.

    Example:
        >>> required_programs(github=True)
        ('git', 'node', 'npm', 'npx', 'gh')
    """
    if github:
        return (*REQUIRED_PROGRAMS, GITHUB_PROGRAM)
    return REQUIRED_PROGRAMS


def check_required_programs(programs: Iterable[str], *, which: Which | None = None) -> None:
    """Fail on the first program that cannot be resolved on ``PATH``.

    Raises:
        DependencyMissingError: Naming the missing program.
    """
    which = which or shutil.which
    for program in programs:
        if which(program) is None:
            raise DependencyMissingError(
                f"Required command not found: {program}",
                recovery_hint=f"install {program} and make sure it is on PATH",
            )


def check_global_git_settings(
    settings: Iterable[str] = GLOBAL_GIT_SETTINGS,
    *,
    runner: exec_util.CommandRunner | None = None,
) -> list[str]:
    """Warn about unset global git settings.

    Returns:
        The names of the settings that are not set. Never raises for them.
    """
    missing: list[str] = []
    for name in settings:
        if git.global_setting(name, runner=runner) is None:
            io.warn(f"Global git setting '{name}' is not set.")
            missing.append(name)
    return missing
