"""npm helpers: registry lookups, manifest init and package installs."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

from . import exec as exec_util
from . import log


def split_package_list(packages: str | None) -> list[str]:
    """Split a whitespace separated package string into names.

    Example:
        >>> split_package_list("  left-pad   fastify ")
        ['left-pad', 'fastify']
        >>> split_package_list("")
        []
    """
    if not packages:
        return []
    return [name for name in packages.split() if name]


def package_exists(name: str, *, runner: exec_util.CommandRunner | None = None) -> bool:
    """Return ``True`` when ``name`` resolves on the npm registry."""
    result = exec_util.try_run(["npm", "view", name, "name"], runner=runner)
    if result is None:
        return False
    return result.returncode == 0


def find_missing_packages(
    packages: Iterable[str], *, runner: exec_util.CommandRunner | None = None
) -> list[str]:
    """Return the packages that do not exist on the registry, in input order."""
    missing: list[str] = []
    for name in packages:
        log.debug(f"Checking npm registry for {name}")
        if not package_exists(name, runner=runner):
            missing.append(name)
    return missing


def init(project_dir: Path, *, runner: exec_util.CommandRunner | None = None) -> None:
    exec_util.run_checked(["npm", "init", "--yes"], cwd=project_dir, quiet=True, runner=runner)


def install(
    project_dir: Path,
    packages: Sequence[str],
    *,
    dev: bool = False,
    runner: exec_util.CommandRunner | None = None,
) -> None:
    """Install packages into the project, saving them to the manifest."""
    if not packages:
        return
    save_flag = "--save-dev" if dev else "--save"
    log.info(f"Installing {'dev ' if dev else ''}dependencies: {' '.join(packages)}")
    exec_util.run_checked(
        ["npm", "install", save_flag, *packages],
        cwd=project_dir,
        runner=runner,
    )


def npx(
    project_dir: Path,
    args: Sequence[str],
    *,
    runner: exec_util.CommandRunner | None = None,
) -> None:
    exec_util.run_checked(["npx", *args], cwd=project_dir, runner=runner)
