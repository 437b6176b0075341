"""Git helper functions used by the bootstrap sequencer."""

from __future__ import annotations

from pathlib import Path

from . import exec as exec_util

DEFAULT_COMMIT_MESSAGE = "Add project skeleton"


def git_command(args: list[str]) -> list[str]:
    """Build a git command line.

    Example:
        >>> git_command(["init"])
        ['git', 'init']
    """
    return ["git", *args]


def is_repository(path: Path, *, runner: exec_util.CommandRunner | None = None) -> bool:
    """Return ``True`` when ``path`` is inside a git work tree."""
    if not path.is_dir():
        return False
    result = exec_util.try_run(
        git_command(["-C", str(path), "rev-parse", "--is-inside-work-tree"]),
        runner=runner,
    )
    if result is None or result.returncode != 0:
        return False
    return result.stdout.strip() == "true"


def global_setting(name: str, *, runner: exec_util.CommandRunner | None = None) -> str | None:
    """Return a global git config value, or ``None`` when it is unset."""
    result = exec_util.try_run(git_command(["config", "--global", "--get", name]), runner=runner)
    if result is None or result.returncode != 0:
        return None
    value = result.stdout.strip()
    return value or None


def init(repo_dir: Path, *, runner: exec_util.CommandRunner | None = None) -> None:
    exec_util.run_checked(git_command(["init"]), cwd=repo_dir, runner=runner)


def add_all(repo_dir: Path, *, runner: exec_util.CommandRunner | None = None) -> None:
    exec_util.run_checked(git_command(["add", "."]), cwd=repo_dir, runner=runner)


def commit(
    repo_dir: Path,
    message: str = DEFAULT_COMMIT_MESSAGE,
    *,
    runner: exec_util.CommandRunner | None = None,
) -> None:
    exec_util.run_checked(git_command(["commit", "-m", message]), cwd=repo_dir, runner=runner)
