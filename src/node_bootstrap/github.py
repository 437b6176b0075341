"""GitHub CLI (``gh``) helpers."""

from __future__ import annotations

from pathlib import Path

from . import exec as exec_util

DEFAULT_REMOTE = "origin"


def repo_create_command(
    name: str, *, public: bool, remote: str = DEFAULT_REMOTE
) -> list[str]:
    """Build the ``gh repo create`` command for a local repository.

    Example:
        >>> repo_create_command("demo", public=False)
        ['gh', 'repo', 'create', 'demo', '--private', '--source', '.', '--remote', 'origin', '--push']
    """
    visibility = "--public" if public else "--private"
    return [
        "gh",
        "repo",
        "create",
        name,
        visibility,
        "--source",
        ".",
        "--remote",
        remote,
        "--push",
    ]


def create_repository(
    repo_dir: Path,
    name: str,
    *,
    public: bool,
    runner: exec_util.CommandRunner | None = None,
) -> None:
    """Create a hosted repository from ``repo_dir``, add it as a remote and push."""
    exec_util.run_checked(
        repo_create_command(name, public=public),
        cwd=repo_dir,
        runner=runner,
    )
