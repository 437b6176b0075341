"""Implementation for the ``bootstrap`` command.

``bootstrap <project_name>`` checks the toolchain, resolves and validates the
requested options, then runs the bootstrap sequencer against the project
directory.
"""

from __future__ import annotations

from pathlib import Path

from .. import exec as exec_util
from .. import io, log, options, paths, preflight, presets
from ..services.bootstrap_project import (
    BootstrapDependencies,
    BootstrapProjectOutcome,
    BootstrapProjectService,
)


def display_completed_message(
    outcome: BootstrapProjectOutcome, *, git: bool, github: bool
) -> None:
    log.success(
        f"\n✔️ The project {outcome.project_name} has been successfully bootstrapped!\n"
    )
    if github:
        log.success("The project has been pushed to GitHub.")
    elif git:
        log.success("Add a git remote and push your changes.")
    io.say(f"cd {outcome.project_directory}")


def bootstrap_project(
    args: object,
    *,
    runner: exec_util.CommandRunner | None = None,
    cwd: Path | None = None,
) -> BootstrapProjectOutcome:
    """Bootstrap a new Node.js project.

    Args:
        args: CLI argument object with ``project_name``, the boolean step
            flags, ``esm``, ``dependencies``, ``dev_dependencies``, ``yes``
            and ``config_path``.
        runner: Optional command runner used for every external program.
        cwd: Base directory for relative project names.

    Returns:
        The sequencer outcome.

    Raises:
        ServiceFailure: On validation, preflight or step failure.

    Example:
        $ bootstrap my-app --git --prettier --eslint --readme
    """
    github = bool(options.read_arg(args, "github"))
    preflight.check_required_programs(preflight.required_programs(github=github))
    preflight.check_global_git_settings(runner=runner)

    config_path = options.read_arg(args, "config_path")
    config = presets.load_config(
        config_path if isinstance(config_path, Path) else paths.default_config_path()
    )
    interactive = io.is_interactive() and not bool(options.read_arg(args, "yes"))
    resolved = options.resolve_options(
        args,
        config=config,
        interactive=interactive,
        cwd=cwd,
        runner=runner,
    )

    service = BootstrapProjectService(BootstrapDependencies(runner=runner))
    outcome = service(resolved)
    display_completed_message(outcome, git=resolved.git, github=resolved.github)
    return outcome
