"""Subprocess helpers for running external commands."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Protocol

from . import log
from .services.errors import DependencyMissingError, ExternalCommandFailedError


@dataclass(frozen=True)
class CommandRequest:
    """Typed command invocation request.

    ``quiet`` captures the command's output instead of letting it stream to
    the terminal.
    """

    argv: tuple[str, ...]
    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    quiet: bool = False


@dataclass(frozen=True)
class CommandResult:
    """Typed command execution result."""

    argv: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""


class CommandRunner(Protocol):
    """Runtime command-execution interface."""

    def run(self, request: CommandRequest) -> CommandResult | None: ...


class SubprocessCommandRunner:
    """Default command-runner adapter backed by subprocess."""

    def run(self, request: CommandRequest) -> CommandResult | None:
        run_kwargs: dict[str, object] = {
            "cwd": request.cwd,
            "env": request.env,
            "check": False,
        }
        if request.quiet:
            run_kwargs["capture_output"] = True
            run_kwargs["text"] = True
        try:
            completed = subprocess.run(list(request.argv), **run_kwargs)
        except FileNotFoundError:
            return None

        stdout = completed.stdout if isinstance(completed.stdout, str) else ""
        stderr = completed.stderr if isinstance(completed.stderr, str) else ""
        return CommandResult(
            argv=request.argv,
            returncode=completed.returncode,
            stdout=stdout,
            stderr=stderr,
        )


_DEFAULT_COMMAND_RUNNER: CommandRunner = SubprocessCommandRunner()


def run_with_runner(
    request: CommandRequest, *, runner: CommandRunner | None = None
) -> CommandResult | None:
    """Execute a typed command request with the given runner."""
    active_runner = runner or _DEFAULT_COMMAND_RUNNER
    log.trace(f"$ {' '.join(request.argv)}")
    return active_runner.run(request)


def _command_failure_detail(request: CommandRequest, result: CommandResult) -> str:
    output = (result.stderr or result.stdout or "").strip()
    command_text = " ".join(request.argv)
    if output:
        return f"command failed: {command_text}\n{output}"
    return f"command failed: {command_text}"


def run_checked(
    argv: list[str] | tuple[str, ...],
    *,
    cwd: Path | None = None,
    quiet: bool = False,
    runner: CommandRunner | None = None,
) -> CommandResult:
    """Run a command and raise a service failure when it does not succeed.

    Args:
        argv: Command and arguments to execute.
        cwd: Optional working directory.
        quiet: Capture output instead of streaming it to the terminal.
        runner: Optional command runner; defaults to subprocess.

    Returns:
        The successful ``CommandResult``.

    Raises:
        DependencyMissingError: The executable could not be found.
        ExternalCommandFailedError: The command exited non-zero.
    """
    request = CommandRequest(argv=tuple(argv), cwd=cwd, quiet=quiet)
    result = run_with_runner(request, runner=runner)
    if result is None:
        raise DependencyMissingError(f"missing required command: {request.argv[0]}")
    if result.returncode != 0:
        raise ExternalCommandFailedError(_command_failure_detail(request, result))
    return result


def try_run(
    argv: list[str] | tuple[str, ...],
    *,
    cwd: Path | None = None,
    runner: CommandRunner | None = None,
) -> CommandResult | None:
    """Run a command quietly and return ``None`` if the executable is missing.

    Non-zero exits are returned to the caller rather than raised.
    """
    request = CommandRequest(argv=tuple(argv), cwd=cwd, quiet=True)
    return run_with_runner(request, runner=runner)
