"""Typer-based command line interface for node-bootstrap."""

from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Optional, Sequence

import typer

from . import __version__, paths, presets
from . import log as bootstrap_log
from .commands.bootstrap import bootstrap_project as bootstrap_cmd
from .services.errors import ServiceFailure

PROG_NAME = "bootstrap"

app = typer.Typer(
    add_completion=False,
    help="Bootstrap a new Node.js project.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _report_failure(error: ServiceFailure) -> None:
    bootstrap_log.error(f"error: {error}")
    if error.recovery_hint:
        bootstrap_log.warning(f"hint: {error.recovery_hint}")


def _validate_log_level(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized not in bootstrap_log.LEVEL_NAMES:
        raise typer.BadParameter(
            f"expected one of: {', '.join(bootstrap_log.LEVEL_NAMES)}"
        )
    return normalized


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{PROG_NAME} {__version__}")
        raise typer.Exit()


@app.command()
def bootstrap(
    project_name: Optional[str] = typer.Argument(
        None, help="Name of (or path to) the project directory"
    ),
    git: bool = typer.Option(False, "--git/--no-git", help="Initialise a git repository"),
    github: bool = typer.Option(
        False, "--github/--no-github", help="Create a GitHub repository and push (needs --git)"
    ),
    public: bool = typer.Option(
        False, "--public/--private", help="Make the GitHub repository public (needs --github)"
    ),
    esm: Optional[bool] = typer.Option(
        None,
        "--esm/--commonjs",
        help="Use ECMAScript modules (prompted for when omitted in a terminal)",
    ),
    editorconfig: bool = typer.Option(
        False, "--editorconfig/--no-editorconfig", help="Write an .editorconfig"
    ),
    prettier: bool = typer.Option(
        False, "--prettier/--no-prettier", help="Install Prettier and add a format script"
    ),
    eslint: bool = typer.Option(
        False, "--eslint/--no-eslint", help="Install ESLint and add lint scripts"
    ),
    lint_staged: bool = typer.Option(
        False,
        "--lint-staged/--no-lint-staged",
        help="Run Prettier/ESLint on staged files from a pre-commit hook",
    ),
    readme: bool = typer.Option(False, "--readme/--no-readme", help="Write a README.md"),
    license: bool = typer.Option(False, "--license/--no-license", help="Write a LICENSE"),
    dependencies: Optional[str] = typer.Option(
        None, "--dependencies", help='Runtime dependencies, e.g. "fastify pino"'
    ),
    dev_dependencies: Optional[str] = typer.Option(
        None, "--dev-dependencies", help='Development dependencies, e.g. "tap"'
    ),
    preset: list[str] = typer.Option(
        [],
        "--preset",
        "-p",
        help="Apply flags from a named preset in the user configuration",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        help=f"Preset configuration file (default: {paths.default_config_path()})",
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Never prompt; use defaults"),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        callback=_validate_log_level,
        help=f"Log level ({', '.join(bootstrap_log.LEVEL_NAMES)})",
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable coloured output"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Create a project directory and scaffold a Node.js project inside it."""
    if log_level is not None:
        bootstrap_log.set_level(log_level)
    if no_color:
        bootstrap_log.set_no_color(True)
    if preset:
        bootstrap_log.debug(f"Presets applied: {', '.join(preset)}")

    args = SimpleNamespace(
        project_name=project_name,
        git=git,
        github=github,
        public=public,
        esm=esm,
        editorconfig=editorconfig,
        prettier=prettier,
        eslint=eslint,
        lint_staged=lint_staged,
        readme=readme,
        license=license,
        dependencies=dependencies,
        dev_dependencies=dev_dependencies,
        config_path=config_path,
        yes=yes,
    )
    try:
        bootstrap_cmd(args)
    except ServiceFailure as exc:
        _report_failure(exc)
        raise typer.Exit(code=1) from exc


def _config_path_from_argv(argv: Sequence[str]) -> Path:
    for index, token in enumerate(argv):
        if token == "--":
            break
        if token == "--config" and index + 1 < len(argv):
            return Path(argv[index + 1]).expanduser()
        if token.startswith("--config="):
            return Path(token.split("=", 1)[1]).expanduser()
    return paths.default_config_path()


def expand_presets(argv: Sequence[str]) -> list[str]:
    """Prepend the flags of any selected presets to ``argv``."""
    if not presets.selected_presets(argv):
        return list(argv)
    config = presets.load_config(_config_path_from_argv(argv))
    return presets.expand_argv(argv, config)


def main(argv: Sequence[str] | None = None) -> None:
    """Console-script entry point."""
    raw_args = list(sys.argv[1:] if argv is None else argv)
    try:
        args = expand_presets(raw_args)
    except ServiceFailure as exc:
        _report_failure(exc)
        sys.exit(1)
    app(args=args, prog_name=PROG_NAME)


if __name__ == "__main__":  # pragma: no cover
    main()
