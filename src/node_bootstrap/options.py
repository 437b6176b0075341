"""Option resolution: raw CLI values to a validated ``BootstrapOptions``.

Everything here is read-only with respect to the target directory. Cross-flag
constraints and registry lookups are all settled before the sequencer runs.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable

from . import exec as exec_util
from . import git, io, log, npm, paths
from .models import MODULE_TYPES, BootstrapConfig, BootstrapOptions, ModuleType
from .services.errors import ValidationFailedError

BOOLEAN_FLAGS = (
    "git",
    "github",
    "public",
    "editorconfig",
    "prettier",
    "eslint",
    "lint_staged",
    "readme",
    "license",
)

PackageCheck = Callable[[Iterable[str]], list[str]]
Ask = Callable[[], str]


def read_arg(args: object | None, name: str) -> object | None:
    """Read an attribute from an args namespace, returning ``None`` if absent.

    Example:
        >>> from types import SimpleNamespace
        >>> read_arg(SimpleNamespace(git=True), "git"), read_arg(None, "git")
        (True, None)
    """
    if args is None:
        return None
    return getattr(args, name, None)


def _flag(args: object, name: str) -> bool:
    return bool(read_arg(args, name))


def _text_arg(args: object, name: str) -> str | None:
    value = read_arg(args, name)
    return value if isinstance(value, str) else None


def validate_flag_combinations(args: object, *, existing_repository: bool = False) -> None:
    """Reject flag sets that violate a cross-flag constraint.

    Raises:
        ValidationFailedError: Naming the first violated constraint.
    """
    if _flag(args, "github") and not _flag(args, "git"):
        raise ValidationFailedError("--github requires --git")
    if _flag(args, "public") and not _flag(args, "github"):
        raise ValidationFailedError("--public requires --github")
    if _flag(args, "lint_staged"):
        if not (_flag(args, "git") or existing_repository):
            raise ValidationFailedError(
                "--lint-staged requires --git or an existing git repository"
            )
        if not (_flag(args, "prettier") or _flag(args, "eslint")):
            raise ValidationFailedError("--lint-staged requires --prettier or --eslint")


def missing_packages_message(missing: list[str]) -> str:
    """Describe unknown package names in one line.

    Example:
        >>> missing_packages_message(["left-pad"])
        'The following packages do not exist on npm: left-pad'
    """
    return f"The following packages do not exist on npm: {', '.join(missing)}"


def validate_module_type(answer: str) -> str | None:
    """Return an error message unless ``answer`` names a module system.

    Example:
        >>> validate_module_type("module") is None
        True
        >>> validate_module_type("amd")
        "Module system must be either 'module' or 'commonjs'"
    """
    if answer.strip() in MODULE_TYPES:
        return None
    choices = "' or '".join(MODULE_TYPES)
    return f"Module system must be either '{choices}'"


def prompt_module_type(
    *, ask: Ask | None = None, attempts: int = io.DEFAULT_PROMPT_ATTEMPTS
) -> ModuleType:
    """Ask which module system to use until a valid answer is given."""
    asker = ask or (
        lambda: io.select(
            "Which Node.js module system do you want to use?", MODULE_TYPES, "commonjs"
        )
    )
    answer = io.prompt_until_valid(asker, validate_module_type, attempts=attempts)
    if answer is None:
        raise ValidationFailedError(
            f"no valid module system given after {attempts} attempts"
        )
    return "module" if answer.strip() == "module" else "commonjs"


def prompt_dependencies(
    check_packages: PackageCheck,
    *,
    ask: Ask | None = None,
    attempts: int = io.DEFAULT_PROMPT_ATTEMPTS,
) -> list[str]:
    """Ask for dependencies until every named package exists on the registry."""
    asker = ask or (
        lambda: io.prompt("Which npm packages do you want to install?", allow_empty=True)
    )

    def validate(answer: str) -> str | None:
        missing = check_packages(npm.split_package_list(answer))
        if missing:
            return missing_packages_message(missing)
        return None

    answer = io.prompt_until_valid(asker, validate, attempts=attempts)
    if answer is None:
        raise ValidationFailedError(
            f"no valid dependency list given after {attempts} attempts"
        )
    return npm.split_package_list(answer)


def _resolve_module_type(args: object, interactive: bool) -> ModuleType:
    esm = read_arg(args, "esm")
    if esm is None:
        if interactive:
            return prompt_module_type()
        return "commonjs"
    return "module" if esm else "commonjs"


def resolve_options(
    args: object,
    *,
    config: BootstrapConfig | None = None,
    interactive: bool = False,
    cwd: Path | None = None,
    check_packages: PackageCheck | None = None,
    runner: exec_util.CommandRunner | None = None,
) -> BootstrapOptions:
    """Build validated options from parsed CLI arguments.

    Args:
        args: Namespace with the parsed flags (``project_name``, ``esm``,
            ``dependencies``, ``dev_dependencies`` and the boolean flags).
        config: User configuration supplying license defaults.
        interactive: Prompt for a missing module type or dependency list.
        cwd: Base directory for relative project names.
        check_packages: Returns the names missing from the registry.
        runner: Command runner for git and npm lookups.

    Returns:
        Frozen ``BootstrapOptions``.

    Raises:
        ValidationFailedError: On the first violated constraint, or listing
            every unknown package together.
    """
    config = config or BootstrapConfig()
    if check_packages is None:

        def check_packages(names: Iterable[str]) -> list[str]:
            return npm.find_missing_packages(names, runner=runner)

    project_name = read_arg(args, "project_name")
    if not isinstance(project_name, str) or not project_name.strip():
        raise ValidationFailedError("You must specify the <PROJECT_NAME> argument")
    project_name = project_name.strip()
    project_directory = paths.resolve_project_directory(project_name, base=cwd)

    existing_repository = False
    if _flag(args, "lint_staged") and not _flag(args, "git"):
        existing_repository = git.is_repository(project_directory, runner=runner)
    validate_flag_combinations(args, existing_repository=existing_repository)

    module_type = _resolve_module_type(args, interactive)

    raw_dependencies = _text_arg(args, "dependencies")
    dev_dependencies = npm.split_package_list(_text_arg(args, "dev_dependencies"))
    if raw_dependencies is None and interactive:
        missing_dev = check_packages(dev_dependencies)
        if missing_dev:
            raise ValidationFailedError(missing_packages_message(missing_dev))
        dependencies = prompt_dependencies(check_packages)
    else:
        dependencies = npm.split_package_list(raw_dependencies)
        missing = check_packages([*dependencies, *dev_dependencies])
        if missing:
            raise ValidationFailedError(missing_packages_message(missing))

    author_name = config.license.author
    author_email = config.license.email
    if _flag(args, "license"):
        author_name = author_name or git.global_setting("user.name", runner=runner)
        author_email = author_email or git.global_setting("user.email", runner=runner)

    options = BootstrapOptions(
        project_name=project_name,
        project_directory=project_directory,
        module_type=module_type,
        dependencies=tuple(dependencies),
        dev_dependencies=tuple(dev_dependencies),
        license_name=config.license.name,
        author_name=author_name,
        author_email=author_email,
        existing_repository=existing_repository,
        **{name: _flag(args, name) for name in BOOLEAN_FLAGS},
    )
    log.debug(f"Resolved options: {options.model_dump_json()}")
    return options
