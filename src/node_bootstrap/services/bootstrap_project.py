"""Execution sequencer for a bootstrap run.

Steps run in a fixed order and each one either completes or raises
ServiceFailure, which stops the run. Nothing is rolled back: files written by
earlier steps stay on disk.
"""

from __future__ import annotations

import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from .. import exec as exec_util
from .. import git, github, gitignore, log, npm, paths, templates
from ..manifest import JsonFile, PackageManifest
from ..models import BootstrapOptions
from .base import BaseService
from .errors import IoFailedError

PRETTIER_PACKAGES = ("prettier",)
ESLINT_PACKAGES = ("eslint@8", "eslint-plugin-node")
ESLINT_PRETTIER_PACKAGE = "eslint-config-prettier"
LINT_STAGED_PACKAGES = ("husky", "lint-staged")

FORMAT_SCRIPT = 'prettier --log-level warn --write "**/*.{js,css,md}"'
LINT_SCRIPT = "eslint . --cache --fix"
PRETEST_SCRIPT = "npm run lint"
PREPARE_SCRIPT = "husky"
ESLINT_EXTENDS = ("eslint:recommended", "plugin:node/recommended")
PRETTIER_LINT_STAGED_RULE = ("*.{js,css,md}", "prettier --write")
ESLINT_LINT_STAGED_RULE = ("*.js", "eslint --cache --fix")
PRE_COMMIT_HOOK = "npx lint-staged\n"

Step = Callable[[BootstrapOptions, Path], None]


@dataclass(frozen=True)
class BootstrapDependencies:
    """Collaborators the sequencer reaches out to."""

    runner: exec_util.CommandRunner | None = None
    fetch_gitignore: Callable[[], str] = gitignore.fetch_node_gitignore


@dataclass(frozen=True)
class BootstrapProjectOutcome:
    project_directory: Path
    project_name: str
    completed_steps: tuple[str, ...] = field(default_factory=tuple)


def eslint_extends(*, prettier: bool) -> list[str]:
    """Return the ``extends`` list written to ``.eslintrc.json``.

    Example:
        >>> eslint_extends(prettier=True)
        ['eslint:recommended', 'plugin:node/recommended', 'prettier']
    """
    extends = list(ESLINT_EXTENDS)
    if prettier:
        extends.append("prettier")
    return extends


def lint_staged_rules(*, prettier: bool, eslint: bool) -> dict[str, str]:
    rules: dict[str, str] = {}
    if prettier:
        pattern, command = PRETTIER_LINT_STAGED_RULE
        rules[pattern] = command
    if eslint:
        pattern, command = ESLINT_LINT_STAGED_RULE
        rules[pattern] = command
    return rules


def _write_text(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise IoFailedError(f"failed to write {path}: {exc}") from exc


def _write_unless_present(path: Path, content: str) -> bool:
    if path.exists():
        log.info(f"{path.name} already exists; leaving it untouched")
        return False
    _write_text(path, content)
    log.debug(f"Wrote {path}")
    return True


class BootstrapProjectService(BaseService[BootstrapOptions, BootstrapProjectOutcome]):
    """Create and populate a project directory from validated options."""

    def __init__(self, dependencies: BootstrapDependencies | None = None) -> None:
        self._deps = dependencies or BootstrapDependencies()

    @property
    def _runner(self) -> exec_util.CommandRunner | None:
        return self._deps.runner

    def plan(self, options: BootstrapOptions) -> list[tuple[str, Step]]:
        """Return the ordered steps enabled by ``options``."""
        candidates: list[tuple[str, bool, Step]] = [
            ("directory", True, self._ensure_directory),
            ("git", options.git, self._init_repository),
            ("editorconfig", options.editorconfig, self._write_editorconfig),
            ("manifest", True, self._write_manifest),
            (
                "dependencies",
                bool(options.dependencies or options.dev_dependencies),
                self._install_dependencies,
            ),
            ("prettier", options.prettier, self._setup_prettier),
            ("eslint", options.eslint, self._setup_eslint),
            ("lint-staged", options.lint_staged, self._setup_lint_staged),
            ("license", options.license, self._write_license),
            ("readme", options.readme, self._write_readme),
            ("commit", options.git, self._commit),
            ("github", options.github, self._create_remote),
        ]
        return [(name, step) for name, enabled, step in candidates if enabled]

    def _run(self, request: BootstrapOptions) -> BootstrapProjectOutcome:
        project_dir = request.project_directory
        completed: list[str] = []
        for name, step in self.plan(request):
            log.debug(f"Running step: {name}")
            step(request, project_dir)
            completed.append(name)
        manifest = PackageManifest(paths.package_json_path(project_dir))
        return BootstrapProjectOutcome(
            project_directory=project_dir,
            project_name=manifest.name or request.package_name,
            completed_steps=tuple(completed),
        )

    def _ensure_directory(self, options: BootstrapOptions, project_dir: Path) -> None:
        if project_dir.is_dir():
            log.debug(f"Using existing project directory: {project_dir}")
            return
        try:
            project_dir.mkdir(parents=True)
        except OSError as exc:
            raise IoFailedError(f"failed to create {project_dir}: {exc}") from exc
        log.success(f"Created project directory: {project_dir}")

    def _init_repository(self, options: BootstrapOptions, project_dir: Path) -> None:
        git.init(project_dir, runner=self._runner)
        target = project_dir / paths.GITIGNORE_FILENAME
        if target.exists():
            log.info(f"{target.name} already exists; leaving it untouched")
            return
        _write_text(target, self._deps.fetch_gitignore())

    def _write_editorconfig(self, options: BootstrapOptions, project_dir: Path) -> None:
        _write_unless_present(
            project_dir / paths.EDITORCONFIG_FILENAME, templates.render_editorconfig()
        )

    def _write_manifest(self, options: BootstrapOptions, project_dir: Path) -> None:
        manifest_path = paths.package_json_path(project_dir)
        created = not manifest_path.exists()
        if created:
            npm.init(project_dir, runner=self._runner)
        manifest = PackageManifest(manifest_path)
        if created:
            manifest.remove_scaffold_defaults()
        manifest.set("type", options.module_type).set("private", True).save()

    def _install_dependencies(self, options: BootstrapOptions, project_dir: Path) -> None:
        npm.install(project_dir, options.dependencies, dev=False, runner=self._runner)
        npm.install(project_dir, options.dev_dependencies, dev=True, runner=self._runner)

    def _setup_prettier(self, options: BootstrapOptions, project_dir: Path) -> None:
        npm.install(project_dir, PRETTIER_PACKAGES, dev=True, runner=self._runner)
        manifest = PackageManifest(paths.package_json_path(project_dir))
        manifest.set_script("format", FORMAT_SCRIPT).save()

    def _setup_eslint(self, options: BootstrapOptions, project_dir: Path) -> None:
        packages = list(ESLINT_PACKAGES)
        if options.prettier:
            packages.append(ESLINT_PRETTIER_PACKAGE)
        npm.install(project_dir, packages, dev=True, runner=self._runner)
        manifest = PackageManifest(paths.package_json_path(project_dir))
        manifest.set_script("lint", LINT_SCRIPT).prepend_script("pretest", PRETEST_SCRIPT)
        manifest.save()
        JsonFile(project_dir / paths.ESLINTRC_FILENAME).set(
            "extends", eslint_extends(prettier=options.prettier)
        ).save()

    def _setup_lint_staged(self, options: BootstrapOptions, project_dir: Path) -> None:
        npm.install(project_dir, LINT_STAGED_PACKAGES, dev=True, runner=self._runner)
        manifest = PackageManifest(paths.package_json_path(project_dir))
        manifest.set_script("prepare", PREPARE_SCRIPT)
        manifest.merge(
            "lint-staged",
            lint_staged_rules(prettier=options.prettier, eslint=options.eslint),
        )
        manifest.save()
        npm.npx(project_dir, ["husky"], runner=self._runner)
        hook = paths.husky_hook_path(project_dir, "pre-commit")
        _write_text(hook, PRE_COMMIT_HOOK)
        try:
            hook.chmod(hook.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        except OSError as exc:
            raise IoFailedError(f"failed to make {hook} executable: {exc}") from exc

    def _write_license(self, options: BootstrapOptions, project_dir: Path) -> None:
        author = options.author_name or "Your Name"
        content = templates.render_license(
            options.license_name, author=author, email=options.author_email
        )
        _write_unless_present(project_dir / paths.LICENSE_FILENAME, content)
        manifest = PackageManifest(paths.package_json_path(project_dir))
        manifest.set("license", options.license_name).save()

    def _write_readme(self, options: BootstrapOptions, project_dir: Path) -> None:
        manifest = PackageManifest(paths.package_json_path(project_dir))
        content = templates.render_readme(
            manifest.name or options.package_name, manifest.scripts
        )
        _write_unless_present(project_dir / paths.README_FILENAME, content)

    def _commit(self, options: BootstrapOptions, project_dir: Path) -> None:
        git.add_all(project_dir, runner=self._runner)
        git.commit(project_dir, runner=self._runner)

    def _create_remote(self, options: BootstrapOptions, project_dir: Path) -> None:
        manifest = PackageManifest(paths.package_json_path(project_dir))
        name = manifest.name or options.package_name
        log.info(f"Creating {'public' if options.public else 'private'} GitHub repository {name}")
        github.create_repository(project_dir, name, public=options.public, runner=self._runner)
