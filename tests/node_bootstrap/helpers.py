# ruff: noqa: E402

from __future__ import annotations

import json
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Callable

ROOT = Path(__file__).resolve().parents[2]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from node_bootstrap.exec import CommandRequest, CommandResult

NPM_INIT_MANIFEST = {
    "name": "",
    "version": "1.0.0",
    "description": "",
    "main": "index.js",
    "scripts": {"test": 'echo "Error: no test specified" && exit 1'},
    "keywords": [],
    "author": "",
    "license": "ISC",
}

GITIGNORE_TEXT = "node_modules/\n.eslintcache\n"


def make_args(**overrides: object) -> SimpleNamespace:
    data: dict[str, object] = {
        "project_name": "demo",
        "git": False,
        "github": False,
        "public": False,
        "esm": False,
        "editorconfig": False,
        "prettier": False,
        "eslint": False,
        "lint_staged": False,
        "readme": False,
        "license": False,
        "dependencies": None,
        "dev_dependencies": None,
        "config_path": None,
        "yes": True,
    }
    data.update(overrides)
    return SimpleNamespace(**data)


Handler = Callable[[CommandRequest], CommandResult | None]


class FakeRunner:
    """Command runner that records requests and simulates npm/git/gh.

    ``npm init`` writes a default manifest and ``npm install`` records the
    packages under (dev)dependencies, so file-level assertions work without
    any real toolchain.
    """

    def __init__(
        self,
        *,
        missing_packages: tuple[str, ...] = (),
        git_settings: dict[str, str] | None = None,
        fail_on: tuple[str, ...] | None = None,
    ) -> None:
        self.requests: list[CommandRequest] = []
        self.missing_packages = set(missing_packages)
        self.git_settings = (
            {"user.name": "Ada Lovelace", "user.email": "ada@example.com"}
            if git_settings is None
            else git_settings
        )
        self.fail_on = fail_on
        self.handlers: dict[tuple[str, ...], Handler] = {}

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [request.argv for request in self.requests]

    def run(self, request: CommandRequest) -> CommandResult | None:
        self.requests.append(request)
        argv = request.argv
        if self.fail_on is not None and argv[: len(self.fail_on)] == self.fail_on:
            return CommandResult(argv=argv, returncode=1, stderr="simulated failure")
        for prefix, handler in self.handlers.items():
            if argv[: len(prefix)] == prefix:
                return handler(request)
        if argv[:4] == ("git", "config", "--global", "--get"):
            value = self.git_settings.get(argv[4])
            if value is None:
                return CommandResult(argv=argv, returncode=1)
            return CommandResult(argv=argv, returncode=0, stdout=f"{value}\n")
        if argv[:2] == ("npm", "view"):
            if argv[2] in self.missing_packages:
                return CommandResult(argv=argv, returncode=1, stderr="E404")
            return CommandResult(argv=argv, returncode=0, stdout=f"{argv[2]}\n")
        if argv[:2] == ("npm", "init"):
            assert request.cwd is not None
            manifest = dict(NPM_INIT_MANIFEST, name=request.cwd.name)
            (request.cwd / "package.json").write_text(
                json.dumps(manifest, indent=2) + "\n", encoding="utf-8"
            )
        if argv[:2] == ("npm", "install"):
            assert request.cwd is not None
            self._record_install(request.cwd, argv[2], argv[3:])
        if argv[:2] == ("git", "init"):
            assert request.cwd is not None
            (request.cwd / ".git").mkdir(exist_ok=True)
        return CommandResult(argv=argv, returncode=0)

    def _record_install(self, project_dir: Path, save_flag: str, packages: tuple[str, ...]) -> None:
        manifest_path = project_dir / "package.json"
        manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
        section = "devDependencies" if save_flag == "--save-dev" else "dependencies"
        entries = manifest.setdefault(section, {})
        for package in packages:
            name = package
            if "@" in package[1:]:
                name = package[: package.rindex("@")]
            entries[name] = "^1.0.0"
        manifest_path.write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")


def read_manifest(project_dir: Path) -> dict:
    return json.loads((project_dir / "package.json").read_text(encoding="utf-8"))
