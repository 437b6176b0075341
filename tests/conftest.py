# ruff: noqa: E402

import builtins
import sys
from pathlib import Path

import pytest
from _pytest.doctest import DoctestModule

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import node_bootstrap.io as io
import node_bootstrap.log as log
import node_bootstrap.paths as paths

PACKAGE = ROOT / "src" / "node_bootstrap"
DOCTEST_MODULES = {
    PACKAGE / "__init__.py",
    PACKAGE / "git.py",
    PACKAGE / "log.py",
    PACKAGE / "github.py",
    PACKAGE / "manifest.py",
    PACKAGE / "models.py",
    PACKAGE / "npm.py",
    PACKAGE / "options.py",
    PACKAGE / "paths.py",
    PACKAGE / "preflight.py",
    PACKAGE / "presets.py",
    PACKAGE / "templates.py",
    PACKAGE / "services" / "bootstrap_project.py",
}


@pytest.fixture(autouse=True)
def _isolated_session(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> None:
    monkeypatch.setattr(io, "_use_questionary", lambda: False)
    monkeypatch.setattr(io, "is_interactive", lambda: False)

    def fail_input(prompt: str = "") -> str:
        raise AssertionError("prompted unexpectedly")

    monkeypatch.setattr(builtins, "input", fail_input)

    config_dir = tmp_path_factory.mktemp("config")
    monkeypatch.setenv(paths.CONFIG_PATH_ENV, str(config_dir / paths.CONFIG_FILENAME))
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.delenv(log.LOG_LEVEL_ENV, raising=False)
    monkeypatch.setattr(log, "_configured_level", None)
    monkeypatch.setattr(log, "_no_color_override", None)


def pytest_collect_file(
    parent: pytest.Collector, file_path: Path
) -> DoctestModule | None:
    path = file_path if isinstance(file_path, Path) else Path(str(file_path))
    if path in DOCTEST_MODULES:
        return DoctestModule.from_parent(parent, path=path)
    return None
