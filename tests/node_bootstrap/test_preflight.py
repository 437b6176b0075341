from __future__ import annotations

import pytest

from node_bootstrap import preflight
from node_bootstrap.services import DependencyMissingError
from tests.node_bootstrap.helpers import FakeRunner


def test_first_missing_program_is_named() -> None:
    available = {"git", "node"}
    looked_up: list[str] = []

    def which(name: str) -> str | None:
        looked_up.append(name)
        return f"/usr/bin/{name}" if name in available else None

    with pytest.raises(DependencyMissingError, match="Required command not found: npm"):
        preflight.check_required_programs(preflight.REQUIRED_PROGRAMS, which=which)

    assert looked_up == ["git", "node", "npm"]


def test_all_programs_present_passes() -> None:
    preflight.check_required_programs(
        preflight.required_programs(github=True), which=lambda name: f"/bin/{name}"
    )


def test_github_adds_gh() -> None:
    assert preflight.required_programs() == ("git", "node", "npm", "npx")
    assert preflight.required_programs(github=True)[-1] == "gh"


def test_unset_git_settings_warn_without_failing(capsys: pytest.CaptureFixture[str]) -> None:
    runner = FakeRunner(git_settings={"user.name": "Ada"})

    missing = preflight.check_global_git_settings(runner=runner)

    assert missing == ["user.email"]
    captured = capsys.readouterr()
    assert "Global git setting 'user.email' is not set." in captured.err
    assert "user.name" not in captured.err


def test_configured_git_settings_stay_quiet(capsys: pytest.CaptureFixture[str]) -> None:
    assert preflight.check_global_git_settings(runner=FakeRunner()) == []
    assert capsys.readouterr().err == ""
