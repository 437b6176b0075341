from __future__ import annotations

import pytest

from node_bootstrap import log


def test_messages_below_level_are_dropped(capsys: pytest.CaptureFixture[str]) -> None:
    log.set_level("warning")

    log.info("hidden")
    log.warning("shown")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "shown" in captured.err


def test_success_goes_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    log.success("done")

    assert capsys.readouterr().out == "done\n"


def test_unknown_level_falls_back_to_info() -> None:
    log.set_level("loud")

    assert log.configured_level() is log.LogLevel.INFO


def test_level_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(log.LOG_LEVEL_ENV, "trace")
    monkeypatch.setattr(log, "_configured_level", None)

    assert log.configured_level() is log.LogLevel.TRACE


def test_warn_alias_and_level_names() -> None:
    assert log.parse_level(" WARN ") is log.LogLevel.WARNING
    assert log.LEVEL_NAMES == ("trace", "debug", "info", "success", "warning", "error")
