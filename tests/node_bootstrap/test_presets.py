from __future__ import annotations

import json
from pathlib import Path

import pytest

from node_bootstrap import presets
from node_bootstrap.models import BootstrapConfig, PresetDefinition
from node_bootstrap.services import ValidationFailedError


def _write_config(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_child_preset_applies_parent_flags_first() -> None:
    definitions = {
        "A": PresetDefinition(flags=["--git"]),
        "B": PresetDefinition(flags=["--readme"], extends="A"),
    }

    flags = presets.resolve_preset_flags(definitions, "B")

    assert flags == ["--git", "--readme"]
    assert set(flags) == {"--git", "--readme"}


def test_multi_level_extension_is_resolved() -> None:
    definitions = {
        "base": PresetDefinition(flags=["--git"]),
        "tooling": PresetDefinition(flags=["--prettier"], extends="base"),
        "app": PresetDefinition(flags=["--eslint"], extends="tooling"),
    }

    assert presets.resolve_preset_flags(definitions, "app") == [
        "--git",
        "--prettier",
        "--eslint",
    ]


def test_unknown_preset_lists_available_names() -> None:
    definitions = {"node": PresetDefinition(flags=["--git"])}

    with pytest.raises(ValidationFailedError, match="preset 'web' does not exist") as excinfo:
        presets.resolve_preset_flags(definitions, "web")

    assert excinfo.value.recovery_hint == "available presets: node"


def test_unknown_parent_is_reported() -> None:
    definitions = {"app": PresetDefinition(flags=[], extends="missing")}

    with pytest.raises(ValidationFailedError, match="extends unknown preset 'missing'"):
        presets.resolve_preset_flags(definitions, "app")


def test_extension_cycle_is_rejected() -> None:
    definitions = {
        "a": PresetDefinition(flags=["--git"], extends="b"),
        "b": PresetDefinition(flags=["--readme"], extends="a"),
    }

    with pytest.raises(ValidationFailedError, match="cycle: a -> b -> a"):
        presets.resolve_preset_flags(definitions, "a")


def test_preset_flags_may_not_select_presets() -> None:
    definitions = {"a": PresetDefinition(flags=["--preset=b"])}

    with pytest.raises(ValidationFailedError, match="use 'extends'"):
        presets.resolve_preset_flags(definitions, "a")


def test_expand_argv_keeps_command_line_last() -> None:
    config = BootstrapConfig(presets={"node": PresetDefinition(flags=["--git", "--esm"])})

    expanded = presets.expand_argv(["demo", "--preset", "node", "--no-git"], config)

    assert expanded == ["--git", "--esm", "demo", "--preset", "node", "--no-git"]


def test_expand_argv_without_presets_is_unchanged() -> None:
    assert presets.expand_argv(["demo", "--git"], BootstrapConfig()) == ["demo", "--git"]


def test_selected_presets_handles_all_spellings() -> None:
    argv = ["demo", "-p", "a", "--preset", "b", "--preset=c", "-pd", "--", "-p", "e"]

    assert presets.selected_presets(argv) == ["a", "b", "c", "d"]


def test_selected_presets_requires_a_name() -> None:
    with pytest.raises(ValidationFailedError, match="requires a preset name"):
        presets.selected_presets(["demo", "--preset"])


def test_load_config_reads_presets_and_license(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path / "presets.json",
        {
            "presets": {
                "base": {"flags": "--git --editorconfig"},
                "app": {"flags": ["--eslint"], "extends": "base"},
            },
            "license": {"name": "isc", "author": "Ada"},
        },
    )

    config = presets.load_config(path)

    assert config.presets["base"].flags == ["--git", "--editorconfig"]
    assert config.presets["app"].extends == "base"
    assert config.license.name == "ISC"
    assert config.license.author == "Ada"


def test_load_config_missing_file_is_empty(tmp_path: Path) -> None:
    assert presets.load_config(tmp_path / "absent.json") == BootstrapConfig()


def test_load_config_rejects_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "presets.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ValidationFailedError, match="invalid JSON"):
        presets.load_config(path)


def test_load_config_rejects_unknown_preset_keys(tmp_path: Path) -> None:
    path = _write_config(tmp_path / "presets.json", {"presets": {"a": {"flagz": []}}})

    with pytest.raises(ValidationFailedError, match="invalid preset configuration"):
        presets.load_config(path)
