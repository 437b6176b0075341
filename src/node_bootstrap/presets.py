"""Preset loading and flag expansion.

Presets live in the user config file as a mapping from name to a flag list
and an optional parent preset::

    {
      "presets": {
        "base": {"flags": ["--git", "--editorconfig"]},
        "app": {"flags": ["--prettier", "--eslint"], "extends": "base"}
      }
    }

Selecting a preset prepends its flags (parents first) to the raw command-line
tokens, so anything typed on the command line wins.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping, Sequence

from pydantic import ValidationError

from . import log
from .models import BootstrapConfig, PresetDefinition
from .services.errors import IoFailedError, ValidationFailedError

PRESET_OPTION = "--preset"
PRESET_SHORT_OPTION = "-p"


def load_config(path: Path) -> BootstrapConfig:
    """Load the user configuration file.

    Args:
        path: Path to ``presets.json``.

    Returns:
        Parsed configuration; an empty configuration when the file is absent.

    Example:
        >>> load_config(Path("/nonexistent/presets.json")).presets
        {}
    """
    if not path.exists():
        log.debug(f"No preset configuration at {path}")
        return BootstrapConfig()
    try:
        with path.open("r", encoding="utf-8") as fh:
            payload = json.load(fh)
    except json.JSONDecodeError as exc:
        raise ValidationFailedError(f"invalid JSON in preset configuration {path}: {exc}") from exc
    except OSError as exc:
        raise IoFailedError(f"failed to read preset configuration {path}: {exc}") from exc
    try:
        return BootstrapConfig.model_validate(payload)
    except ValidationError as exc:
        raise ValidationFailedError(f"invalid preset configuration {path}: {exc}") from exc


def resolve_preset_flags(presets: Mapping[str, PresetDefinition], name: str) -> list[str]:
    """Flatten a preset and its ancestors into one flag list, parents first.

    Args:
        presets: Preset definitions keyed by name.
        name: Preset to resolve.

    Returns:
        Flags of the root ancestor first, the named preset's flags last.

    Raises:
        ValidationFailedError: The preset (or an ancestor) is not defined, or
            the ``extends`` chain loops back on itself.

    Example:
        >>> presets = {
        ...     "a": PresetDefinition(flags=["--git"]),
        ...     "b": PresetDefinition(flags=["--readme"], extends="a"),
        ... }
        >>> resolve_preset_flags(presets, "b")
        ['--git', '--readme']
    """
    chain: list[PresetDefinition] = []
    seen: list[str] = []
    current: str | None = name
    while current is not None:
        if current in seen:
            cycle = " -> ".join([*seen, current])
            raise ValidationFailedError(f"preset inheritance cycle: {cycle}")
        definition = presets.get(current)
        if definition is None:
            if current == name:
                raise ValidationFailedError(
                    f"preset '{name}' does not exist",
                    recovery_hint=_available_hint(presets),
                )
            raise ValidationFailedError(
                f"preset '{seen[-1]}' extends unknown preset '{current}'"
            )
        seen.append(current)
        chain.append(definition)
        current = definition.extends

    flags: list[str] = []
    for definition in reversed(chain):
        for flag in definition.flags:
            if _preset_name_from_token(flag, None)[0]:
                raise ValidationFailedError(
                    f"preset '{name}' may not select other presets; use 'extends'"
                )
            flags.append(flag)
    return flags


def _available_hint(presets: Mapping[str, PresetDefinition]) -> str | None:
    if not presets:
        return None
    return f"available presets: {', '.join(sorted(presets))}"


def _preset_name_from_token(token: str, following: str | None) -> tuple[bool, str | None]:
    """Return ``(matched, name)`` for a preset option token."""
    if token == PRESET_OPTION:
        return True, following
    if token.startswith(f"{PRESET_OPTION}="):
        return True, token.split("=", 1)[1]
    if token.startswith(PRESET_SHORT_OPTION) and len(token) > len(PRESET_SHORT_OPTION):
        if not token.startswith("--"):
            return True, token[len(PRESET_SHORT_OPTION) :]
    if token == PRESET_SHORT_OPTION:
        return True, following
    return False, None


def selected_presets(argv: Sequence[str]) -> list[str]:
    """Return preset names selected in ``argv`` in the order given.

    Example:
        >>> selected_presets(["demo", "-p", "node", "--preset=lib", "--git"])
        ['node', 'lib']
    """
    names: list[str] = []
    tokens = list(argv)
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token == "--":
            break
        following = tokens[index + 1] if index + 1 < len(tokens) else None
        matched, name = _preset_name_from_token(token, following)
        if matched:
            if not name:
                raise ValidationFailedError(f"option '{token}' requires a preset name")
            names.append(name)
            if token in (PRESET_OPTION, PRESET_SHORT_OPTION):
                index += 1
        index += 1
    return names


def expand_argv(argv: Sequence[str], config: BootstrapConfig) -> list[str]:
    """Prepend the flags of every selected preset to ``argv``.

    Example:
        >>> config = BootstrapConfig(presets={"a": PresetDefinition(flags=["--git"])})
        >>> expand_argv(["demo", "-p", "a", "--readme"], config)
        ['--git', 'demo', '-p', 'a', '--readme']
    """
    names = selected_presets(argv)
    if not names:
        return list(argv)
    prefix: list[str] = []
    for name in names:
        flags = resolve_preset_flags(config.presets, name)
        log.debug(f"Preset '{name}' expands to: {' '.join(flags) or '(no flags)'}")
        prefix.extend(flags)
    return [*prefix, *argv]
