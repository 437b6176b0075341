"""Read/patch/write helpers for JSON files such as ``package.json``.

Only the keys a caller explicitly sets or unsets change; everything else in
an existing file is written back as it was read.

Example:
    >>> data = JsonFile(Path("/nonexistent/.eslintrc.json"))
    >>> data.set("root", True).get()
    {'root': True}
"""

from __future__ import annotations

import json
from pathlib import Path

from .services.errors import IoFailedError

SCAFFOLD_DEFAULT_FIELDS = ("version", "description", "main", "keywords")


def load_json(path: Path) -> dict | None:
    """Load a JSON object from ``path`` if it exists.

    Args:
        path: Path to the JSON file.

    Returns:
        Parsed payload as a dict, or ``None`` if the file does not exist.
    """
    if not path.exists():
        return None
    try:
        with path.open("r", encoding="utf-8") as fh:
            payload = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        raise IoFailedError(f"failed to read {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise IoFailedError(f"expected a JSON object in {path}")
    return payload


def write_json(path: Path, payload: dict) -> None:
    """Write a JSON payload to disk with two-space indentation."""
    try:
        with path.open("w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2, ensure_ascii=False)
            fh.write("\n")
    except OSError as exc:
        raise IoFailedError(f"failed to write {path}: {exc}") from exc


class JsonFile:
    """A JSON object file patched in memory and saved explicitly."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._data: dict = load_json(path) or {}

    def get(self, key: str | None = None, default: object = None) -> object:
        if key is None:
            return self._data
        return self._data.get(key, default)

    def set(self, key: str, value: object) -> "JsonFile":
        self._data[key] = value
        return self

    def unset(self, key: str) -> "JsonFile":
        self._data.pop(key, None)
        return self

    def merge(self, key: str, values: dict) -> "JsonFile":
        """Shallow-merge ``values`` into the object stored at ``key``."""
        current = self._data.get(key)
        merged = dict(current) if isinstance(current, dict) else {}
        merged.update(values)
        self._data[key] = merged
        return self

    def save(self) -> None:
        write_json(self.path, self._data)


class PackageManifest(JsonFile):
    """``package.json`` with npm script helpers."""

    def _scripts(self) -> dict:
        scripts = self._data.get("scripts")
        if not isinstance(scripts, dict):
            scripts = {}
            self._data["scripts"] = scripts
        return scripts

    @property
    def name(self) -> str | None:
        value = self._data.get("name")
        return value if isinstance(value, str) else None

    @property
    def scripts(self) -> dict[str, str]:
        scripts = self._data.get("scripts")
        return dict(scripts) if isinstance(scripts, dict) else {}

    def set_script(self, name: str, command: str) -> "PackageManifest":
        self._scripts()[name] = command
        return self

    def prepend_script(self, name: str, command: str) -> "PackageManifest":
        """Run ``command`` before whatever ``name`` already runs.

        Example:
            >>> manifest = PackageManifest(Path("/nonexistent/package.json"))
            >>> _ = manifest.set_script("pretest", "node check.js")
            >>> manifest.prepend_script("pretest", "npm run lint").scripts["pretest"]
            'npm run lint && node check.js'
        """
        scripts = self._scripts()
        existing = scripts.get(name)
        if not existing:
            scripts[name] = command
        elif command.strip() not in [part.strip() for part in existing.split("&&")]:
            scripts[name] = f"{command} && {existing}"
        return self

    def remove_scaffold_defaults(self) -> "PackageManifest":
        """Drop the fields ``npm init --yes`` fills with placeholders."""
        for key in SCAFFOLD_DEFAULT_FIELDS:
            self.unset(key)
        return self
