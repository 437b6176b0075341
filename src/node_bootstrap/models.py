"""Pydantic models for bootstrap options and user configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

MODULE_TYPES = ("module", "commonjs")
ModuleType = Literal["module", "commonjs"]

LicenseName = Literal["MIT", "ISC"]


class PresetDefinition(BaseModel):
    """A named bundle of command-line flags.

    Attributes:
        flags: Flags applied when the preset is selected.
        extends: Optional parent preset whose flags are applied first.

    Example:
        >>> PresetDefinition(flags=["--git"], extends="base")
        PresetDefinition(...)
    """

    model_config = ConfigDict(extra="forbid")

    flags: list[str] = Field(default_factory=list)
    extends: str | None = None

    @field_validator("flags", mode="before")
    @classmethod
    def split_flag_string(cls, value: object) -> object:
        if isinstance(value, str):
            return value.split()
        return value

    @field_validator("extends", mode="before")
    @classmethod
    def normalize_extends(cls, value: object) -> object:
        if value is None:
            return None
        if isinstance(value, str):
            normalized = value.strip()
            return normalized or None
        return value


class LicenseDefaults(BaseModel):
    """Defaults used when generating a ``LICENSE`` file.

    Attributes:
        name: License identifier (``MIT`` or ``ISC``).
        author: Copyright holder; falls back to ``git config user.name``.
        email: Contact email; falls back to ``git config user.email``.
    """

    model_config = ConfigDict(extra="allow")

    name: LicenseName = "MIT"
    author: str | None = None
    email: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("author", "email", mode="before")
    @classmethod
    def normalize_optional_strings(cls, value: object) -> object:
        if value is None:
            return None
        if isinstance(value, str):
            normalized = value.strip()
            return normalized or None
        return value


class BootstrapConfig(BaseModel):
    """Top-level user configuration (``presets.json``).

    Example:
        >>> BootstrapConfig().presets
        {}
    """

    model_config = ConfigDict(extra="allow")

    presets: dict[str, PresetDefinition] = Field(default_factory=dict)
    license: LicenseDefaults = Field(default_factory=LicenseDefaults)


class BootstrapOptions(BaseModel):
    """Validated options for one bootstrap run.

    Built once by the option resolver and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str
    project_directory: Path
    module_type: ModuleType = "commonjs"
    dependencies: tuple[str, ...] = ()
    dev_dependencies: tuple[str, ...] = ()
    git: bool = False
    github: bool = False
    public: bool = False
    editorconfig: bool = False
    prettier: bool = False
    eslint: bool = False
    lint_staged: bool = False
    readme: bool = False
    license: bool = False
    license_name: LicenseName = "MIT"
    author_name: str | None = None
    author_email: str | None = None
    existing_repository: bool = False

    @field_validator("project_name")
    @classmethod
    def project_name_must_not_be_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("project name must not be empty")
        return value.strip()

    @field_validator("project_directory")
    @classmethod
    def project_directory_must_be_absolute(cls, value: Path) -> Path:
        if not value.is_absolute():
            raise ValueError("project directory must be an absolute path")
        return value

    @property
    def package_name(self) -> str:
        """Name used for the manifest, README and remote repository."""
        return self.project_directory.name
