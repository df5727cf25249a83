# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Settings model and perlcritic argument assembly."""

from __future__ import annotations

import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from threading import Lock
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .core.severity import PerlCriticSeverity
from .parsers.records import VERBOSE_TEMPLATE

DEFAULT_EXECUTABLE: Final[str] = "perlcritic"
DEFAULT_MAX_PROBLEMS: Final[int] = 10
BASE_ARGUMENTS: Final[tuple[str, ...]] = ("--quiet", "--nocolor", VERBOSE_TEMPLATE)
CLIENT_SECTION_KEY: Final[str] = "perlcritic"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "perlcritic-shim"

# Arguments that replace the templated output with something the parser cannot read.
_OUTPUT_ALTERING_RE: Final[re.Pattern[str]] = re.compile(r"count|list|profile-proto|statistics-only|-C|pager|doc")


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class PerlCriticSettings(BaseModel):
    """Editor-supplied settings controlling how perlcritic is invoked."""

    model_config = ConfigDict(
        validate_assignment=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    executable: str = DEFAULT_EXECUTABLE
    severity: PerlCriticSeverity = PerlCriticSeverity.GENTLE
    on_save: bool = False
    max_number_of_problems: int = Field(default=DEFAULT_MAX_PROBLEMS, ge=1)
    additional_arguments: list[str] = Field(default_factory=list)
    timeout: float | None = Field(default=None, ge=0)

    @field_validator("executable", mode="before")
    @classmethod
    def _default_executable(cls, value: Any) -> Any:
        return value or DEFAULT_EXECUTABLE

    @field_validator("severity", mode="before")
    @classmethod
    def _default_severity(cls, value: Any) -> Any:
        if not value:
            return PerlCriticSeverity.GENTLE
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("max_number_of_problems", mode="before")
    @classmethod
    def _default_max_problems(cls, value: Any) -> Any:
        return value or DEFAULT_MAX_PROBLEMS

    @field_validator("additional_arguments", mode="before")
    @classmethod
    def _default_additional_arguments(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    def filtered_arguments(self) -> list[str]:
        """Return additional arguments that keep perlcritic's output parseable."""

        return [arg for arg in self.additional_arguments if arg and not _OUTPUT_ALTERING_RE.search(arg)]

    def build_arguments(self) -> list[str]:
        """Return the argument list passed to perlcritic, excluding the executable.

        Returns:
            list[str]: Base output options, filtered user arguments, then the
            severity threshold and problem limit.
        """

        return [
            *BASE_ARGUMENTS,
            *self.filtered_arguments(),
            self.severity.option,
            f"--top={self.max_number_of_problems}",
        ]


def _format_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
        problems.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(problems)


def settings_from_payload(payload: Mapping[str, Any] | None) -> PerlCriticSettings:
    """Validate settings sent by the editor.

    Args:
        payload: Either the full change-notification payload
            (``{"perlcritic": {...}}``) or the inner settings mapping.

    Returns:
        PerlCriticSettings: Validated settings; defaults when ``payload`` is empty.

    Raises:
        ConfigError: If the payload contains invalid values.
    """

    if not payload:
        return PerlCriticSettings()
    section = payload.get(CLIENT_SECTION_KEY, payload)
    if not isinstance(section, Mapping):
        raise ConfigError(f"'{CLIENT_SECTION_KEY}' settings must be a table, got {type(section).__name__}")
    try:
        return PerlCriticSettings.model_validate(dict(section))
    except ValidationError as exc:
        raise ConfigError(f"invalid perlcritic settings: {_format_validation_error(exc)}") from exc


def load_settings(path: Path) -> PerlCriticSettings:
    """Load settings from a TOML file.

    ``pyproject.toml`` files are read from ``[tool.perlcritic-shim]``; any other
    file is read from its top level.

    Args:
        path: TOML document to read.

    Returns:
        PerlCriticSettings: Validated settings.

    Raises:
        ConfigError: If the file is missing, is not valid TOML, or holds invalid values.
    """

    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except FileNotFoundError as exc:
        raise ConfigError(f"configuration file not found: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML in {path}: {exc}") from exc

    if path.name == "pyproject.toml":
        tool_section = data.get(PYPROJECT_TOOL_KEY, {})
        section = tool_section.get(PYPROJECT_SECTION_KEY, {}) if isinstance(tool_section, Mapping) else {}
        if not isinstance(section, Mapping):
            raise ConfigError(f"[{PYPROJECT_TOOL_KEY}.{PYPROJECT_SECTION_KEY}] in {path} must be a table")
        return settings_from_payload(section)
    return settings_from_payload(data)


class SettingsStore:
    """Hold the latest settings snapshot; readers always see a complete snapshot."""

    def __init__(self, settings: PerlCriticSettings | None = None) -> None:
        self._settings = settings or PerlCriticSettings()
        self._lock = Lock()

    def __call__(self) -> PerlCriticSettings:
        with self._lock:
            return self._settings

    def update(self, payload: Mapping[str, Any] | None) -> PerlCriticSettings:
        """Replace the snapshot with settings validated from ``payload``.

        Raises:
            ConfigError: If ``payload`` is invalid; the previous snapshot is kept.
        """

        settings = settings_from_payload(payload)
        with self._lock:
            self._settings = settings
        return settings


__all__ = [
    "BASE_ARGUMENTS",
    "DEFAULT_EXECUTABLE",
    "DEFAULT_MAX_PROBLEMS",
    "ConfigError",
    "PerlCriticSettings",
    "SettingsStore",
    "load_settings",
    "settings_from_payload",
]
