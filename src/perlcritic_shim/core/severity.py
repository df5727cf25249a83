# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Final


class DiagnosticSeverity(IntEnum):
    """Editor-facing diagnostic severities (language server protocol values)."""

    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


class PerlCriticSeverity(str, Enum):
    """Named perlcritic severity thresholds, from most to least inclusive."""

    BRUTAL = "brutal"
    CRUEL = "cruel"
    HARSH = "harsh"
    STERN = "stern"
    GENTLE = "gentle"

    @property
    def level(self) -> int:
        """Return the numeric threshold perlcritic associates with the name."""

        return _THRESHOLD_LEVELS[self]

    @property
    def option(self) -> str:
        """Return the command-line flag selecting this threshold."""

        return f"--{self.value}"


_THRESHOLD_LEVELS: Final[dict[PerlCriticSeverity, int]] = {
    PerlCriticSeverity.BRUTAL: 1,
    PerlCriticSeverity.CRUEL: 2,
    PerlCriticSeverity.HARSH: 3,
    PerlCriticSeverity.STERN: 4,
    PerlCriticSeverity.GENTLE: 5,
}


__all__ = [
    "DiagnosticSeverity",
    "PerlCriticSeverity",
]
