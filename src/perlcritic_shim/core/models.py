# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Value objects produced while parsing perlcritic output."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class Finding:
    """Describe a single perlcritic violation using zero-based coordinates.

    Attributes:
        line: Zero-based line index (reported line minus one, floored at zero).
        column: Zero-based column index (reported column minus one, floored at zero).
        severity_rank: Zero-based severity derived from the reported severity.
        summary: Short message, already trimmed.
        explanation: Longer message (the policy name with the default template).
    """

    line: int
    column: int
    severity_rank: int
    summary: str
    explanation: str


class FailureKind(str, Enum):
    """Origin of a failed parse."""

    INVOCATION = "invocation"
    FORMAT = "format"


@dataclass(frozen=True, slots=True)
class RecordError:
    """Describe why a single record could not be parsed."""

    reason: str
    record: str


@dataclass(frozen=True, slots=True)
class ParseSuccess:
    """Successful parse carrying every emitted finding in output order."""

    findings: tuple[Finding, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        """Return ``True``; mirrors :attr:`ParseFailure.ok`."""

        return True


@dataclass(frozen=True, slots=True)
class ParseFailure:
    """Failed parse carrying the single user-facing error message."""

    message: str
    kind: FailureKind

    @property
    def ok(self) -> bool:
        """Return ``False``; mirrors :attr:`ParseSuccess.ok`."""

        return False


ParseResult: TypeAlias = ParseSuccess | ParseFailure


__all__ = [
    "FailureKind",
    "Finding",
    "ParseFailure",
    "ParseResult",
    "ParseSuccess",
    "RecordError",
]
