# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Editor-facing diagnostic models mirroring the language server protocol."""

from __future__ import annotations

from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field

from ..core.severity import DiagnosticSeverity

# Largest ``uinteger`` the editor protocol accepts; used to underline to end of line.
MAX_COLUMN: Final[int] = 2**31 - 1


class Position(BaseModel):
    """Zero-based line/character position inside a document."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=0)
    character: int = Field(ge=0)


class Range(BaseModel):
    """Span between two positions; ``end`` is exclusive."""

    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position


class Location(BaseModel):
    """A range inside the document identified by ``uri``."""

    model_config = ConfigDict(frozen=True)

    uri: str
    range: Range


class DiagnosticRelatedInformation(BaseModel):
    """Secondary message attached to a diagnostic."""

    model_config = ConfigDict(frozen=True)

    location: Location
    message: str


class Diagnostic(BaseModel):
    """A diagnostic ready to be published for a document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    range: Range
    severity: DiagnosticSeverity
    message: str
    source: str | None = None
    code: str | None = None
    related_information: tuple[DiagnosticRelatedInformation, ...] | None = Field(
        default=None,
        alias="relatedInformation",
    )

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-compatible protocol representation of the diagnostic."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = [
    "MAX_COLUMN",
    "Diagnostic",
    "DiagnosticRelatedInformation",
    "Location",
    "Position",
    "Range",
]
