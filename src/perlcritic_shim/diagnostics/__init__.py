# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostic models and the finding-to-diagnostic mapper."""

from __future__ import annotations

from .mapper import DEFAULT_SOURCE, MapperOptions, to_diagnostic, to_diagnostics
from .models import MAX_COLUMN, Diagnostic, DiagnosticRelatedInformation, Location, Position, Range

__all__ = [
    "DEFAULT_SOURCE",
    "MAX_COLUMN",
    "Diagnostic",
    "DiagnosticRelatedInformation",
    "Location",
    "MapperOptions",
    "Position",
    "Range",
    "to_diagnostic",
    "to_diagnostics",
]
