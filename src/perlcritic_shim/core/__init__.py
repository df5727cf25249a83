# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core models and severity helpers."""

from __future__ import annotations

from .models import FailureKind, Finding, ParseFailure, ParseResult, ParseSuccess, RecordError
from .severity import DiagnosticSeverity, PerlCriticSeverity

__all__ = [
    "DiagnosticSeverity",
    "FailureKind",
    "Finding",
    "ParseFailure",
    "ParseResult",
    "ParseSuccess",
    "PerlCriticSeverity",
    "RecordError",
]
