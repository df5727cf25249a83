# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Perl::Critic editor shim: output parsing and diagnostic mapping."""

from __future__ import annotations

from importlib import metadata

from .core.models import Finding, ParseFailure, ParseResult, ParseSuccess
from .diagnostics.mapper import MapperOptions, to_diagnostics
from .parsers.engine import parse

__all__ = [
    "Finding",
    "MapperOptions",
    "ParseFailure",
    "ParseResult",
    "ParseSuccess",
    "__version__",
    "parse",
    "to_diagnostics",
]

try:
    __version__ = metadata.version("perlcritic-shim")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
