# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers for perlcritic's templated output."""

from __future__ import annotations

from .engine import FORMAT_ERROR_PREFIX, format_error_message, parse, parse_process_output, parse_record
from .records import (
    DEFAULT_READER,
    END_OF_RECORD,
    FIELD_SEPARATOR,
    VERBOSE_TEMPLATE,
    RecordFields,
    RecordReader,
    strip_ansi,
)

__all__ = [
    "DEFAULT_READER",
    "END_OF_RECORD",
    "FIELD_SEPARATOR",
    "FORMAT_ERROR_PREFIX",
    "RecordFields",
    "RecordReader",
    "VERBOSE_TEMPLATE",
    "format_error_message",
    "parse",
    "parse_process_output",
    "parse_record",
    "strip_ansi",
]
