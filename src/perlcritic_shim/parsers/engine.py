# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Turn captured perlcritic output into findings or a single error."""

from __future__ import annotations

import logging
import math
import re
from typing import TYPE_CHECKING, Final

from ..core.models import FailureKind, Finding, ParseFailure, ParseResult, ParseSuccess, RecordError
from .records import DEFAULT_READER, RecordFields, RecordReader

if TYPE_CHECKING:
    from ..runtime.process import ProcessOutput

LOGGER = logging.getLogger(__name__)

FORMAT_ERROR_PREFIX: Final[str] = "Invalid output format (Please check your perlcritic settings)"
_HEX_RE: Final[re.Pattern[str]] = re.compile(r"0[xX][0-9a-fA-F]+")
_LEADING_INT_RE: Final[re.Pattern[str]] = re.compile(r"([+-]?)(0[xX][0-9a-fA-F]+|[0-9]+)")
_NUMERIC_FIELDS: Final[tuple[str, ...]] = ("line", "column", "severity")


def _is_finite_number(text: str) -> bool:
    """Return ``True`` when ``text`` as a whole denotes a finite number."""

    if _HEX_RE.fullmatch(text):
        return True
    if "_" in text:
        return False
    try:
        return math.isfinite(float(text))
    except ValueError:
        return False


def _parse_int(value: str | None) -> int | None:
    """Return the integer prefix of a numeric field, or ``None`` when it is not numeric.

    The field must denote a finite number (decimal, fractional, exponent or hex
    notation). Its value is the leading integer: ``"3.9"`` and ``"3e2"`` give 3.
    """

    if value is None:
        return None
    text = value.strip()
    if not _is_finite_number(text):
        return None
    match = _LEADING_INT_RE.match(text)
    if match is None:
        return None
    sign, digits = match.groups()
    number = int(digits, 16) if _HEX_RE.fullmatch(digits) else int(digits)
    return -number if sign == "-" else number


def _describe_invalid(fields: RecordFields, invalid: list[str]) -> str:
    details = ", ".join(f"{name}={getattr(fields, name)!r}" for name in invalid)
    return f"expected numeric {'/'.join(invalid)} ({details})"


def parse_record(record: str, *, reader: RecordReader = DEFAULT_READER) -> Finding | RecordError | None:
    """Parse one cleaned record.

    Args:
        record: Record text already trimmed and stripped of ANSI sequences.
        reader: Record reader describing the field layout.

    Returns:
        Finding | RecordError | None: The finding, an error describing a
        malformed record, or ``None`` when the record is blank or reports a
        zero severity.
    """

    if not record.strip():
        return None

    fields = reader.fields(record)
    line = _parse_int(fields.line)
    column = _parse_int(fields.column)
    severity = _parse_int(fields.severity)
    if line is None or column is None or severity is None:
        invalid = [name for name, value in zip(_NUMERIC_FIELDS, (line, column, severity)) if value is None]
        return RecordError(reason=_describe_invalid(fields, invalid), record=record)

    if severity == 0:
        LOGGER.debug("skipping zero-severity record: %s", record)
        return None

    return Finding(
        line=max(line - 1, 0),
        column=max(column - 1, 0),
        severity_rank=max(severity - 1, 0),
        summary=(fields.summary or "").strip(),
        explanation=(fields.explanation or "").strip(),
    )


def format_error_message(error: RecordError) -> str:
    """Return the user-facing message reported for a malformed record."""

    return f"{FORMAT_ERROR_PREFIX}: {error.reason}: {error.record}"


def parse(stdout: str, stderr: str | None = None, *, reader: RecordReader = DEFAULT_READER) -> ParseResult:
    """Parse perlcritic output captured from a single invocation.

    Any text on ``stderr`` means the invocation itself failed and is returned
    verbatim. Otherwise every record must carry numeric line, column and
    severity fields; the first record that does not aborts the parse and no
    findings are returned. Records with severity ``0`` and blank records are
    skipped silently.

    Args:
        stdout: Complete standard output of the perlcritic process.
        stderr: Complete standard error of the perlcritic process.
        reader: Record reader describing the output layout.

    Returns:
        ParseResult: Either every emitted finding in order, or one failure.
    """

    if stderr:
        return ParseFailure(message=stderr, kind=FailureKind.INVOCATION)
    if not stdout:
        return ParseSuccess()

    findings: list[Finding] = []
    for record in reader.iter_records(stdout):
        outcome = parse_record(record, reader=reader)
        if isinstance(outcome, RecordError):
            LOGGER.debug("malformed perlcritic record after %d finding(s): %s", len(findings), record)
            return ParseFailure(message=format_error_message(outcome), kind=FailureKind.FORMAT)
        if outcome is not None:
            findings.append(outcome)

    LOGGER.debug("parsed %d perlcritic finding(s)", len(findings))
    return ParseSuccess(findings=tuple(findings))


def parse_process_output(output: ProcessOutput, *, reader: RecordReader = DEFAULT_READER) -> ParseResult:
    """Parse the streams captured by :func:`perlcritic_shim.runtime.process.run_command`."""

    return parse(output.stdout, output.stderr, reader=reader)


__all__ = [
    "FORMAT_ERROR_PREFIX",
    "format_error_message",
    "parse",
    "parse_process_output",
    "parse_record",
]
