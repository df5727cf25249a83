# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Convert parsed findings into editor diagnostics."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

from ..core.models import Finding
from ..core.severity import DiagnosticSeverity
from .models import MAX_COLUMN, Diagnostic, DiagnosticRelatedInformation, Location, Position, Range

DEFAULT_SOURCE: Final[str] = "perlcritic"
_POLICY_NAME_RE: Final[re.Pattern[str]] = re.compile(r"[A-Za-z_]\w*(?:::\w+)+")


@dataclass(frozen=True, slots=True)
class MapperOptions:
    """Presentation choices applied when building diagnostics.

    Attributes:
        document_uri: URI of the validated document; required for related information.
        related_information: Whether the client accepts ``relatedInformation`` payloads.
            Without a ``document_uri`` the explanation is inlined in the message instead.
        inline_explanation: Append the explanation to the message when it is not
            attached as related information.
        source: Name reported as the diagnostic source.
    """

    document_uri: str | None = None
    related_information: bool = False
    inline_explanation: bool = False
    source: str = DEFAULT_SOURCE


def finding_range(finding: Finding) -> Range:
    """Return the range from the finding's position to the end of its line."""

    return Range(
        start=Position(line=finding.line, character=finding.column),
        end=Position(line=finding.line, character=MAX_COLUMN),
    )


def policy_code(explanation: str) -> str | None:
    """Return ``explanation`` when it is a ``Perl::Critic`` style policy name."""

    candidate = explanation.strip()
    if _POLICY_NAME_RE.fullmatch(candidate):
        return candidate
    return None


def to_diagnostic(finding: Finding, options: MapperOptions) -> Diagnostic:
    """Build the diagnostic presented for a single finding.

    Args:
        finding: Validated finding produced by the parse engine.
        options: Presentation options negotiated for the session.

    Returns:
        Diagnostic: Warning-level diagnostic anchored at the finding.
    """

    span = finding_range(finding)
    related: tuple[DiagnosticRelatedInformation, ...] | None = None
    message = finding.summary
    if options.related_information and options.document_uri is not None:
        related = (
            DiagnosticRelatedInformation(
                location=Location(uri=options.document_uri, range=span),
                message=finding.explanation,
            ),
        )
    elif (options.inline_explanation or options.related_information) and finding.explanation:
        message = f"{finding.summary}.\n\n> {finding.explanation}"

    return Diagnostic(
        range=span,
        severity=DiagnosticSeverity.WARNING,
        message=message,
        source=options.source,
        code=policy_code(finding.explanation),
        related_information=related,
    )


def to_diagnostics(findings: Iterable[Finding], *, options: MapperOptions | None = None) -> list[Diagnostic]:
    """Map ``findings`` one-to-one onto diagnostics, preserving order.

    Args:
        findings: Findings produced by :func:`perlcritic_shim.parsers.parse`.
        options: Presentation options; defaults to plain warnings without
            related information.

    Returns:
        list[Diagnostic]: One diagnostic per finding.
    """

    resolved = options or MapperOptions()
    return [to_diagnostic(finding, resolved) for finding in findings]


__all__ = [
    "DEFAULT_SOURCE",
    "MapperOptions",
    "finding_range",
    "policy_code",
    "to_diagnostic",
    "to_diagnostics",
]
