# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for mapping findings onto editor diagnostics."""

from __future__ import annotations

from perlcritic_shim.core.models import Finding
from perlcritic_shim.core.severity import DiagnosticSeverity
from perlcritic_shim.diagnostics.mapper import MapperOptions, policy_code, to_diagnostics
from perlcritic_shim.diagnostics.models import MAX_COLUMN, Position

URI = "file:///work/lib/Foo.pm"


def _finding(line: int = 0, column: int = 0, summary: str = "msg", explanation: str = "Pol::Name") -> Finding:
    return Finding(line=line, column=column, severity_rank=4, summary=summary, explanation=explanation)


def test_mapping_preserves_length_and_order() -> None:
    findings = [_finding(line=index, summary=f"m{index}") for index in (4, 0, 9, 2)]
    diagnostics = to_diagnostics(findings)
    assert len(diagnostics) == len(findings)
    assert [diag.message for diag in diagnostics] == ["m4", "m0", "m9", "m2"]
    assert [diag.range.start.line for diag in diagnostics] == [4, 0, 9, 2]


def test_empty_input_yields_no_diagnostics() -> None:
    assert to_diagnostics([]) == []


def test_diagnostic_is_a_warning_underlining_to_end_of_line() -> None:
    (diagnostic,) = to_diagnostics([_finding(line=1, column=4, summary="Bad thing", explanation="Policy::Name")])
    assert diagnostic.severity is DiagnosticSeverity.WARNING
    assert diagnostic.range.start == Position(line=1, character=4)
    assert diagnostic.range.end == Position(line=1, character=MAX_COLUMN)
    assert diagnostic.message == "Bad thing"
    assert diagnostic.source == "perlcritic"
    assert diagnostic.code == "Policy::Name"
    assert diagnostic.related_information is None


def test_severity_rank_does_not_change_the_editor_severity() -> None:
    findings = [
        Finding(line=0, column=0, severity_rank=rank, summary="m", explanation="e") for rank in range(5)
    ]
    assert {diag.severity for diag in to_diagnostics(findings)} == {DiagnosticSeverity.WARNING}


def test_related_information_requires_capability_and_uri() -> None:
    finding = _finding(line=3, column=2, explanation="Subroutines::ProhibitExplicitReturnUndef")

    (plain,) = to_diagnostics([finding], options=MapperOptions(document_uri=URI))
    assert plain.related_information is None

    (no_uri,) = to_diagnostics([finding], options=MapperOptions(related_information=True))
    assert no_uri.related_information is None
    assert no_uri.message == "msg.\n\n> Subroutines::ProhibitExplicitReturnUndef"

    (rich,) = to_diagnostics([finding], options=MapperOptions(document_uri=URI, related_information=True))
    assert rich.related_information is not None
    (related,) = rich.related_information
    assert related.message == "Subroutines::ProhibitExplicitReturnUndef"
    assert related.location.uri == URI
    assert related.location.range == rich.range
    assert rich.message == finding.summary


def test_inline_explanation_appends_to_message() -> None:
    finding = _finding(summary="Code before strictures are enabled", explanation="See page 429 of PBP")
    (diagnostic,) = to_diagnostics([finding], options=MapperOptions(inline_explanation=True))
    assert diagnostic.message == "Code before strictures are enabled.\n\n> See page 429 of PBP"


def test_inline_explanation_is_not_used_with_related_information() -> None:
    options = MapperOptions(document_uri=URI, related_information=True, inline_explanation=True)
    (diagnostic,) = to_diagnostics([_finding(summary="short")], options=options)
    assert diagnostic.message == "short"


def test_custom_source_name() -> None:
    (diagnostic,) = to_diagnostics([_finding()], options=MapperOptions(source="perl"))
    assert diagnostic.source == "perl"


def test_policy_code_detection() -> None:
    assert policy_code("Perl::Critic::Policy::Variables::ProhibitPunctuationVars") is not None
    assert policy_code("  Modules::RequireVersionVar ") == "Modules::RequireVersionVar"
    assert policy_code("See page 208 of PBP") is None
    assert policy_code("") is None
    assert policy_code("Single") is None


def test_payload_uses_protocol_field_names() -> None:
    options = MapperOptions(document_uri=URI, related_information=True)
    (diagnostic,) = to_diagnostics([_finding(line=2, column=1)], options=options)
    payload = diagnostic.to_payload()
    assert payload["severity"] == 2
    assert payload["range"] == {
        "start": {"line": 2, "character": 1},
        "end": {"line": 2, "character": MAX_COLUMN},
    }
    assert payload["relatedInformation"][0]["location"]["uri"] == URI
    assert "related_information" not in payload


def test_payload_omits_absent_fields() -> None:
    (diagnostic,) = to_diagnostics([_finding(explanation="no policy here")])
    payload = diagnostic.to_payload()
    assert "code" not in payload
    assert "relatedInformation" not in payload
