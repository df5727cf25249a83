# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Record reader for perlcritic's delimiter-based ``--verbose`` output.

perlcritic is asked to print every violation through a custom template. The
template separates positional fields with ``[>]`` and terminates each record
with ``[[END]]``; neither marker can be escaped, so everything that knows about
the layout lives in this module.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Final, NamedTuple

END_OF_RECORD: Final[str] = "[[END]]"
FIELD_SEPARATOR: Final[str] = "[>]"
FIELD_COUNT: Final[int] = 5

# line, column, severity, "message. explanation (policy)", diagnostic name
VERBOSE_FORMAT: Final[str] = FIELD_SEPARATOR.join(("%l", "%c", "%s", "%m. %e (%p)", "%d")) + END_OF_RECORD
VERBOSE_TEMPLATE: Final[str] = f"--verbose={VERBOSE_FORMAT}"

ANSI_ESCAPE_RE: Final[re.Pattern[str]] = re.compile(
    r"[\x1b\x9b][\[()#;?]*(?:[0-9]{1,4}(?:;[0-9]{0,4})*)?[0-9A-ORZcf-nqry=><]",
)


class RecordFields(NamedTuple):
    """Positional fields of one record; trailing fields absent from the record are ``None``."""

    line: str | None
    column: str | None
    severity: str | None
    summary: str | None
    explanation: str | None


def strip_ansi(text: str) -> str:
    """Return ``text`` without ANSI CSI escape sequences."""

    return ANSI_ESCAPE_RE.sub("", text)


@dataclass(frozen=True, slots=True)
class RecordReader:
    """Split raw tool output into records and records into positional fields.

    Attributes:
        end_marker: Literal token terminating each record.
        separator: Literal token separating fields within a record.
    """

    end_marker: str = END_OF_RECORD
    separator: str = FIELD_SEPARATOR

    def split(self, output: str) -> list[str]:
        """Return the raw records contained in ``output``.

        Args:
            output: Complete standard output captured from perlcritic.

        Returns:
            list[str]: Unprocessed segments between end-of-record markers,
            including the (usually blank) segment after the final marker.
        """

        return output.split(self.end_marker)

    @staticmethod
    def clean(record: str) -> str:
        """Trim ``record`` and remove ANSI colouring from it.

        Args:
            record: Raw record text as produced by :meth:`split`.

        Returns:
            str: Cleaned record text, empty when nothing but whitespace or
            escape sequences remained.
        """

        return strip_ansi(record.strip()).strip()

    def fields(self, record: str) -> RecordFields:
        """Split a cleaned record into its five positional fields.

        Fields past the fifth are ignored; missing trailing fields are ``None``.

        Args:
            record: Record text previously passed through :meth:`clean`.

        Returns:
            RecordFields: Positional field values.
        """

        parts: list[str | None] = list(record.split(self.separator)[:FIELD_COUNT])
        parts.extend([None] * (FIELD_COUNT - len(parts)))
        return RecordFields(*parts)

    def iter_records(self, output: str) -> Iterator[str]:
        """Yield cleaned, non-blank records from ``output`` in order.

        Args:
            output: Complete standard output captured from perlcritic.

        Yields:
            str: Cleaned record text.
        """

        for raw in self.split(output):
            cleaned = self.clean(raw)
            if cleaned:
                yield cleaned


DEFAULT_READER: Final[RecordReader] = RecordReader()


__all__ = [
    "ANSI_ESCAPE_RE",
    "DEFAULT_READER",
    "END_OF_RECORD",
    "FIELD_COUNT",
    "FIELD_SEPARATOR",
    "RecordFields",
    "RecordReader",
    "VERBOSE_FORMAT",
    "VERBOSE_TEMPLATE",
    "strip_ansi",
]
