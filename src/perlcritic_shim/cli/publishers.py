# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Terminal implementations of the diagnostics publisher and notifier."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from ..diagnostics.models import Diagnostic
from .shared import CLILogger


@dataclass(slots=True)
class ConsolePublisher:
    """Render each published diagnostic set as a Rich table."""

    console: Console
    published: int = 0

    def publish(self, document_uri: str, diagnostics: Sequence[Diagnostic]) -> None:
        """Print ``diagnostics`` for ``document_uri``."""

        self.published += len(diagnostics)
        if not diagnostics:
            self.console.print(f"[green]No perlcritic violations[/green] in {document_uri}")
            return
        table = Table(title=document_uri, box=box.SIMPLE, expand=True)
        table.add_column("Line", justify="right", style="bold")
        table.add_column("Col", justify="right")
        table.add_column("Policy", style="cyan", overflow="fold")
        table.add_column("Message", overflow="fold")
        for diagnostic in diagnostics:
            start = diagnostic.range.start
            table.add_row(
                str(start.line + 1),
                str(start.character + 1),
                diagnostic.code or "",
                diagnostic.message,
            )
        self.console.print(table)


@dataclass(slots=True)
class JsonLinesPublisher:
    """Write one JSON object per published diagnostic set to stdout."""

    published: int = 0

    def publish(self, document_uri: str, diagnostics: Sequence[Diagnostic]) -> None:
        """Echo ``{"uri": ..., "diagnostics": [...]}`` as a single line."""

        self.published += len(diagnostics)
        payload = {"uri": document_uri, "diagnostics": [diagnostic.to_payload() for diagnostic in diagnostics]}
        typer.echo(json.dumps(payload, sort_keys=True))


@dataclass(slots=True)
class CLINotifier:
    """Forward validation errors to the CLI logger."""

    logger: CLILogger

    def show_error(self, message: str) -> None:
        """Report ``message`` as a failure."""

        self.logger.fail(message)


__all__ = ["CLINotifier", "ConsolePublisher", "JsonLinesPublisher"]
