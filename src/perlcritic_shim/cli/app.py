# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring the validation pipeline to the terminal."""

from __future__ import annotations

import sys
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Final, Optional

import typer
from rich.console import Console

from ..config import ConfigError, PerlCriticSettings, SettingsStore, load_settings
from ..core.models import ParseFailure
from ..core.severity import PerlCriticSeverity
from ..diagnostics.mapper import MapperOptions, to_diagnostics
from ..parsers.engine import parse
from ..runtime.process import format_command
from ..service import CycleStatus, TextDocument, ValidationService
from .publishers import CLINotifier, ConsolePublisher, JsonLinesPublisher
from .shared import CLIError, CLILogger, build_cli_logger

EXIT_CLEAN: Final[int] = 0
EXIT_VIOLATIONS: Final[int] = 1
EXIT_ERROR: Final[int] = 2
STDIN_MARKER: Final[str] = "-"
STDIN_URI: Final[str] = "untitled:stdin"


class OutputFormat(str, Enum):
    """Rendering used for published diagnostics."""

    TEXT = "text"
    JSON = "json"


app = typer.Typer(
    help="Run Perl::Critic on a document and report its findings as editor diagnostics.",
    no_args_is_help=True,
    add_completion=False,
)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="TOML settings file (pyproject.toml reads [tool.perlcritic-shim])."),
]
SeverityOption = Annotated[
    Optional[PerlCriticSeverity],
    typer.Option("--severity", "-s", help="Severity threshold passed to perlcritic.", case_sensitive=False),
]
ExecutableOption = Annotated[Optional[str], typer.Option("--executable", help="perlcritic executable name or path.")]
FormatOption = Annotated[OutputFormat, typer.Option("--format", "-f", help="Diagnostics output format.")]
RelatedOption = Annotated[
    bool,
    typer.Option("--related/--no-related", help="Attach the explanation as related information."),
]
NoEmojiOption = Annotated[bool, typer.Option("--no-emoji", help="Disable emoji in messages.")]
NoColorOption = Annotated[bool, typer.Option("--no-color", help="Disable coloured output.")]
DebugOption = Annotated[bool, typer.Option("--debug", help="Log debug details to stderr.")]


def _resolve_settings(
    config: Path | None,
    *,
    severity: PerlCriticSeverity | None,
    executable: str | None,
) -> PerlCriticSettings:
    """Load settings from ``config`` and apply command-line overrides."""

    try:
        settings = load_settings(config) if config is not None else PerlCriticSettings()
    except ConfigError as exc:
        raise CLIError(str(exc)) from exc
    updates: dict[str, Any] = {}
    if severity is not None:
        updates["severity"] = severity
    if executable:
        updates["executable"] = executable
    return settings.model_copy(update=updates) if updates else settings


def _warn_dropped_arguments(settings: PerlCriticSettings, logger: CLILogger) -> None:
    kept = set(settings.filtered_arguments())
    dropped = [arg for arg in settings.additional_arguments if arg and arg not in kept]
    if dropped:
        logger.warn(f"ignoring output-altering perlcritic arguments: {' '.join(dropped)}")


def _read_document(path: str) -> TextDocument:
    """Return the document named by ``path``; ``-`` reads stdin."""

    if path == STDIN_MARKER:
        return TextDocument(uri=STDIN_URI, text=sys.stdin.read())
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CLIError(f"cannot read {path}: {exc}") from exc
    return TextDocument(uri=file_path.resolve().as_uri(), text=text)


def _publisher_for(output_format: OutputFormat, *, no_color: bool) -> ConsolePublisher | JsonLinesPublisher:
    if output_format is OutputFormat.JSON:
        return JsonLinesPublisher()
    return ConsolePublisher(console=Console(no_color=no_color, highlight=False))


def _exit_with(error: CLIError, logger: CLILogger) -> typer.Exit:
    logger.fail(str(error))
    return typer.Exit(code=error.exit_code)


@app.command("check")
def check_command(
    path: Annotated[str, typer.Argument(help="Perl file to critique, or '-' to read stdin.")],
    config: ConfigOption = None,
    severity: SeverityOption = None,
    executable: ExecutableOption = None,
    output_format: FormatOption = OutputFormat.TEXT,
    related: RelatedOption = False,
    no_emoji: NoEmojiOption = False,
    no_color: NoColorOption = False,
    debug: DebugOption = False,
) -> None:
    """Run perlcritic on PATH and print its diagnostics.

    Exits 0 when clean, 1 when violations were reported and 2 on errors.
    """

    logger = build_cli_logger(emoji=not no_emoji, debug=debug, no_color=no_color)
    try:
        settings = _resolve_settings(config, severity=severity, executable=executable)
        document = _read_document(path)
    except CLIError as exc:
        raise _exit_with(exc, logger) from exc
    _warn_dropped_arguments(settings, logger)

    logger.debug(f"command={format_command([settings.executable, *settings.build_arguments()])}")
    publisher = _publisher_for(output_format, no_color=no_color)
    with ValidationService(
        settings=SettingsStore(settings),
        publisher=publisher,
        notifier=CLINotifier(logger),
        related_information=related,
        max_workers=1,
    ) as service:
        report = service.validate(document)

    if report.status is not CycleStatus.PUBLISHED:
        raise typer.Exit(code=EXIT_ERROR)
    raise typer.Exit(code=EXIT_VIOLATIONS if report.diagnostics else EXIT_CLEAN)


@app.command("parse")
def parse_command(
    source: Annotated[
        Optional[Path],
        typer.Argument(help="File holding captured perlcritic output; stdin when omitted."),
    ] = None,
    output_format: FormatOption = OutputFormat.TEXT,
    inline_explanation: Annotated[
        bool,
        typer.Option("--inline-explanation", help="Append the explanation to each message."),
    ] = False,
    no_emoji: NoEmojiOption = False,
    no_color: NoColorOption = False,
    debug: DebugOption = False,
) -> None:
    """Parse already captured perlcritic output and print the diagnostics it describes."""

    logger = build_cli_logger(emoji=not no_emoji, debug=debug, no_color=no_color)
    if source is None:
        text, uri = sys.stdin.read(), STDIN_URI
    else:
        try:
            text, uri = source.read_text(encoding="utf-8"), source.resolve().as_uri()
        except (OSError, UnicodeDecodeError) as exc:
            raise _exit_with(CLIError(f"cannot read {source}: {exc}"), logger) from exc

    result = parse(text)
    if isinstance(result, ParseFailure):
        raise _exit_with(CLIError(result.message), logger)
    logger.debug(f"findings={len(result.findings)}")
    diagnostics = to_diagnostics(
        result.findings,
        options=MapperOptions(document_uri=uri, inline_explanation=inline_explanation),
    )
    _publisher_for(output_format, no_color=no_color).publish(uri, diagnostics)


@app.command("arguments")
def arguments_command(
    config: ConfigOption = None,
    severity: SeverityOption = None,
    executable: ExecutableOption = None,
    no_emoji: NoEmojiOption = False,
) -> None:
    """Print the perlcritic command line assembled from the settings."""

    logger = build_cli_logger(emoji=not no_emoji)
    try:
        settings = _resolve_settings(config, severity=severity, executable=executable)
    except CLIError as exc:
        raise _exit_with(exc, logger) from exc
    _warn_dropped_arguments(settings, logger)
    logger.echo(format_command([settings.executable, *settings.build_arguments()]))


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["OutputFormat", "app", "main"]
