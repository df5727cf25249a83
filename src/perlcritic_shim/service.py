# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Validation cycles: run perlcritic on a document and publish its diagnostics.

Every cycle is tagged with a sequence number tracked per document. A cycle only
publishes when it is still the newest one for its document, so a slow run that
finishes after a newer one never overwrites fresher diagnostics.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from itertools import count
from threading import Lock
from types import TracebackType
from typing import Any

from .config import ConfigError, PerlCriticSettings, SettingsStore
from .core.models import ParseFailure
from .diagnostics.mapper import MapperOptions, to_diagnostics
from .diagnostics.models import Diagnostic
from .interfaces import DiagnosticsPublisher, MessageNotifier, ProcessRunner, SettingsProvider
from .parsers.engine import parse_process_output
from .runtime.process import CommandOptions, SubprocessRunner

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TextDocument:
    """Snapshot of an open document."""

    uri: str
    text: str
    version: int | None = None


class CycleStatus(str, Enum):
    """Final state of a validation cycle."""

    PUBLISHED = "published"
    FAILED = "failed"
    STALE = "stale"


@dataclass(frozen=True, slots=True)
class CycleReport:
    """Describe what a validation cycle did."""

    uri: str
    sequence: int
    status: CycleStatus
    diagnostics: tuple[Diagnostic, ...] = field(default_factory=tuple)
    error: str | None = None


class SequenceTracker:
    """Hand out monotonic sequence numbers and remember the newest per document.

    Numbers come from one counter shared by all documents, so a number is never
    reissued after a document is forgotten and reopened.
    """

    def __init__(self) -> None:
        self._latest: dict[str, int] = {}
        self._counter = count(1)
        self._lock = Lock()

    def next(self, uri: str) -> int:
        """Return a new sequence number for ``uri``; it becomes the current one."""

        with self._lock:
            sequence = next(self._counter)
            self._latest[uri] = sequence
            return sequence

    def is_current(self, uri: str, sequence: int) -> bool:
        """Return ``True`` when ``sequence`` is the newest number issued for ``uri``."""

        with self._lock:
            return self._latest.get(uri) == sequence

    def invalidate(self, uri: str) -> None:
        """Forget ``uri`` so every outstanding sequence number for it is stale."""

        with self._lock:
            self._latest.pop(uri, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._latest)


class ValidationService:
    """Run validation cycles for documents and publish their outcome.

    Args:
        settings: Provider of the current settings snapshot.
        publisher: Receives the diagnostics of each successful cycle.
        notifier: Receives the message of each failed cycle.
        runner: Process runner; defaults to a subprocess runner honouring the
            configured timeout.
        related_information: Whether the client accepts related information.
        clear_on_error: Publish an empty diagnostic list when a cycle fails
            instead of leaving the previous diagnostics in place.
        max_workers: Worker threads used by :meth:`submit`.
    """

    def __init__(
        self,
        *,
        settings: SettingsProvider,
        publisher: DiagnosticsPublisher,
        notifier: MessageNotifier,
        runner: ProcessRunner | None = None,
        related_information: bool = False,
        clear_on_error: bool = False,
        max_workers: int = 4,
    ) -> None:
        self._settings = settings
        self._publisher = publisher
        self._notifier = notifier
        self._runner = runner
        self._related_information = related_information
        self._clear_on_error = clear_on_error
        self._tracker = SequenceTracker()
        self._publish_lock = Lock()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="perlcritic-shim")

    def _runner_for(self, settings: PerlCriticSettings) -> ProcessRunner:
        if self._runner is not None:
            return self._runner
        return SubprocessRunner(options=CommandOptions(timeout=settings.timeout))

    def validate(self, document: TextDocument) -> CycleReport:
        """Run one validation cycle for ``document`` on the calling thread.

        Args:
            document: Document snapshot to validate.

        Returns:
            CycleReport: Outcome of the cycle.
        """

        sequence = self._tracker.next(document.uri)
        settings = self._settings()
        command = [settings.executable, *settings.build_arguments()]
        output = self._runner_for(settings)(command, input_text=document.text)
        result = parse_process_output(output)

        if isinstance(result, ParseFailure):
            return self._finish_failure(document.uri, sequence, result.message)

        options = MapperOptions(document_uri=document.uri, related_information=self._related_information)
        diagnostics = tuple(to_diagnostics(result.findings, options=options))
        with self._publish_lock:
            if not self._tracker.is_current(document.uri, sequence):
                return self._stale(document.uri, sequence)
            self._publisher.publish(document.uri, diagnostics)
        return CycleReport(uri=document.uri, sequence=sequence, status=CycleStatus.PUBLISHED, diagnostics=diagnostics)

    def _finish_failure(self, uri: str, sequence: int, message: str) -> CycleReport:
        with self._publish_lock:
            if not self._tracker.is_current(uri, sequence):
                return self._stale(uri, sequence)
            if self._clear_on_error:
                self._publisher.publish(uri, ())
        self._notifier.show_error(message)
        return CycleReport(uri=uri, sequence=sequence, status=CycleStatus.FAILED, error=message)

    @staticmethod
    def _stale(uri: str, sequence: int) -> CycleReport:
        LOGGER.debug("discarding stale validation cycle uri=%s sequence=%d", uri, sequence)
        return CycleReport(uri=uri, sequence=sequence, status=CycleStatus.STALE)

    def submit(self, document: TextDocument) -> Future[CycleReport]:
        """Schedule a validation cycle for ``document`` on the worker pool."""

        future = self._executor.submit(self.validate, document)
        future.add_done_callback(_log_cycle_exception)
        return future

    def did_change(self, document: TextDocument) -> Future[CycleReport] | None:
        """Handle a content change; skipped when validation runs on save only."""

        if self._settings().on_save:
            return None
        return self.submit(document)

    def did_save(self, document: TextDocument) -> Future[CycleReport]:
        """Handle a document save."""

        return self.submit(document)

    def did_close(self, uri: str) -> None:
        """Clear the diagnostics of a closed document and drop its in-flight cycles."""

        with self._publish_lock:
            self._tracker.invalidate(uri)
            self._publisher.publish(uri, ())

    def did_change_configuration(
        self,
        payload: Mapping[str, Any] | None,
        documents: Iterable[TextDocument],
    ) -> list[Future[CycleReport]]:
        """Apply new settings and revalidate every open document.

        Args:
            payload: Settings payload sent by the editor.
            documents: Documents currently open in the editor.

        Returns:
            list[Future[CycleReport]]: One scheduled cycle per document; empty
            when the payload is invalid.
        """

        if not isinstance(self._settings, SettingsStore):
            raise TypeError("configuration updates require a SettingsStore settings provider")
        try:
            self._settings.update(payload)
        except ConfigError as exc:
            self._notifier.show_error(str(exc))
            return []
        return [self.submit(document) for document in documents]

    def shutdown(self, *, wait: bool = True) -> None:
        """Stop the worker pool."""

        self._executor.shutdown(wait=wait)

    def __enter__(self) -> ValidationService:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.shutdown()


def _log_cycle_exception(future: Future[CycleReport]) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        LOGGER.error("validation cycle raised %s: %s", type(exc).__name__, exc)


__all__ = [
    "CycleReport",
    "CycleStatus",
    "SequenceTracker",
    "TextDocument",
    "ValidationService",
]
