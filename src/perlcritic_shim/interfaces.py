# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Protocols describing the collaborators of a validation cycle."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from .config import PerlCriticSettings
from .diagnostics.models import Diagnostic
from .runtime.process import ProcessOutput


@runtime_checkable
class ProcessRunner(Protocol):
    """Run an executable with the document text on stdin."""

    __slots__ = ()

    @abstractmethod
    def __call__(self, args: Sequence[str], *, input_text: str) -> ProcessOutput:
        """Run ``args`` and return both captured streams.

        Args:
            args: Executable followed by its arguments.
            input_text: Text written to the process's standard input.

        Returns:
            ProcessOutput: Complete stdout and stderr of the process.
        """


@runtime_checkable
class SettingsProvider(Protocol):
    """Return the current settings snapshot."""

    __slots__ = ()

    @abstractmethod
    def __call__(self) -> PerlCriticSettings:
        """Return the settings in effect for the next validation cycle."""


@runtime_checkable
class DiagnosticsPublisher(Protocol):
    """Replace the diagnostics shown for a document."""

    __slots__ = ()

    @abstractmethod
    def publish(self, document_uri: str, diagnostics: Sequence[Diagnostic]) -> None:
        """Publish ``diagnostics`` for ``document_uri``, replacing earlier ones.

        Args:
            document_uri: URI identifying the document.
            diagnostics: Complete set of diagnostics for the document.
        """


@runtime_checkable
class MessageNotifier(Protocol):
    """Surface user-facing error messages."""

    __slots__ = ()

    @abstractmethod
    def show_error(self, message: str) -> None:
        """Display ``message`` to the user.

        Args:
            message: Error text describing a failed validation cycle.
        """


__all__ = [
    "DiagnosticsPublisher",
    "MessageNotifier",
    "ProcessRunner",
    "SettingsProvider",
]
