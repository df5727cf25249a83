# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate the perlcritic executable and remember the last validated path."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from threading import Lock

LOGGER = logging.getLogger(__name__)


class ExecutableNotFoundError(FileNotFoundError):
    """Raised when an executable cannot be resolved."""

    def __init__(self, name: str) -> None:
        """Initialise the error for the executable ``name``.

        Args:
            name: Executable name or path that failed to resolve.
        """

        super().__init__(f"Executable '{name}' was not found on PATH")
        self.name = name


class ExecutableResolver:
    """Resolve executables on ``PATH``, caching successful lookups per name."""

    def __init__(self) -> None:
        """Initialise an empty resolver cache."""

        self._cache: dict[str, str] = {}
        self._lock = Lock()

    def resolve(self, name: str) -> str:
        """Return the absolute path of ``name``.

        Args:
            name: Executable name or path.

        Returns:
            str: Absolute path of the executable.

        Raises:
            ExecutableNotFoundError: If ``name`` is not executable or not on ``PATH``.
        """

        with self._lock:
            cached = self._cache.get(name)
        if cached is not None and Path(cached).exists():
            return cached

        resolved = shutil.which(name)
        if resolved is None:
            raise ExecutableNotFoundError(name)
        LOGGER.debug("resolved executable %s -> %s", name, resolved)
        with self._lock:
            self._cache[name] = resolved
        return resolved

    def clear(self) -> None:
        """Forget every cached lookup."""

        with self._lock:
            self._cache.clear()


_DEFAULT_RESOLVER = ExecutableResolver()


def resolve_executable(name: str) -> str:
    """Resolve ``name`` with the process-wide resolver."""

    return _DEFAULT_RESOLVER.resolve(name)


def clear_executable_cache() -> None:
    """Reset the process-wide resolver cache."""

    _DEFAULT_RESOLVER.clear()


__all__ = [
    "ExecutableNotFoundError",
    "ExecutableResolver",
    "clear_executable_cache",
    "resolve_executable",
]
