# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import logging
import shlex

# Bandit: subprocess usage is intentional; arguments are passed as a list and
# ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .executable import ExecutableNotFoundError, resolve_executable

LOGGER = logging.getLogger(__name__)

TIMEOUT_RETURNCODE: Final[int] = 124
SPAWN_FAILURE_RETURNCODE: Final[int] = 127


@dataclass(frozen=True, slots=True)
class ProcessOutput:
    """Complete streams captured from one process invocation."""

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str


@dataclass(slots=True)
class CommandOptions:
    """Command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    timeout: float | None = None


def _ensure_text(value: str | bytes | None) -> str:
    """Return ``value`` decoded to text; ``None`` becomes an empty string."""

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.decode("utf-8", errors="replace")


def format_command(command: Sequence[str]) -> str:
    """Return a shell-friendly representation of ``command``."""

    return shlex.join(command)


def run_command(
    args: Sequence[str],
    *,
    input_text: str = "",
    options: CommandOptions | None = None,
) -> ProcessOutput:
    """Run ``args``, feed ``input_text`` on stdin and capture both streams.

    Failures to start the process are reported through ``stderr`` instead of
    raising, so callers handle them like any other invocation error. A non-zero
    exit status is not treated as a failure. Output is decoded as UTF-8 with
    undecodable bytes replaced.

    Args:
        args: Executable followed by its arguments.
        input_text: Text written to the process's standard input.
        options: Base options configuring execution.

    Returns:
        ProcessOutput: Complete stdout and stderr with the exit status.

    Raises:
        ValueError: If ``args`` is empty.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")
    resolved_options = options or CommandOptions()
    head, *rest = args

    try:
        command = [resolve_executable(head), *rest]
    except ExecutableNotFoundError as exc:
        LOGGER.debug("cannot run %s: %s", head, exc)
        return ProcessOutput(args=tuple(args), returncode=SPAWN_FAILURE_RETURNCODE, stdout="", stderr=str(exc))

    LOGGER.debug("running command=%s", format_command(command))
    try:
        completed = subprocess.run(  # nosec B603 - argument list, no shell
            command,
            input=input_text,
            cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
            env=dict(resolved_options.env) if resolved_options.env is not None else None,
            check=False,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            timeout=resolved_options.timeout,
        )
    except subprocess.TimeoutExpired as exc:
        stderr = _ensure_text(exc.stderr)
        timeout_msg = f"Command timed out after {resolved_options.timeout:.1f}s"
        return ProcessOutput(
            args=tuple(command),
            returncode=TIMEOUT_RETURNCODE,
            stdout=_ensure_text(exc.stdout),
            stderr=f"{stderr}\n{timeout_msg}" if stderr else timeout_msg,
        )
    except OSError as exc:
        LOGGER.debug("failed to start command=%s: %s", format_command(command), exc)
        return ProcessOutput(args=tuple(command), returncode=SPAWN_FAILURE_RETURNCODE, stdout="", stderr=str(exc))

    LOGGER.debug("command exited returncode=%d", completed.returncode)
    return ProcessOutput(
        args=tuple(command),
        returncode=completed.returncode,
        stdout=_ensure_text(completed.stdout),
        stderr=_ensure_text(completed.stderr),
    )


@dataclass(frozen=True, slots=True)
class SubprocessRunner:
    """Process runner backed by :func:`run_command`."""

    options: CommandOptions | None = None

    def __call__(self, args: Sequence[str], *, input_text: str) -> ProcessOutput:
        """Run ``args`` with ``input_text`` on stdin using the configured options."""

        return run_command(args, input_text=input_text, options=self.options)


__all__ = [
    "CommandOptions",
    "ProcessOutput",
    "SubprocessRunner",
    "format_command",
    "run_command",
]
