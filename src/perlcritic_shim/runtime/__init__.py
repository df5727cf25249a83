# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Process execution and executable lookup."""

from __future__ import annotations

from .executable import ExecutableNotFoundError, ExecutableResolver, clear_executable_cache, resolve_executable
from .process import CommandOptions, ProcessOutput, SubprocessRunner, format_command, run_command

__all__ = [
    "CommandOptions",
    "ExecutableNotFoundError",
    "ExecutableResolver",
    "ProcessOutput",
    "SubprocessRunner",
    "clear_executable_cache",
    "format_command",
    "resolve_executable",
    "run_command",
]
