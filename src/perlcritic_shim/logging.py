# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support."""

from __future__ import annotations

import sys
from typing import TextIO

ANSI = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "blue": "\033[34;1m",
    "cyan": "\033[36;1m",
    "red": "\033[31;1m",
    "green": "\033[32;1m",
    "yellow": "\033[33;1m",
}


def is_tty(stream: TextIO | None = None) -> bool:
    """Return ``True`` when ``stream`` (stdout by default) appears to be a TTY."""

    try:
        return (stream or sys.stdout).isatty()
    except (AttributeError, ValueError):
        return False


def colorize(text: str, code: str, enable: bool, *, stream: TextIO | None = None) -> str:
    """Wrap ``text`` in ANSI colour codes when *enable* is truthy and ``stream`` is a TTY."""

    if not enable or not is_tty(stream):
        return text
    return f"{ANSI.get(code, '')}{text}{ANSI['reset']}"


def emoji(symbol: str, enable: bool) -> str:
    """Return *symbol* when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def warn(msg: str, *, use_emoji: bool, use_color: bool = True) -> None:
    """Emit a warning message on stderr."""

    print(f"{emoji('⚠️ ', use_emoji)}{colorize(msg, 'yellow', use_color, stream=sys.stderr)}", file=sys.stderr)


def fail(msg: str, *, use_emoji: bool, use_color: bool = True) -> None:
    """Emit an error message on stderr."""

    print(f"{emoji('❌ ', use_emoji)}{colorize(msg, 'red', use_color, stream=sys.stderr)}", file=sys.stderr)
