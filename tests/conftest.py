# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from perlcritic_shim.runtime.executable import clear_executable_cache


@pytest.fixture(autouse=True)
def _fresh_executable_cache() -> Iterator[None]:
    """Keep executable lookups from leaking between tests."""
    clear_executable_cache()
    yield
    clear_executable_cache()
