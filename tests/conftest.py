# topmark:header:start
#
#   project      : ECResolve
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the ECResolve test suite.

This file sets up global fixtures and turns on TRACE logging for the whole run
so that failing tests show every discovered config file and section decision.
"""

from __future__ import annotations

import pytest

from ecresolve.config import logging
from ecresolve.constants import (
    ENV_CONFIG_FILENAME,
    ENV_ENCODING,
    ENV_LOG_LEVEL,
    ENV_ROOT_KEY,
)
from ecresolve.io import MemoryFileSystem
from ecresolve.resolver import HierarchicalResolver


@pytest.fixture(autouse=True)
def isolate_ecresolve_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure no developer ``ECRESOLVE_*`` variables leak into tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    for name in (ENV_LOG_LEVEL, ENV_CONFIG_FILENAME, ENV_ROOT_KEY, ENV_ENCODING):
        monkeypatch.delenv(name, raising=False)


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Enable TRACE logging for the test session.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    """Return an empty in-memory filesystem."""
    return MemoryFileSystem()


@pytest.fixture
def memory_resolver(memory_fs: MemoryFileSystem) -> HierarchicalResolver:
    """Return a resolver reading from `memory_fs` with a private cache."""
    return HierarchicalResolver(fs=memory_fs)

