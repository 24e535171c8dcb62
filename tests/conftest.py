"""Shared test fixtures for caching_map."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog
from structlog.testing import LogCapture

from tests.stubs import CountingDict, Key


@pytest.fixture(autouse=True)
def log_output() -> Iterator[LogCapture]:
    """Capture structlog events emitted during a test."""
    capture = LogCapture()
    structlog.configure(processors=[capture], cache_logger_on_first_use=False)
    yield capture
    structlog.reset_defaults()


@pytest.fixture
def key_a() -> Key:
    return Key("a")


@pytest.fixture
def delegate(key_a: Key) -> CountingDict:
    """Delegate holding a single entry for key_a."""
    return CountingDict({key_a: 1})
