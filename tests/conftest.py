"""Global pytest fixtures for UTHARNESS."""

from __future__ import annotations

import io

import pytest

from utharness.registry import TestRegistry

pytest_plugins = [
    "tests.fixtures.suites",
]

HARNESS_ENV_VARS = (
    "UTHARNESS_PATTERN",
    "UTHARNESS_PATTERN_POLICY",
    "UTHARNESS_MODULES",
    "UTHARNESS_SELFTESTS",
)


@pytest.fixture(autouse=True)
def clean_harness_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's UTHARNESS_* settings out of every test."""
    for key in HARNESS_ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def registry() -> TestRegistry:
    """Return a fresh, empty registry."""
    return TestRegistry()


@pytest.fixture
def out() -> io.StringIO:
    """Return a text buffer to capture list/run output."""
    return io.StringIO()
