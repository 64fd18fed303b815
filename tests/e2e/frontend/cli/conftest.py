"""Fixtures for end-to-end CLI tests.

Provides a test-only `log-demo` command that emits log records at every level
(on a project logger and a third-party logger), plus fixtures to register it,
obtain a CliRunner and work in an isolated filesystem.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from utharness.entrypoints.cli.main import utharness

# pylint: disable=redefined-outer-name

E2E_ROOT_MARK = pytest.mark.e2e


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Mark every item under this directory as `e2e`."""
    for item in items:
        if "e2e" in item.path.parts:
            item.add_marker(E2E_ROOT_MARK)


@click.command()
def log_demo():
    """Emit one record per level on 'utharness.demo' and some third-party records."""
    logger = logging.getLogger("utharness.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")
    third_party_logger = logging.getLogger("some.thirdparty")
    third_party_logger.debug("This is a debug-level third-party test message.")
    third_party_logger.info("This is an info-level third-party test message.")
    third_party_logger.warning("This is a warning-level third-party test message.")
    logger.debug("This is a final debug-level test message.")


def _remove_command_everywhere(group, name: str) -> None:
    """Remove a command from a Click group and any Click-Extra sections."""
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Register 'log-demo' on the top-level group for the duration of a test."""
    utharness.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command_everywhere(utharness, "log-demo")


@pytest.fixture
def runner():
    """Return a Click CliRunner."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated filesystem."""
    with runner.isolated_filesystem():
        yield
