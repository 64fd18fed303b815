"""Self-tests for the harness itself.

Registers two built-in tests in a private registry and runs them through the
real runner. Both are expected to pass. Gated by `config.selftests_enabled`.
"""

from __future__ import annotations

import logging
from typing import TextIO

import click

from utharness import config
from utharness.registry import TestRegistry
from utharness.runner import run_tests

logger = logging.getLogger(__name__)


def selftest_true() -> int:
    """Always reports success (1)."""
    return 1


def selftest_false() -> int:
    """Always reports failure (0)."""
    return 0


def run_selftest(pattern: str | None = None, *, out: TextIO | None = None) -> int:
    """Run the harness self-tests.

    The self-tests live in their own registry, bracketed by `initialize` and
    `cleanup`, so no registry used elsewhere in the process is touched.

    Args:
        pattern: Optional selection pattern, as for `run_tests`.
        out: Text stream to write to; defaults to stdout.

    Returns:
        int: Number of failed self-tests; 0 when they all pass or self-tests
        are disabled.
    """
    if not config.selftests_enabled():
        logger.info("Self-tests disabled via %s", config.SELFTESTS_KEY)
        return 0

    click.echo("* Running Unittesting subsystem selftests...", file=out)

    registry = TestRegistry()
    registry.initialize()
    try:
        registry.register("true", selftest_true, 1)
        registry.register("false", selftest_false, 0)

        failed = run_tests(registry, pattern, out=out)
    finally:
        registry.cleanup()

    if failed == 0:
        click.echo("* Done running Unittesting subsystem selftests...", file=out)
    else:
        click.echo("* ERROR running Unittesting subsystem selftests failed...", file=out)
    return failed
