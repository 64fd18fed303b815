"""Run and list registered tests.

Both operations walk a `TestRegistry` in registration order and select tests
with a single `Selection` compiled for the call. Output is line-oriented text:

    Test <name, left-justified and cut to 60 chars> : pass|FAILED
    ==== TEST RESULTS ====
    PASSED: <n>
    FAILED: <n>
    ======================

Test functions run synchronously and are not isolated: an exception raised by a
test propagates out of `run` and no summary is written for that run.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, TextIO

import click

from utharness import config
from utharness.matcher import PatternPolicy, resolve_selection

if TYPE_CHECKING:
    from utharness.registry import TestDescriptor, TestRegistry

logger = logging.getLogger(__name__)

PASS_LABEL = "pass"  # pragma: no mutate
FAIL_LABEL = "FAILED"  # pragma: no mutate


@dataclass(frozen=True)
class RunResult:
    """Totals for one run."""

    passed: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        """Number of tests executed."""
        return self.passed + self.failed

    @property
    def ok(self) -> bool:
        """True when no test failed."""
        return self.failed == 0


def format_test_prefix(name: str, width: int = config.NAME_WIDTH) -> str:
    """Return the ``Test <name> : `` prefix written before a test runs."""
    return f"Test {name:<{width}.{width}} : "


def format_summary(result: RunResult) -> str:
    """Return the summary footer for ``result`` (without a trailing newline)."""
    return "\n".join(
        [
            "==== TEST RESULTS ====",
            f"PASSED: {result.passed}",
            f"FAILED: {result.failed}",
            "======================",
        ]
    )


def _run_one(test: TestDescriptor, out: TextIO | None) -> bool:
    click.echo(format_test_prefix(test.name), nl=False, file=out)
    # flush so a test that takes the process down still shows its name
    (out or sys.stdout).flush()
    ret = test.func()
    passed = ret == test.expected
    click.echo(PASS_LABEL if passed else FAIL_LABEL, file=out)
    logger.debug(
        "Test %r returned %r (expected %r): %s",
        test.name,
        ret,
        test.expected,
        PASS_LABEL if passed else FAIL_LABEL,
    )
    return passed


def run(
    registry: TestRegistry,
    pattern: str | None = None,
    *,
    policy: PatternPolicy | None = None,
    out: TextIO | None = None,
) -> RunResult:
    """Run every selected test and write per-test lines plus a summary.

    Args:
        registry: The registry to run.
        pattern: Optional regular expression searched in test names; ``None``
            or empty runs everything.
        policy: Invalid-pattern policy; when None, `UTHARNESS_PATTERN_POLICY` is
            consulted only if ``pattern`` fails to compile.
        out: Text stream to write to; defaults to stdout.

    Returns:
        RunResult: Passed and failed counts.

    Raises:
        InvalidPatternError: If ``pattern`` is invalid under `PatternPolicy.STRICT`.
        Exception: Whatever a test function raises; the run stops there.
    """
    selection = resolve_selection(pattern, policy)

    passed = failed = 0
    for test in registry:
        if not selection.matches(test.name):
            continue
        if _run_one(test, out):
            passed += 1
        else:
            failed += 1

    result = RunResult(passed=passed, failed=failed)
    click.echo(format_summary(result), file=out)
    logger.info("Ran %d test(s): %d passed, %d failed", result.total, passed, failed)
    return result


def run_tests(
    registry: TestRegistry,
    pattern: str | None = None,
    *,
    policy: PatternPolicy | None = None,
    out: TextIO | None = None,
) -> int:
    """Run selected tests and return the number that failed (0 means success).

    See `run` for arguments and output.
    """
    return run(registry, pattern, policy=policy, out=out).failed


def list_tests(
    registry: TestRegistry,
    pattern: str | None = None,
    *,
    policy: PatternPolicy | None = None,
    out: TextIO | None = None,
) -> list[str]:
    """Write the name of every selected test, one per line, without running it.

    Returns:
        list[str]: The listed names in registration order.

    Raises:
        InvalidPatternError: If ``pattern`` is invalid under `PatternPolicy.STRICT`.
    """
    selection = resolve_selection(pattern, policy)
    names = [t.name for t in registry if selection.matches(t.name)]
    for name in names:
        click.echo(name, file=out)
    return names
