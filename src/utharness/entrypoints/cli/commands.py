"""UTHARNESS test commands — ``list``, ``run`` and ``selftest``.

``list`` and ``run`` build a fresh registry, populate it from the suite modules
given with ``-m/--module`` (each must define ``register_tests(registry)``),
then list or run the tests whose names contain a match for PATTERN.

Behavior
- Test names and result lines go to **stdout**; notices go to **stderr**.
- ``run`` and ``selftest`` exit 0 when no test failed and 1 otherwise.
- A test that raises aborts the run; the traceback is shown and no summary
  is printed.

Failure modes
- Unimportable suite module or missing hook → ``ClickException`` (exit 1).
- Invalid PATTERN under the ``strict`` policy → ``UsageError`` (exit 2).
- Unknown ``UTHARNESS_PATTERN_POLICY`` value, consulted only when PATTERN
  does not compile and ``--pattern-policy`` is not given → ``ClickException``
  (exit 1).
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import click

from utharness import config
from utharness.errors import InvalidPatternError, InvalidSettingError, SuiteLoadError
from utharness.loader import load_suites
from utharness.matcher import PatternPolicy
from utharness.registry import TestRegistry
from utharness.runner import list_tests, run
from utharness.selftest import run_selftest

from .helpers import error, success, warn

logger = logging.getLogger(__name__)

NO_SUITES_MSG = "No suite modules given (use -m MODULE); the registry is empty."

pattern_argument = click.argument(
    "pattern", required=False, default=None, envvar="UTHARNESS_PATTERN"
)

modules_option = click.option(
    "--module",
    "-m",
    "modules",
    multiple=True,
    envvar=config.MODULES_KEY,
    help=(
        "Import MODULE and call its register_tests(registry) hook. "
        "Repeatable; order is preserved."
    ),
)

policy_option = click.option(
    "--pattern-policy",
    "pattern_policy",
    type=click.Choice([p.value for p in PatternPolicy], case_sensitive=False),
    default=None,
    help=(
        "What to do with a PATTERN that does not compile: 'fallback' selects "
        "every test, 'strict' stops with an error. "
        "Defaults to UTHARNESS_PATTERN_POLICY, else 'fallback'."
    ),
)


def _get_policy(value: str | None) -> PatternPolicy | None:
    return PatternPolicy(value.lower()) if value is not None else None


@contextmanager
def _pattern_errors() -> Iterator[None]:
    """Map pattern and policy errors to Click errors."""
    try:
        yield
    except InvalidPatternError as e:
        raise click.UsageError(str(e)) from e
    except InvalidSettingError as e:
        raise click.ClickException(str(e)) from e


def _build_registry(modules: tuple[str, ...]) -> TestRegistry:
    registry = TestRegistry()
    if not modules:
        warn(NO_SUITES_MSG)
        return registry
    try:
        load_suites(registry, modules)
    except SuiteLoadError as e:
        registry.cleanup()
        raise click.ClickException(str(e)) from e
    logger.info("Loaded %d test(s) from %d suite(s)", len(registry), len(modules))
    return registry


@click.command(name="list")
@pattern_argument
@modules_option
@policy_option
def list_cmd(
    pattern: str | None, modules: tuple[str, ...], pattern_policy: str | None
) -> None:
    """List the names of tests matching PATTERN (all tests if omitted)."""
    policy = _get_policy(pattern_policy)
    registry = _build_registry(modules)
    try:
        with _pattern_errors():
            list_tests(registry, pattern, policy=policy)
    finally:
        registry.cleanup()


@click.command(name="run")
@pattern_argument
@modules_option
@policy_option
@click.pass_context
def run_cmd(
    ctx: click.Context,
    pattern: str | None,
    modules: tuple[str, ...],
    pattern_policy: str | None,
) -> None:
    """Run tests matching PATTERN (all tests if omitted)."""
    policy = _get_policy(pattern_policy)
    registry = _build_registry(modules)
    try:
        with _pattern_errors():
            result = run(registry, pattern, policy=policy)
    finally:
        registry.cleanup()

    if not result.ok:
        error(f"{result.failed} of {result.total} test(s) failed.")
        ctx.exit(1)
    success(f"All {result.total} test(s) passed.")


@click.command(name="selftest")
@pattern_argument
@click.pass_context
def selftest_cmd(ctx: click.Context, pattern: str | None) -> None:
    """Run the harness's own self-tests."""
    if not config.selftests_enabled():
        warn(f"Self-tests are disabled ({config.SELFTESTS_KEY}).")
    with _pattern_errors():
        failed = run_selftest(pattern)
    if failed:
        ctx.exit(1)
