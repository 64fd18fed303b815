"""UTHARNESS CLI entry point.

Defines the top-level ``utharness`` command (via Click-Extra), configures
logging for every subcommand and registers the test commands.

Available commands
- ``utharness list`` — list registered tests matching a pattern.
- ``utharness run`` — run registered tests matching a pattern.
- ``utharness selftest`` — run the harness's own self-tests.

Examples
    $ utharness --version
    $ utharness list -m myproject.suites
    $ utharness run "^parser" -m myproject.suites
"""

import logging
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from utharness import __version__
from utharness.logging import (
    LoggingSettings,
    configure_logging,
    console_level,
    log_startup,
)

from .commands import list_cmd, run_cmd, selftest_cmd
from .helpers.log_level_parser import parse_log_level

logger = logging.getLogger(__name__)


HELP = """UTHARNESS command-line interface.

    UTHARNESS is a small unit-test harness. Suite modules register named test
    functions together with the result each must return; the harness lists or
    runs the tests whose names match a regular expression and reports
    pass/FAILED per test plus totals.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help=(
        "Show more harness diagnostics on stderr: -v for INFO (run summaries), "
        "-vv for DEBUG (registration and per-test outcomes)."
    ),
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help=(
        "Show fewer harness diagnostics on stderr: -q hides invalid-pattern "
        "warnings, -qq keeps only CRITICAL."
    ),
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (timestamps, logger names and source paths).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="File the flight recorder writes to.",
    default=Path(user_log_dir("utharness", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="UTHARNESS_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="UTHARNESS_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Buffer recent DEBUG records (regardless of -v/-q) and write them to "
        "--log-path when a run logs a WARNING, such as an invalid pattern."
    ),
    default=True,
    envvar="UTHARNESS_FLIGHT_RECORDER",
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help="Write the flight recorder buffer to --log-path on exit, even without a WARNING.",
    default=False,
    envvar="UTHARNESS_FORCE_FLUSH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Minimum level for one logger, as NAME=LEVEL; use it to quiet a chatty "
        "suite module (e.g. -L mysuite=WARNING). Repeatable, or a comma/space "
        "list in UTHARNESS_LOGGER_LEVELS."
    ),
    envvar="UTHARNESS_LOGGER_LEVELS",
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def utharness(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """UTHARNESS command-line interface."""
    settings = LoggingSettings(
        level=console_level(verbose_count, quiet_count),
        debug=debug,
        color=ctx.color is not False,  # None or True => allow color
        log_path=log_path,
        flight_recorder=flight_recorder,
        capacity=flight_recorder_capacity,
        force_flush=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )
    handlers = configure_logging(settings)
    log_startup(logger, settings, handlers, __version__)

    # flush the flight recorder once the subcommand returns
    ctx.call_on_close(logging.shutdown)


utharness.add_command(list_cmd)
utharness.add_command(run_cmd)
utharness.add_command(selftest_cmd)
