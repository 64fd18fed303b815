"""Logging setup for the UTHARNESS CLI.

Console logging goes through Rich on stderr so that stdout carries only test
names and results. Records emitted by suite modules (any logger outside the
``utharness`` package) are tagged with the suite's top-level package name.

An optional in-memory "flight recorder" keeps recent records at DEBUG
granularity and writes them to disk when a WARNING occurs, which usually means
an invalid pattern or a failing run; with ``force_flush`` it also writes on
exit.
"""

from __future__ import annotations

import logging
import platform
import sys
from dataclasses import dataclass, field
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

from rich.console import Console
from rich.logging import RichHandler

from utharness import config

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "utharness"
BASE_LEVEL = logging.WARNING


class SuitePrefixFilter(logging.Filter):
    """Tag records from suite modules with a short prefix.

    Records from loggers outside the harness get ``record.prefix`` set to a
    bracketed token like "[mysuite]"; harness records get an empty prefix. The
    filter never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.split(".")[0] != PROJECT_PREFIX:
            record.prefix = f"[{record.name.split('.')[0]}]"
        else:
            record.prefix = ""
        return True


def console_level(verbose: int = 0, quiet: int = 0) -> int:
    """Step the WARNING default by one level per -v/-q, clamped to DEBUG..CRITICAL."""
    level = BASE_LEVEL - 10 * verbose + 10 * quiet
    return max(logging.DEBUG, min(logging.CRITICAL, level))


@dataclass(frozen=True)
class LoggingSettings:
    """Logging options gathered from the command line.

    Attributes:
        level: Console level; ignored in debug mode.
        debug: Show timestamps, logger names and source paths on the console.
        color: Allow colored console output.
        log_path: Flight recorder output file.
        flight_recorder: Buffer DEBUG records for `log_path`.
        capacity: Flight recorder buffer size, in records.
        force_flush: Write the buffer on exit even without a WARNING.
        logger_levels: Minimum level per logger name (e.g. a noisy suite).
    """

    level: int = BASE_LEVEL
    debug: bool = False
    color: bool = True
    log_path: Path | None = None
    flight_recorder: bool = False
    capacity: int = 2000
    force_flush: bool = False
    logger_levels: dict[str, int] = field(default_factory=dict)

    @property
    def recording(self) -> bool:
        return self.flight_recorder and self.log_path is not None


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Return a RichHandler writing harness diagnostics to stderr.

    Args:
        level: Minimum level for console output (overridden to DEBUG in debug_mode).
        debug_mode: When True, show timestamps, logger names and source paths.
        color: Enable color output when True.
    """

    # keep consistent with click-extra's --color / --no-color option
    ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]
    color_system: ColorSystem | None = "auto" if color else None

    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )

    if debug_mode:
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(prefix)s %(message)s"))
        handler.addFilter(SuitePrefixFilter())

    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Return an in-memory flight recorder backed by ``path``.

    The file is only created on the first flush, so a clean run leaves no log
    behind unless ``flush_on_close`` is set.
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8", delay=True)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter("[%(asctime)s] %(levelname)s %(name)s:%(lineno)d: %(message)s")
    )
    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def configure_logging(settings: LoggingSettings) -> list[logging.Handler]:
    """Install the console handler and flight recorder on the root logger.

    The root logger passes everything through; each handler applies its own
    level, and ``settings.logger_levels`` raise the floor for single loggers.

    Returns:
        The installed handlers, console first.
    """
    handlers: list[logging.Handler] = [
        config_console_handler(settings.level, settings.debug, settings.color)
    ]
    if settings.flight_recorder and settings.log_path is not None:
        handlers.append(
            config_flight_recorder(
                settings.log_path,
                capacity=settings.capacity,
                flush_on_close=settings.force_flush,
            )
        )

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    for name, lvl in settings.logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    return handlers


def log_startup(
    logger: Logger,
    settings: LoggingSettings,
    handlers: list[logging.Handler],
    app_version: str,
) -> None:
    """Log the harness settings at INFO and logging diagnostics at DEBUG.

    Harness settings are shown as found in the environment; an invalid pattern
    policy is reported here but only rejected once a pattern fails to compile.
    """
    harness = config.describe_settings()
    logger.info(
        "UTHARNESS %s - pattern-policy=%s, selftests=%s, console=%s, flight-recorder=%s",
        app_version,
        harness["pattern_policy"],
        harness["selftests"],
        "DEBUG" if settings.debug else logging.getLevelName(settings.level),
        "ON" if settings.recording else "OFF",
    )
    logger.debug("Suite modules: %s", harness["suites"])
    logger.debug(
        "Python: %s on %s", sys.version.split()[0], platform.system() or "<unknown>"
    )
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if settings.recording:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            settings.log_path,
            settings.capacity,
            settings.force_flush,
        )
    logger.debug(
        "Per-logger overrides: %s",
        {n: logging.getLevelName(lvl) for n, lvl in settings.logger_levels.items()}
        or "<none>",
    )
