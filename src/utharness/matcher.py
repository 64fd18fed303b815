"""Selection patterns for listing and running tests.

A selection pattern is an optional regular expression searched (unanchored,
case-sensitive) in each test name. Compilation happens once per list/run call
and the resulting `Selection` is reused for every registry entry; there is no
module-level "current pattern".
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from utharness import config
from utharness.config import PatternPolicy
from utharness.errors import InvalidPatternError

__all__ = [
    "PatternPolicy",
    "SELECT_ALL",
    "Selection",
    "compile_pattern",
    "resolve_selection",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    """A compiled selection pattern.

    A `Selection` with no regex selects every name.
    """

    regex: re.Pattern[str] | None = None

    @property
    def selects_all(self) -> bool:
        """True when no pattern was supplied (or a fallback is in effect)."""
        return self.regex is None

    def matches(self, name: str) -> bool:
        """Return True if ``name`` contains a match for the pattern."""
        if self.regex is None:
            return True
        return self.regex.search(name) is not None


SELECT_ALL = Selection()


def compile_pattern(pattern: str | None) -> Selection:
    """Compile ``pattern`` into a `Selection`.

    Args:
        pattern: Regular expression to search for in test names. ``None`` or an
            empty string selects every test without compiling anything.

    Returns:
        Selection: The compiled selection.

    Raises:
        InvalidPatternError: If ``pattern`` is not a valid regular expression.
    """
    if not pattern:
        return SELECT_ALL
    try:
        regex = re.compile(pattern)
    # sre rejects oversized repeats and very deep nesting outside re.error
    except (re.error, OverflowError, RecursionError) as e:
        reason = getattr(e, "msg", None) or str(e)
        raise InvalidPatternError(pattern, reason, getattr(e, "pos", None)) from e
    return Selection(regex)


def resolve_selection(
    pattern: str | None, policy: PatternPolicy | None = None
) -> Selection:
    """Compile ``pattern`` and apply ``policy`` if it is invalid.

    Args:
        pattern: Selection pattern, as for `compile_pattern`.
        policy: Invalid-pattern policy. When None it is read from the
            environment, and only if ``pattern`` fails to compile.

    Raises:
        InvalidPatternError: Only under `PatternPolicy.STRICT`.
        InvalidSettingError: If ``pattern`` is invalid, ``policy`` is None and
            `UTHARNESS_PATTERN_POLICY` holds an unknown value.
    """
    try:
        return compile_pattern(pattern)
    except InvalidPatternError as e:
        if policy is None:
            policy = config.get_pattern_policy()
        if policy is PatternPolicy.STRICT:
            logger.error("%s", e)
            raise
        logger.warning("%s; selecting all tests", e)
        return SELECT_ALL
