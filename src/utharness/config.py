"""Configuration utilities for UTHARNESS.

This module centralizes small helpers and constants related to harness configuration.
"""

import os
from enum import Enum

from utharness.errors import InvalidSettingError

NAME_WIDTH = 60  # pragma: no mutate

PATTERN_POLICY_KEY = "UTHARNESS_PATTERN_POLICY"  # pragma: no mutate
SELFTESTS_KEY = "UTHARNESS_SELFTESTS"  # pragma: no mutate
MODULES_KEY = "UTHARNESS_MODULES"  # pragma: no mutate

_FALSY = frozenset({"0", "false", "no", "off"})


class PatternPolicy(str, Enum):
    """What to do when a selection pattern fails to compile.

    FALLBACK: log a warning and select every test.
    STRICT: raise `InvalidPatternError`; nothing is listed or run.
    """

    FALLBACK = "fallback"
    STRICT = "strict"


def get_pattern_policy() -> PatternPolicy:
    """Get the invalid-pattern policy from the environment.

    Returns:
        The policy named by `UTHARNESS_PATTERN_POLICY`, or `PatternPolicy.FALLBACK`
        when it is unset or empty.

    Raises:
        InvalidSettingError: If the variable names an unknown policy.
    """
    if not (raw := os.environ.get(PATTERN_POLICY_KEY, "").strip()):
        return PatternPolicy.FALLBACK
    try:
        return PatternPolicy(raw.lower())
    except ValueError as e:
        allowed = tuple(p.value for p in PatternPolicy)
        raise InvalidSettingError(PATTERN_POLICY_KEY, raw, allowed) from e


def selftests_enabled() -> bool:
    """Return True unless `UTHARNESS_SELFTESTS` is set to a falsy token."""
    return os.environ.get(SELFTESTS_KEY, "").strip().lower() not in _FALSY


def describe_settings() -> dict[str, str]:
    """Return the harness settings as display strings, without validating them.

    Used for startup diagnostics, where an invalid value should be shown rather
    than raised; it is only rejected once a pattern actually fails to compile.
    """
    policy = os.environ.get(PATTERN_POLICY_KEY, "").strip() or PatternPolicy.FALLBACK.value
    modules = os.environ.get(MODULES_KEY, "").split()
    return {
        "pattern_policy": policy,
        "selftests": "ON" if selftests_enabled() else "OFF",
        "suites": " ".join(modules) if modules else "<none>",
    }
