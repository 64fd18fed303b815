"""UTHARNESS

A minimal, embeddable unit-test registration and execution harness.
Test cases register themselves (name, callable, expected result) into a
registry; a runner selects a subset by regular-expression search on the
test name, executes them and reports per-test pass/fail and totals.
"""

from .matcher import PatternPolicy, compile_pattern
from .registry import TestDescriptor, TestRegistry
from .runner import RunResult, list_tests, run, run_tests
from .selftest import run_selftest

__all__ = [
    "__version__",
    "PatternPolicy",
    "RunResult",
    "TestDescriptor",
    "TestRegistry",
    "compile_pattern",
    "list_tests",
    "run",
    "run_selftest",
    "run_tests",
]
__version__ = "0.1.0"
