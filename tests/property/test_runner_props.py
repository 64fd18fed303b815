"""Hypothesis property tests for the registry and runner.

Properties:

- **Conservation**: an unfiltered run over N registrations reports
  PASSED + FAILED == N.
- **Order**: unfiltered listing yields the names in registration order.
- **Pass rule**: a test passes iff its result equals its expected value.
- **Subset selection**: a pattern selects exactly the matching names, in
  registration order, and only those tests are invoked.

Every example builds a fresh registry.
"""

from __future__ import annotations

import io
import re

import pytest
from hypothesis import given
from hypothesis import strategies as st

from utharness.registry import TestRegistry
from utharness.runner import list_tests, run

pytestmark = [pytest.mark.property]

# ============================================================================
#                               Strategies
# ============================================================================

names = st.text(alphabet="abcdefgh_0123", min_size=1, max_size=12)
codes = st.integers(min_value=-(2**31), max_value=2**31 - 1)
entries = st.lists(st.tuples(names, codes, codes), max_size=25)


def constant(value: int):
    """Return a zero-argument function that returns ``value``."""
    return lambda: value


def build(items: list[tuple[str, int, int]]) -> TestRegistry:
    """Register (name, returned, expected) triples in a fresh registry."""
    registry = TestRegistry()
    for name, returned, expected in items:
        registry.register(name, constant(returned), expected)
    return registry


# ============================================================================
#                               Properties
# ============================================================================


@given(entries)
def test_every_registered_test_is_counted(items):
    """passed + failed equals the number of registrations."""
    result = run(build(items), out=io.StringIO())
    assert result.total == len(items)
    assert result.failed == sum(1 for _, got, want in items if got != want)


@given(entries)
def test_listing_preserves_registration_order(items):
    """Unfiltered listing returns names exactly as registered."""
    out = io.StringIO()
    listed = list_tests(build(items), out=out)
    assert listed == [name for name, _, _ in items]
    assert out.getvalue() == "".join(f"{name}\n" for name, _, _ in items)


@given(codes, codes)
def test_pass_iff_result_equals_expected(returned, expected):
    """A single test passes exactly when it returns its expected value."""
    registry = TestRegistry()
    registry.register("only", constant(expected), expected)
    registry.register("other", constant(returned), expected)
    result = run(registry, out=io.StringIO())
    assert result.passed == 1 + (returned == expected)
    assert result.failed == (returned != expected)


@given(entries, st.sampled_from(["a", "^b", "_$", "[0-9]", "zz"]))
def test_pattern_selects_matching_subset(items, pattern):
    """Only matching tests run, and they run in registration order."""
    calls: list[int] = []
    registry = TestRegistry()
    for index, (name, returned, expected) in enumerate(items):

        def fn(index=index, returned=returned):
            calls.append(index)
            return returned

        registry.register(name, fn, expected)

    selected = [i for i, (name, _, _) in enumerate(items) if re.search(pattern, name)]
    result = run(registry, pattern, out=io.StringIO())

    assert calls == selected
    assert result.total == len(selected)
    assert list_tests(registry, pattern, out=io.StringIO()) == [
        items[i][0] for i in selected
    ]
