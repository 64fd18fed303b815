"""Test registry.

The registry is an explicitly constructed, ordered collection of
`TestDescriptor` entries. Its lifecycle is construct → populate → use →
cleanup: tests are appended during a registration phase, read (listed or run)
afterwards, and dropped by `cleanup`.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TypeVar

from utharness.errors import InvalidTestError

logger = logging.getLogger(__name__)

TestFunc = Callable[[], int]
F = TypeVar("F", bound=TestFunc)


@dataclass(frozen=True)
class TestDescriptor:
    """A registered test.

    Attributes:
        name: Identifying name, used for display and pattern matching. Names
            are not required to be unique.
        func: Zero-argument callable returning an integer result code.
        expected: The result code a passing run must return.
    """

    __test__ = False  # not a pytest test class

    name: str
    func: TestFunc
    expected: int

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise InvalidTestError(self.name, "name must be a non-empty string")
        if not callable(self.func):
            raise InvalidTestError(self.name, "func must be callable")
        if not isinstance(self.expected, int) or isinstance(self.expected, bool):
            raise InvalidTestError(self.name, "expected must be an int")


class TestRegistry:
    """An ordered, append-only collection of test descriptors.

    Registration order is preserved and equals iteration order. Descriptors are
    immutable once appended. `initialize` and `cleanup` both leave the registry
    empty.

    Example:
        ```py
        registry = TestRegistry()
        registry.register("addition", lambda: int(1 + 1 == 2), 1)

        @registry.test(expected=0)
        def no_error() -> int:
            return 0
        ```
    """

    __test__ = False  # not a pytest test class

    def __init__(self) -> None:
        self._tests: list[TestDescriptor] = []
        self._lock = threading.Lock()

    def register(self, name: str, func: TestFunc, expected: int) -> bool:
        """Append a test to the tail of the registry.

        Args:
            name: Test name.
            func: Zero-argument callable returning an integer result code.
            expected: Result code that counts as a pass.

        Returns:
            bool: True if the test was registered; False if memory could not be
            obtained, in which case the test is dropped and the registry is left
            unchanged.

        Raises:
            InvalidTestError: If the arguments are malformed.
        """
        try:
            descriptor = TestDescriptor(name, func, expected)
            with self._lock:
                self._tests.append(descriptor)
        except MemoryError:
            logger.error("Out of memory registering test %r; test dropped", name)
            return False
        logger.debug("Registered test %r (expected=%d)", name, expected)
        return True

    def test(self, name: str | None = None, expected: int = 1) -> Callable[[F], F]:
        """Decorator form of `register`.

        Args:
            name: Test name; defaults to the function's ``__name__``.
            expected: Result code that counts as a pass.

        Returns:
            A decorator that registers the function and returns it unchanged.
        """

        def decorator(func: F) -> F:
            self.register(func.__name__ if name is None else name, func, expected)
            return func

        return decorator

    def initialize(self) -> None:
        """Reset the registry to empty. Safe to call repeatedly."""
        with self._lock:
            self._tests = []

    def cleanup(self) -> None:
        """Release every descriptor and reset the registry to empty."""
        with self._lock:
            released = len(self._tests)
            self._tests.clear()
        if released:
            logger.debug("Released %d registered test(s)", released)

    def names(self) -> list[str]:
        """Return the registered test names in registration order."""
        return [t.name for t in self]

    def __iter__(self) -> Iterator[TestDescriptor]:
        with self._lock:
            snapshot = tuple(self._tests)
        return iter(snapshot)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tests)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tests={len(self)})"
