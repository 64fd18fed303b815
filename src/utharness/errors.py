"""Harness error definitions."""


class HarnessError(Exception):
    """Base class for all harness errors."""


class InvalidTestError(HarnessError, ValueError):
    """Raised when a test is registered with malformed arguments."""

    def __init__(self, name: object, reason: str) -> None:
        super().__init__(f"Cannot register test {name!r}: {reason}")
        self.name = name
        self.reason = reason


class InvalidPatternError(HarnessError):
    """Raised when a selection pattern fails to compile."""

    def __init__(self, pattern: str, reason: str, offset: int | None = None) -> None:
        where = f" at offset {offset}" if offset is not None else ""
        super().__init__(f'Compile of "{pattern}" failed{where}: {reason}')
        self.pattern = pattern
        self.reason = reason
        self.offset = offset


class SuiteLoadError(HarnessError):
    """Raised when a suite module cannot be imported or lacks its hook."""

    def __init__(self, module: str, reason: str) -> None:
        super().__init__(f"Cannot load suite {module!r}: {reason}")
        self.module = module
        self.reason = reason


class InvalidSettingError(HarnessError):
    """Raised when an environment setting holds an unknown value."""

    def __init__(self, key: str, value: str, allowed: tuple[str, ...]) -> None:
        super().__init__(
            f"{key}={value!r} is not valid; expected one of: {', '.join(allowed)}"
        )
        self.key = key
        self.value = value
        self.allowed = allowed
