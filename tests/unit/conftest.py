"""Default marks for tests under `tests/unit/`."""

from pathlib import Path

import pytest

UNIT_ROOT = Path(__file__).parent.resolve()
MARKER_NAME = "unit"


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config,  # pylint: disable=unused-argument
    items: list[pytest.Item],
) -> None:
    """Mark every item collected from `tests/unit/` as `unit` unless already marked."""
    for item in items:
        if UNIT_ROOT not in item.path.resolve().parents:
            continue
        if not any(m.name == MARKER_NAME for m in item.iter_markers()):
            item.add_marker(pytest.mark.unit)
