"""Populate a registry from explicitly named suite modules.

A suite module is any importable Python module that defines
``register_tests(registry)``. Modules are imported by name; nothing is
discovered by scanning the filesystem.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from utharness.errors import SuiteLoadError

if TYPE_CHECKING:
    from utharness.registry import TestRegistry

logger = logging.getLogger(__name__)

HOOK_NAME = "register_tests"  # pragma: no mutate


def load_suite(registry: TestRegistry, module_name: str) -> int:
    """Import ``module_name`` and let it register its tests.

    Returns:
        int: Number of tests the module added.

    Raises:
        SuiteLoadError: If the module cannot be imported or has no callable
            ``register_tests`` hook.
    """
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise SuiteLoadError(module_name, str(e)) from e

    hook = getattr(module, HOOK_NAME, None)
    if not callable(hook):
        raise SuiteLoadError(module_name, f"no callable {HOOK_NAME}(registry)")

    before = len(registry)
    hook(registry)
    added = len(registry) - before
    logger.debug("Suite %s registered %d test(s)", module_name, added)
    return added


def load_suites(registry: TestRegistry, module_names: Iterable[str]) -> int:
    """Load every suite in ``module_names`` in order.

    Returns:
        int: Total number of tests added.
    """
    return sum(load_suite(registry, name) for name in module_names)
