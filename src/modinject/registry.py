"""
Process-wide registry of declared modules.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from typing import Any

from .core import Module
from .errors import ModuleNotFoundError

logger = logging.getLogger(__name__)


class ModuleRegistry:
    """
    Stores module descriptors by name.

    ``define`` always creates a fresh module, replacing any module previously
    declared under the same name together with everything queued on it.
    ``get`` only retrieves. The registry is never cleared implicitly; call
    ``reset`` between test runs.
    """

    def __init__(self) -> None:
        self._modules: dict[str, Module] = {}
        self._lock = threading.Lock()

    def define(self, name: str, requires: Iterable[str] = ()) -> Module:
        """Create a module under ``name``, overwriting any existing declaration."""
        module = Module(name, requires)
        with self._lock:
            if name in self._modules:
                logger.debug("Overwriting module '%s'", name)
            self._modules[name] = module
        return module

    def get(self, name: str, required_by: str | None = None) -> Module:
        """
        Retrieve a declared module.

        Raises:
            ModuleNotFoundError: If no module was declared under ``name``.
        """
        with self._lock:
            module = self._modules.get(name)
        if module is None:
            raise ModuleNotFoundError(name, required_by)
        return module

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._modules

    def names(self) -> list[str]:
        """Names of all declared modules in declaration order."""
        with self._lock:
            return list(self._modules)

    def reset(self) -> None:
        """Forget every declared module."""
        with self._lock:
            self._modules.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._modules)


_default_registry = ModuleRegistry()


def default_registry() -> ModuleRegistry:
    """The registry used when no explicit registry is given."""
    return _default_registry


def module(
    name: str,
    requires: Iterable[str] | None = None,
    config_fn: Callable[..., Any] | Any | None = None,
    registry: ModuleRegistry | None = None,
) -> Module:
    """
    Declare or retrieve a module.

    With ``requires`` (even an empty list) a new module is created,
    overwriting any previous declaration of the same name; ``config_fn``, if
    given, becomes its first config block. Without ``requires`` the existing
    module is returned.

    Raises:
        ModuleNotFoundError: If retrieving a module that was never declared.
    """
    if registry is None:
        registry = _default_registry
    if requires is None:
        if config_fn is not None:
            raise ValueError(f"Module '{name}' can only take a config function when it is created")
        return registry.get(name)

    created = registry.define(name, requires)
    if config_fn is not None:
        created.config(config_fn)
    return created


def reset_modules() -> None:
    """Clear the process-wide registry. Intended for test harnesses."""
    _default_registry.reset()
