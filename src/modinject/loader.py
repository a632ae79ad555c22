"""
Expands root modules into a linear load order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .core import Module
from .errors import CyclicDependencyError
from .registry import ModuleRegistry, default_registry

logger = logging.getLogger(__name__)


class ModuleLoader:
    """
    Computes the order in which modules are executed.

    Every module appears once, after every module it requires. Requirements
    are visited depth first, left to right, so ties follow declaration order.
    """

    def __init__(self, registry: ModuleRegistry | None = None):
        self._registry = registry if registry is not None else default_registry()

    def load(self, roots: Iterable[str | Module | Any]) -> list[Module]:
        """
        Load root modules and everything they require.

        Args:
            roots: Module names, Module objects, or inline config blocks
                (annotated callables). An inline block is wrapped in an
                anonymous module placed at its position in the roots.

        Returns:
            The modules in execution order.

        Raises:
            ModuleNotFoundError: If a root or required module was never declared.
            CyclicDependencyError: If modules require each other.
        """
        order: list[Module] = []
        loaded: set[str] = set()
        inline_count = 0

        for root in roots:
            if isinstance(root, str):
                self._visit(root, None, [], loaded, order)
            elif isinstance(root, Module):
                if root.name not in loaded:
                    self._visit_module(root, [], loaded, order)
            else:
                inline = Module(f"<inline-{inline_count}>")
                inline.config(root)
                inline_count += 1
                order.append(inline)

        logger.debug("Module load order: %s", [m.name for m in order])
        return order

    def _visit(
        self,
        name: str,
        required_by: str | None,
        path: list[str],
        loaded: set[str],
        order: list[Module],
    ) -> None:
        if name in path:
            cycle_start = path.index(name)
            raise CyclicDependencyError(path[cycle_start:] + [name])

        if name in loaded:
            return

        module = self._registry.get(name, required_by)
        self._visit_module(module, path, loaded, order)

    def _visit_module(
        self,
        module: Module,
        path: list[str],
        loaded: set[str],
        order: list[Module],
    ) -> None:
        path.append(module.name)
        for required in module.requires:
            self._visit(required, module.name, path, loaded, order)
        path.pop()

        loaded.add(module.name)
        order.append(module)


def load_modules(
    roots: Iterable[str | Module | Any], registry: ModuleRegistry | None = None
) -> list[Module]:
    """Shortcut for ``ModuleLoader(registry).load(roots)``."""
    return ModuleLoader(registry).load(roots)
