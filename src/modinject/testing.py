"""
Helpers for building throwaway injectors in tests.
"""

from __future__ import annotations

from typing import Any

from .core import Module
from .injector import Injector, create_injector
from .registry import ModuleRegistry, reset_modules

__all__ = ["ModuleHarness", "reset_modules"]


class ModuleHarness:
    """
    Collects modules for one test and builds an injector on first use.

    Roots can be module names, Module objects or inline config blocks,
    which makes it easy to override a provider for a single test:

        harness = ModuleHarness("app")
        harness.module(["$provide", lambda provide: provide.value("clock", FakeClock())])
        assert harness.get("clock").now() == 0

    Run blocks are skipped unless ``run_blocks=True`` is given.
    """

    def __init__(
        self,
        *roots: str | Module | Any,
        run_blocks: bool = False,
        registry: ModuleRegistry | None = None,
    ):
        self._roots: list[Any] = list(roots)
        self._run_blocks = run_blocks
        self._registry = registry
        self._injector: Injector | None = None

    def module(self, *roots: str | Module | Any) -> ModuleHarness:
        """Add roots. Must be called before the injector is created."""
        if self._injector is not None:
            raise RuntimeError("Injector already created, modules can no longer be added")
        self._roots.extend(roots)
        return self

    @property
    def injector(self) -> Injector:
        if self._injector is None:
            self._injector = create_injector(
                self._roots, run_blocks=self._run_blocks, registry=self._registry
            )
        return self._injector

    def inject(self, target: Any) -> Any:
        """Invoke an annotated callable against the instance scope."""
        return self.injector.invoke(target)

    def get(self, name: str) -> Any:
        return self.injector.get(name)

    def get_provider(self, name: str) -> Any:
        """Resolve ``name`` from the provider scope, e.g. ``"clockProvider"`` or a constant."""
        return self.injector.provider_scope.get(name, requester="test harness")
