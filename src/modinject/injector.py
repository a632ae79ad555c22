"""
Injector - runs loaded modules through the config phase and the run phase.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from enum import Enum
from typing import Any

from .core import Module
from .errors import InjectorError
from .loader import ModuleLoader
from .registry import ModuleRegistry
from .scope_impl import InstanceScope, ProviderScope

logger = logging.getLogger(__name__)


class InjectorState(Enum):
    CONFIGURING = "configuring"
    RUNNING = "running"


class Injector:
    """
    Two-phase dependency injection container built from an ordered module list.

    Construction replays every module's constants, provider registrations
    and config blocks against the provider scope. The first request for an
    instance freezes the provider registry, switches the injector to
    ``RUNNING`` and executes every module's run blocks against the instance
    scope. Instances are created on demand and cached.

    A failed injector is left in whatever state it reached and should be
    discarded.
    """

    def __init__(self, modules: Iterable[Module], *, run_blocks: bool = True):
        """
        Create an Injector and run its config phase.

        Args:
            modules: Modules in execution order, as returned by ``ModuleLoader.load``
            run_blocks: Whether run blocks are executed when the injector starts
        """
        self._modules = list(modules)
        self._run_blocks = run_blocks
        self._state = InjectorState.CONFIGURING
        self._instances: dict[str, Any] = {}
        self._provider_scope = ProviderScope(self._instances)
        self._instance_scope = InstanceScope(self._provider_scope.providers, self._instances)

        self._configure()

    @property
    def state(self) -> InjectorState:
        return self._state

    @property
    def modules(self) -> list[Module]:
        """Loaded modules in execution order."""
        return list(self._modules)

    @property
    def provider_scope(self) -> ProviderScope:
        return self._provider_scope

    def start(self) -> None:
        """Freeze the provider registry and execute run blocks. Only the first call has an effect."""
        if self._state is InjectorState.RUNNING:
            return

        self._provider_scope.providers.freeze()
        self._state = InjectorState.RUNNING
        logger.debug("Injector running, provider registry frozen")

        if not self._run_blocks:
            return

        for module in self._modules:
            for index, entry in enumerate(module.run_blocks, start=1):
                requester = f"run block #{index} of module '{module.name}'"
                with _block_context(requester):
                    self._instance_scope.invoke(entry.target, requester=requester)

    def get(self, name: str) -> Any:
        """
        Get the instance registered under ``name``, creating it if needed.

        Raises:
            UnknownDependencyError: If no provider is registered under ``name``
            InjectionScopeError: If ``name`` refers to a provider object
            CyclicDependencyError: If the provider depends on itself
        """
        self.start()
        return self._instance_scope.get(name)

    def has(self, name: str) -> bool:
        """Check if ``name`` can be resolved as an instance, without starting the injector."""
        return self._instance_scope.has(name)

    def invoke(self, target: Any, locals: Mapping[str, Any] | None = None) -> Any:  # noqa: A002
        """
        Call an annotated callable with instances injected.

        Example:
            ```python
            injector = create_injector(["app"])
            injector.invoke(["greeter", lambda greeter: greeter.greet("world")])
            ```
        """
        self.start()
        return self._instance_scope.invoke(target, locals)

    def instantiate(self, cls: Any, locals: Mapping[str, Any] | None = None) -> Any:  # noqa: A002
        """Create an instance of an annotated class with instances injected."""
        self.start()
        return self._instance_scope.instantiate(cls, locals)

    def annotate(self, target: Any) -> tuple[str, ...]:
        """Return the dependency names declared for ``target``."""
        return self._instance_scope.annotate(target)

    def get_instance_count(self) -> int:
        return self._instance_scope.get_instance_count()

    def _configure(self) -> None:
        providers = self._provider_scope.providers
        for module in self._modules:
            logger.debug("Configuring module '%s'", module.name)
            config_index = 0
            for entry in module.config_queue:
                if entry.registers_provider:
                    with _block_context(f"{entry} of module '{module.name}'"):
                        getattr(providers, entry.target)(*entry.args)
                else:
                    config_index += 1
                    requester = f"config block #{config_index} of module '{module.name}'"
                    with _block_context(requester):
                        self._provider_scope.invoke(entry.target, requester=requester)


@contextmanager
def _block_context(description: str) -> Iterator[None]:
    """Annotate injector errors with the block that was executing."""
    try:
        yield
    except InjectorError as e:
        e.add_note(f"while executing {description}")
        raise


def create_injector(
    roots: Iterable[str | Module | Any],
    *,
    run_blocks: bool = True,
    registry: ModuleRegistry | None = None,
) -> Injector:
    """
    Load root modules and build an injector from them.

    The config phase runs immediately; the run phase starts with the first
    ``get``, ``invoke`` or ``instantiate`` call, or with ``start()``.

    Args:
        roots: Module names, Module objects or inline config blocks
        run_blocks: Whether run blocks are executed when the injector starts
        registry: Module registry to load from (defaults to the process-wide one)

    Example:
        ```python
        module("base", []).value("x", 1)
        module("app", ["base"]).factory("y", ["x", lambda x: x + 1])

        injector = create_injector(["app"])
        assert injector.get("y") == 2
        ```
    """
    modules = ModuleLoader(registry).load(roots)
    return Injector(modules, run_blocks=run_blocks)

