"""
Module descriptors for the modinject dependency injection framework.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from .bindings import InvokeEntry, QueueKind
from .errors import InvalidRecipeError
from .functoid import annotate


class Module:
    """
    A named unit of configuration.

    A module lists the modules it requires and queues the registrations and
    blocks to replay when an injector loads it. Declaring a module has no
    side effects until an injector is created, so modules can be declared
    in any order.

    Example:
        ```python
        module("app", ["storage"]) \\
            .constant("API_ROOT", "/api") \\
            .factory("client", ["API_ROOT", "http", make_client]) \\
            .run(["client", warm_up])
        ```
    """

    def __init__(self, name: str, requires: Iterable[str] = ()):
        if isinstance(requires, str | bytes):
            raise InvalidRecipeError(
                f"Module '{name}' requires must be a list of module names, got {requires!r}"
            )
        requires = tuple(requires)
        for required in requires:
            if not isinstance(required, str):
                raise InvalidRecipeError(
                    f"Module '{name}' requires must be module names, got {required!r}"
                )
        self._name = name
        self._requires: tuple[str, ...] = requires
        self._constants: list[InvokeEntry] = []
        self._invoke_queue: list[InvokeEntry] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def requires(self) -> tuple[str, ...]:
        return self._requires

    @property
    def invoke_queue(self) -> list[InvokeEntry]:
        """All queued entries, constants first, then everything else in call order."""
        return self._constants + self._invoke_queue

    @property
    def config_queue(self) -> list[InvokeEntry]:
        """Entries replayed during the config phase."""
        return self._constants + [
            entry for entry in self._invoke_queue if entry.kind is not QueueKind.RUN_BLOCK
        ]

    @property
    def run_blocks(self) -> list[InvokeEntry]:
        return [entry for entry in self._invoke_queue if entry.kind is QueueKind.RUN_BLOCK]

    def value(self, name: str, value: Any) -> Module:
        """Register a value, available to run blocks and other instances."""
        return self._register("value", name, value)

    def factory(self, name: str, factory: Any) -> Module:
        """Register an annotated factory whose return value is the instance."""
        return self._register("factory", name, factory)

    def service(self, name: str, cls: Any) -> Module:
        """Register an annotated class that is instantiated once."""
        return self._register("service", name, cls)

    def provider(self, name: str, provider: Any) -> Module:
        """
        Register a provider.

        ``provider`` is either an object with a ``get`` attribute or an
        annotated callable/class producing such an object. The provider
        object itself is injectable into config blocks as ``<name>Provider``.
        """
        return self._register("provider", name, provider)

    def decorator(self, name: str, decorator: Any) -> Module:
        """Wrap the instance of an existing provider; ``$delegate`` is the original."""
        return self._register("decorator", name, decorator)

    def constant(self, name: str, value: Any) -> Module:
        """Register a constant. Constants are replayed before anything else in the module."""
        _check_name(name)
        self._constants.append(InvokeEntry(QueueKind.CONSTANT, "constant", (name, value)))
        return self

    def config(self, block: Callable[..., Any] | Any) -> Module:
        """Queue a block run against the provider scope while the injector is configured."""
        self._invoke_queue.append(InvokeEntry(QueueKind.CONFIG_BLOCK, annotate(block)))
        return self

    def run(self, block: Callable[..., Any] | Any) -> Module:
        """Queue a block run against the instance scope once the injector is running."""
        self._invoke_queue.append(InvokeEntry(QueueKind.RUN_BLOCK, annotate(block)))
        return self

    def _register(self, method: str, name: str, recipe: Any) -> Module:
        _check_name(name)
        self._invoke_queue.append(
            InvokeEntry(QueueKind.PROVIDER_REGISTRATION, method, (name, recipe))
        )
        return self

    def __repr__(self) -> str:
        return f"Module({self._name!r}, requires={list(self._requires)!r})"


def _check_name(name: Any) -> None:
    if not isinstance(name, str):
        raise InvalidRecipeError(f"Provider name must be a string, got {name!r}")
