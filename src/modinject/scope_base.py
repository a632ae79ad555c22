"""
Abstract lookup interface shared by the provider scope and the instance scope.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from .functoid import annotate
from .invoker import Invoker


class Scope(ABC):
    """
    Resolves dependency names for one injection phase.

    Config blocks only ever receive a provider scope and run blocks only
    ever receive an instance scope; both resolve names and invoke annotated
    callables the same way, they differ in which names they expose.
    """

    phase: str

    def __init__(self) -> None:
        self._invoker = Invoker()

    @abstractmethod
    def get(self, name: str, requester: str | None = None) -> Any:
        """
        Resolve a name.

        Args:
            name: The dependency name
            requester: Description of who asked, used in error messages

        Raises:
            UnknownDependencyError: If nothing is registered under ``name``
            InjectionScopeError: If ``name`` belongs to the other phase
        """

    @abstractmethod
    def has(self, name: str) -> bool:
        """Check whether ``name`` can be resolved in this scope."""

    def invoke(
        self,
        target: Any,
        locals: Mapping[str, Any] | None = None,  # noqa: A002
        requester: str | None = None,
    ) -> Any:
        """Call an annotated callable with its dependencies resolved from this scope."""
        return self._invoker.invoke(target, self, locals, requester)

    def instantiate(
        self,
        cls: Any,
        locals: Mapping[str, Any] | None = None,  # noqa: A002
        requester: str | None = None,
    ) -> Any:
        """Create an instance of an annotated class with its dependencies resolved."""
        return self._invoker.instantiate(cls, self, locals, requester)

    def annotate(self, target: Any) -> tuple[str, ...]:
        """Return the dependency names declared for ``target``."""
        return annotate(target).dependencies
