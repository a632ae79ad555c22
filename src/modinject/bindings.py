"""
Queue entries recorded by modules and recipe entries held by the provider registry.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class QueueKind(Enum):
    """Kinds of invoke entries a module can queue."""

    CONSTANT = "constant"
    PROVIDER_REGISTRATION = "provider-registration"
    CONFIG_BLOCK = "config-block"
    RUN_BLOCK = "run-block"


@dataclass(frozen=True)
class InvokeEntry:
    """
    A deferred call recorded on a module.

    ``target`` is either the name of a provider registry method (for
    constants and provider registrations) or an annotated callable (for
    config and run blocks).
    """

    kind: QueueKind
    target: str | Callable[..., Any] | Any
    args: tuple[Any, ...] = ()

    @property
    def registers_provider(self) -> bool:
        return isinstance(self.target, str)

    def __str__(self) -> str:
        if isinstance(self.target, str):
            name = self.args[0] if self.args else "?"
            return f"{self.target}('{name}')"
        return self.kind.value


class RecipeKind(Enum):
    """How a provider registry entry was declared."""

    VALUE = "value"
    FACTORY = "factory"
    SERVICE = "service"
    PROVIDER = "provider"
    CONSTANT = "constant"


@dataclass(frozen=True)
class ProviderEntry:
    """
    A named recipe in the provider registry.

    For constants ``payload`` is the literal value; for every other kind it
    is a provider object whose ``get`` attribute produces the instance.
    """

    name: str
    kind: RecipeKind
    payload: Any

    @property
    def is_constant(self) -> bool:
        return self.kind is RecipeKind.CONSTANT

    def __str__(self) -> str:
        return f"{self.name} ({self.kind.value})"
