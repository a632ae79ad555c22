"""
Exceptions raised while declaring, loading and injecting modules.
"""

from __future__ import annotations

from collections.abc import Sequence


class InjectorError(Exception):
    """Base class for every error raised by modinject."""


class ModuleNotFoundError(InjectorError, LookupError):  # noqa: A001
    """Raised when a module is retrieved or required but was never declared."""

    def __init__(self, name: str, required_by: str | None = None):
        self.name = name
        self.required_by = required_by
        msg = f"Module '{name}' is not available"
        if required_by:
            msg += f" (required by '{required_by}')"
        super().__init__(msg)


class CyclicDependencyError(InjectorError):
    """Raised when modules require each other or providers depend on themselves."""

    def __init__(self, path: Sequence[str]):
        self.path = list(path)
        cycle_str = " -> ".join(self.path)
        super().__init__(f"Circular dependency detected: {cycle_str}")


class UnknownDependencyError(InjectorError, LookupError):
    """Raised when a requested name has no entry in the active scope."""

    def __init__(self, name: str, requester: str | None = None):
        self.name = name
        self.requester = requester
        msg = f"Unknown dependency '{name}'"
        if requester:
            msg += f" (requested by {requester})"
        super().__init__(msg)


class InjectionScopeError(InjectorError):
    """
    Raised when a name is requested from the wrong phase.

    Config blocks and provider constructors only see constants and provider
    objects; run blocks only see instances.
    """

    def __init__(
        self, name: str, scope: str, requester: str | None = None, hint: str | None = None
    ):
        self.name = name
        self.scope = scope
        self.requester = requester
        self.hint = hint
        if scope == "provider":
            msg = f"'{name}' is only available as an instance and cannot be injected at config time"
        else:
            msg = f"'{name}' is only available at config time and cannot be injected at run time"
        if requester:
            msg += f" (requested by {requester})"
        if hint:
            msg += f"; {hint}"
        super().__init__(msg)


class RegistryFrozenError(InjectorError):
    """Raised when a provider is registered after the injector started running."""

    def __init__(self, name: str, recipe: str):
        self.name = name
        self.recipe = recipe
        super().__init__(f"Cannot register {recipe} '{name}': the provider registry is frozen")


class InvalidRecipeError(InjectorError):
    """Raised for malformed annotations or provider objects."""
