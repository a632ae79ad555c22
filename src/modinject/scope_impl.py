"""
Provider scope (config phase) and instance scope (run phase).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .errors import CyclicDependencyError, InjectionScopeError, UnknownDependencyError
from .providers import PROVIDER_SUFFIX, ProviderRegistry
from .scope_base import Scope

logger = logging.getLogger(__name__)


class ProviderScope(Scope):
    """
    Resolves names while an injector is being configured.

    Exposes constants, provider objects as ``<name>Provider``, the provider
    registry as ``$provide`` and itself as ``$injector``. Asking for a name
    that only exists as an instance raises ``InjectionScopeError``.
    """

    phase = "provider"

    def __init__(self, instances: Mapping[str, Any]):
        """
        Create a provider scope.

        Args:
            instances: The instance cache of the owning injector, consulted
                so that a provider whose instance was already realized is
                never handed out for configuration.
        """
        super().__init__()
        self._instances = instances
        self.providers = ProviderRegistry(self)

    def get(self, name: str, requester: str | None = None) -> Any:
        if name == "$provide":
            return self.providers
        if name == "$injector":
            return self

        entry = self.providers.entry(name)
        if entry is not None:
            if entry.is_constant:
                return entry.payload
            raise InjectionScopeError(
                name,
                self.phase,
                requester,
                hint=f"inject '{name}{PROVIDER_SUFFIX}' to configure it",
            )

        provider_entry = self.providers.provider_entry(name)
        if provider_entry is not None:
            if provider_entry.name in self._instances:
                raise InjectionScopeError(provider_entry.name, self.phase, requester)
            return provider_entry.payload

        raise UnknownDependencyError(name, requester)

    def has(self, name: str) -> bool:
        if name in ("$provide", "$injector"):
            return True
        entry = self.providers.entry(name)
        if entry is not None:
            return entry.is_constant
        return self.providers.provider_entry(name) is not None


class InstanceScope(Scope):
    """
    Resolves names once an injector is running.

    Instances are realized on first request by invoking the provider's
    ``get`` and cached for the lifetime of the injector. Asking for a
    ``<name>Provider`` raises ``InjectionScopeError``.
    """

    phase = "instance"

    def __init__(self, providers: ProviderRegistry, instances: dict[str, Any]):
        super().__init__()
        self._providers = providers
        self._instances = instances
        self._realizing: list[str] = []

    def get(self, name: str, requester: str | None = None) -> Any:
        if name == "$injector":
            return self
        if name == "$provide":
            raise InjectionScopeError(name, self.phase, requester)
        if name in self._instances:
            return self._instances[name]

        entry = self._providers.entry(name)
        if entry is None:
            if self._providers.provider_entry(name) is not None:
                raise InjectionScopeError(name, self.phase, requester)
            raise UnknownDependencyError(name, requester)

        if entry.is_constant:
            return entry.payload

        if name in self._realizing:
            cycle_start = self._realizing.index(name)
            raise CyclicDependencyError(self._realizing[cycle_start:] + [name])

        self._realizing.append(name)
        try:
            instance = self.invoke(self._providers.getter(name), requester=f"provider '{name}'")
        finally:
            self._realizing.pop()

        self._instances[name] = instance
        logger.debug("Realized instance '%s'", name)
        return instance

    def has(self, name: str) -> bool:
        if name == "$injector" or name in self._instances:
            return True
        return self._providers.entry(name) is not None

    def get_instance_count(self) -> int:
        return len(self._instances)
