"""
The provider registry: recipes for producing named instances.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .bindings import ProviderEntry, RecipeKind
from .errors import InvalidRecipeError, RegistryFrozenError
from .functoid import Functoid, annotate
from .scope_base import Scope

logger = logging.getLogger(__name__)

PROVIDER_SUFFIX = "Provider"


class RecipeProvider:
    """Provider object built for value, factory and service recipes."""

    def __init__(self, get: Functoid[Any]):
        self.get = get

    def __repr__(self) -> str:
        return f"RecipeProvider({self.get})"


class ProviderRegistry:
    """
    Stores provider entries for one injector.

    Injectable into config blocks as ``$provide``. Registering under an
    existing name replaces the earlier entry. Once the injector starts
    running the registry is frozen and every registration fails.
    """

    def __init__(self, scope: Scope):
        self._scope = scope
        self._entries: dict[str, ProviderEntry] = {}
        self._decorated: dict[str, Functoid[Any]] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def entry(self, name: str) -> ProviderEntry | None:
        return self._entries.get(name)

    def entries(self) -> Mapping[str, ProviderEntry]:
        return dict(self._entries)

    def getter(self, name: str) -> Functoid[Any]:
        """
        The functoid producing the instance of ``name``.

        Decorated getters live in this registry only, so provider objects
        shared between injectors are never modified.
        """
        if name in self._decorated:
            return self._decorated[name]
        return annotate(self._entries[name].payload.get)

    def provider_entry(self, provider_name: str) -> ProviderEntry | None:
        """Entry whose provider object is injected as ``provider_name`` (``<name>Provider``)."""
        if not provider_name.endswith(PROVIDER_SUFFIX):
            return None
        entry = self._entries.get(provider_name[: -len(PROVIDER_SUFFIX)])
        if entry is None or entry.is_constant:
            return None
        return entry

    def constant(self, name: str, value: Any) -> None:
        self._add(ProviderEntry(name, RecipeKind.CONSTANT, value))

    def value(self, name: str, value: Any) -> None:
        self._add(ProviderEntry(name, RecipeKind.VALUE, RecipeProvider(Functoid(lambda: value))))

    def factory(self, name: str, factory: Any) -> None:
        self._add(ProviderEntry(name, RecipeKind.FACTORY, RecipeProvider(annotate(factory))))

    def service(self, name: str, cls: Any) -> None:
        functoid = annotate(cls)
        if not isinstance(functoid.func, type):
            raise InvalidRecipeError(f"Service '{name}' must be a class, got {functoid.func!r}")
        self._add(ProviderEntry(name, RecipeKind.SERVICE, RecipeProvider(functoid)))

    def provider(self, name: str, provider: Any) -> None:
        """
        Register a provider object, or a callable/class that builds one.

        Builders are invoked right away against the provider scope, so they
        may depend on constants and on other providers registered earlier.
        """
        self._check_frozen(name, RecipeKind.PROVIDER.value)
        if _is_builder(provider):
            provider = self._scope.invoke(provider, requester=f"provider '{name}'")

        get = getattr(provider, "get", None)
        if get is None:
            raise InvalidRecipeError(f"Provider '{name}' must define a 'get' factory")
        annotate(get)
        self._add(ProviderEntry(name, RecipeKind.PROVIDER, provider))

    def decorator(self, name: str, decorator: Any) -> None:
        """
        Wrap the instance produced by an existing provider.

        The decorator is invoked with the original instance available as the
        ``$delegate`` local; its return value replaces the instance.
        """
        self._check_frozen(name, "decorator")
        self._scope.get(name + PROVIDER_SUFFIX, requester=f"decorator of '{name}'")
        original_get = self.getter(name)
        decorator_fn = annotate(decorator)

        def decorated_get(injector: Scope) -> Any:
            delegate = injector.invoke(original_get, requester=f"provider '{name}'")
            return injector.invoke(
                decorator_fn, {"$delegate": delegate}, requester=f"decorator of '{name}'"
            )

        self._decorated[name] = Functoid(decorated_get, ("$injector",))
        logger.debug("Decorated provider '%s'", name)

    def _add(self, entry: ProviderEntry) -> None:
        self._check_frozen(entry.name, entry.kind.value)
        if entry.name in self._entries:
            logger.debug("Replacing provider %s", self._entries[entry.name])
        self._decorated.pop(entry.name, None)
        self._entries[entry.name] = entry
        logger.debug("Registered provider %s", entry)

    def _check_frozen(self, name: str, recipe: str) -> None:
        if self._frozen:
            raise RegistryFrozenError(name, recipe)


def _is_builder(provider: Any) -> bool:
    if isinstance(provider, type | Functoid | list | tuple):
        return True
    return callable(provider) and not hasattr(provider, "get")
