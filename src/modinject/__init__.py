"""
modinject - module-based dependency injection with a config phase and a run phase.

This library provides:
- Named modules that declare the modules they require
- Deterministic load order with each module loaded once
- Providers, factories, services, values and constants
- Config blocks that see providers and constants only
- Run blocks that see instances only
- Explicit dependency names instead of signature introspection
"""

from .bindings import InvokeEntry, ProviderEntry, QueueKind, RecipeKind
from .core import Module
from .errors import (
    CyclicDependencyError,
    InjectionScopeError,
    InjectorError,
    InvalidRecipeError,
    ModuleNotFoundError,  # noqa: A004
    RegistryFrozenError,
    UnknownDependencyError,
)
from .functoid import Functoid, annotate, inject
from .injector import Injector, InjectorState, create_injector
from .invoker import Invoker
from .loader import ModuleLoader, load_modules
from .providers import ProviderRegistry
from .registry import ModuleRegistry, default_registry, module, reset_modules
from .scope_base import Scope
from .scope_impl import InstanceScope, ProviderScope

__all__ = [
    "CyclicDependencyError",
    "Functoid",
    "InjectionScopeError",
    "Injector",
    "InjectorError",
    "InjectorState",
    "InstanceScope",
    "InvalidRecipeError",
    "InvokeEntry",
    "Invoker",
    "Module",
    "ModuleLoader",
    "ModuleNotFoundError",
    "ModuleRegistry",
    "ProviderEntry",
    "ProviderRegistry",
    "ProviderScope",
    "QueueKind",
    "RecipeKind",
    "RegistryFrozenError",
    "Scope",
    "UnknownDependencyError",
    "annotate",
    "create_injector",
    "default_registry",
    "inject",
    "load_modules",
    "module",
    "reset_modules",
]
