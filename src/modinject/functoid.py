"""
Functoids pair a callable with the ordered names of the dependencies it takes.

Dependency names are never inferred from a signature. They are supplied when
the callable is registered, in one of three forms:

    Functoid(make_client, ("config", "transport"))
    ["config", "transport", make_client]

    @inject("config", "transport")
    def make_client(config, transport): ...

A callable carrying none of these takes no dependencies.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .errors import InvalidRecipeError

T = TypeVar("T")

INJECT_ATTRIBUTE = "__inject__"


@dataclass(frozen=True)
class Functoid(Generic[T]):
    """A callable together with its declared dependency names."""

    func: Callable[..., T]
    dependencies: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not callable(self.func):
            raise InvalidRecipeError(f"Functoid target must be callable, got {self.func!r}")
        _check_names(self.dependencies, self.func)

    def call(self, *args: Any) -> T:
        """Call the underlying function with already resolved arguments."""
        return self.func(*args)

    def __str__(self) -> str:
        func_name = getattr(self.func, "__name__", repr(self.func))
        return f"{func_name}({', '.join(self.dependencies)})"


def inject(*names: str) -> Callable[[T], T]:
    """Attach dependency names to a function or class."""

    def decorator(target: T) -> T:
        _check_names(names, target)
        setattr(target, INJECT_ATTRIBUTE, tuple(names))
        return target

    return decorator


def annotate(target: Any) -> Functoid[Any]:
    """
    Normalize any supported annotation form into a Functoid.

    Raises:
        InvalidRecipeError: If the target is neither callable nor a
            well-formed ``[*names, callable]`` sequence.
    """
    if isinstance(target, Functoid):
        return target  # pyright: ignore[reportUnknownVariableType]

    if isinstance(target, list | tuple):
        items: Sequence[Any] = target  # pyright: ignore[reportUnknownVariableType]
        if not items or not callable(items[-1]):
            raise InvalidRecipeError(
                f"Annotated sequence must end with a callable, got {list(items)!r}"
            )
        return Functoid(items[-1], tuple(items[:-1]))

    if callable(target):
        names = getattr(target, INJECT_ATTRIBUTE, ())
        return Functoid(target, tuple(names))

    raise InvalidRecipeError(f"Cannot annotate {target!r}: expected a callable")


def _check_names(names: Sequence[Any], target: Any) -> None:
    for name in names:
        if not isinstance(name, str):
            raise InvalidRecipeError(
                f"Dependency names must be strings, got {name!r} for {target!r}"
            )
