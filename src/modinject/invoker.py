"""
Calls annotated callables with their dependencies resolved by name.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .errors import InvalidRecipeError
from .functoid import Functoid, annotate

if TYPE_CHECKING:
    from .scope_base import Scope


class Invoker:
    """
    Resolves each declared dependency name and calls the target positionally.

    Names are looked up in ``locals`` first, then in the scope, which raises
    when a name is missing or belongs to the other phase.
    """

    def resolve_arguments(
        self,
        functoid: Functoid[Any],
        scope: Scope,
        locals: Mapping[str, Any] | None = None,  # noqa: A002
        requester: str | None = None,
    ) -> list[Any]:
        """Resolve the dependencies of a functoid in declared order."""
        resolved_args: list[Any] = []
        for name in functoid.dependencies:
            if locals is not None and name in locals:
                resolved_args.append(locals[name])
            else:
                resolved_args.append(scope.get(name, requester))
        return resolved_args

    def invoke(
        self,
        target: Any,
        scope: Scope,
        locals: Mapping[str, Any] | None = None,  # noqa: A002
        requester: str | None = None,
    ) -> Any:
        functoid = annotate(target)
        args = self.resolve_arguments(functoid, scope, locals, requester)
        return functoid.call(*args)

    def instantiate(
        self,
        cls: Any,
        scope: Scope,
        locals: Mapping[str, Any] | None = None,  # noqa: A002
        requester: str | None = None,
    ) -> Any:
        functoid = annotate(cls)
        if not isinstance(functoid.func, type):
            raise InvalidRecipeError(f"Cannot instantiate {functoid.func!r}: expected a class")
        args = self.resolve_arguments(functoid, scope, locals, requester)
        return functoid.call(*args)
