"""@typeclass decorator and dispatch mechanism.

Value-level behavior of the collections (what counts as "empty", how a member
is picked out of a value) varies by the value's type. Typeclasses keep those
rules in one place, one registered instance per type, instead of a chain of
isinstance checks inside every collection operation.
"""

from __future__ import annotations

from abc import ABCMeta
from collections.abc import Callable
from typing import Any, Generic, TypeVar

import wrapt

__all__ = ['NoInstanceError', 'TypeClass', 'typeclass']

F = TypeVar('F', bound=Callable[..., Any])


class NoInstanceError(TypeError):
    """Raised when no typeclass instance is registered for a type."""

    def __init__(self, typeclass_name: str, value_type: type) -> None:
        self.typeclass_name = typeclass_name
        self.value_type = value_type
        super().__init__(f"No instance of '{typeclass_name}' for type '{value_type.__name__}'")


class TypeClass(wrapt.ObjectProxy, Generic[F]):
    """A typeclass with registered type instances.

    Dispatch order for the first argument's type:

    1. exact type match;
    2. nearest class in the MRO;
    3. registered abstract base classes (``Mapping``, ``Sized``...), in
       registration order;
    4. the decorated function itself, if it has a body.

    Example:
        ```python
        @typeclass
        def describe(value) -> str: ...

        @describe.instance(int)
        def _describe_int(value: int) -> str:
            return f'Int({value})'

        describe(42)
        # 'Int(42)'
        ```
    """

    def __init__(self, default_fn: F) -> None:
        super().__init__(default_fn)
        self._self_name = default_fn.__name__
        self._self_default: F | None = default_fn if _has_implementation(default_fn) else None
        self._self_instances: dict[type, Callable[..., Any]] = {}
        self._self_abstract_instances: dict[type, Callable[..., Any]] = {}

    def instance(self, *types: type) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register an implementation for one or more types.

        Example:
            ```python
            @describe.instance(list, tuple)
            def _describe_sequence(value) -> str:
                return f'Seq({len(value)})'
            ```
        """

        def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
            for type_ in types:
                if isinstance(type_, ABCMeta):
                    self._self_abstract_instances[type_] = fn
                # ABCs with concrete subclasses still match exactly and via MRO
                self._self_instances[type_] = fn
            return fn

        return decorator

    def _find_instance(self, value: Any) -> Callable[..., Any] | None:
        """Find the best matching instance for a value."""
        value_type = type(value)

        for base in value_type.__mro__:
            if base in self._self_instances:
                return self._self_instances[base]

        for abstract_type, fn in self._self_abstract_instances.items():
            if isinstance(value, abstract_type):
                return fn

        return None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """Dispatch to the appropriate instance based on first argument."""
        if not args:
            raise TypeError(f'{self._self_name}() requires at least one argument')

        first_arg = args[0]
        instance_fn = self._find_instance(first_arg)

        if instance_fn is not None:
            return instance_fn(*args, **kwargs)

        if self._self_default is not None:
            return self._self_default(*args, **kwargs)

        raise NoInstanceError(self._self_name, type(first_arg))

    def __repr__(self) -> str:
        return f'<typeclass {self._self_name} with {len(self._self_instances)} instances>'


def _stub(*args: Any, **kwargs: Any) -> Any: ...


def _has_implementation(fn: Callable[..., Any]) -> bool:
    """Check if a function has an actual implementation (not just ...).

    Stubs whose body is only `...`, `pass` or a docstring compile to the same
    bytecode as `_stub`.
    """
    code = getattr(fn, '__code__', None)
    if code is None:
        return True  # Built-in or C extension, assume it has implementation
    return code.co_code != _stub.__code__.co_code


def typeclass(fn: F) -> TypeClass[F]:
    """Decorator to create a typeclass from a function signature.

    The decorated function serves as the fallback implementation when it has
    a body, or just names the signature when the body is `...`.
    """
    return TypeClass(fn)
