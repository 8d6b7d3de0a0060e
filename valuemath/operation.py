"""
Binary operators with an explicit partial-application form.

``op(a, b)`` applies the operator directly; ``op.partial(a)`` returns a
one-argument callable ``f`` with ``f(b) == op(a, b)``.
"""

from __future__ import annotations

import functools
from typing import Any, Callable


class BinaryOperation:
    """Wraps a two-argument function and adds ``partial``."""

    def __init__(self, func: Callable[..., Any]):
        self._func = func
        functools.update_wrapper(self, func)

    def __call__(self, a: Any, b: Any, **options: Any) -> Any:
        return self._func(a, b, **options)

    def partial(self, a: Any, **options: Any) -> Callable[[Any], Any]:
        """Bind the first operand, returning a callable awaiting the second."""
        func = self._func

        def apply(b: Any) -> Any:
            return func(a, b, **options)

        apply.__name__ = f"{self.__name__}_partial"
        apply.__doc__ = f"{self.__name__}({a!r}, b)"
        return apply

    def __repr__(self) -> str:
        return f"<operation {self.__module__}.{self.__name__}>"


def binary_operation(func: Callable[..., Any]) -> BinaryOperation:
    """Decorator turning a two-argument function into a BinaryOperation."""
    return BinaryOperation(func)
