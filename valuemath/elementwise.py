"""
Elementwise (broadcast) operators, exported as ``valuemath.el``.

A Real paired with a Complex is applied to each component separately, and
Complex with Complex combines component by component. A scalar paired with
a container is applied to every element with field arithmetic.

Every binary operator supports partial application::

    >>> from valuemath import el
    >>> one_over = el.div.partial(1)
    >>> one_over(2)
    0.5
"""

from __future__ import annotations

from typing import Any

from .core.errors import UnsupportedOperationError
from .field import neg
from .geometric import broadcast
from .numeric import (
    Complex,
    real_div,
    real_mod,
    real_pow,
    scalar_add,
    scalar_div,
    scalar_inv,
    scalar_mul,
    scalar_pow,
)
from .operation import binary_operation
from .value import Rank, rank_of

_SCALAR = (Rank.REAL, Rank.COMPLEX)


def _componentwise(a: Any, b: Any, fn) -> Any:
    """
    Combine two scalars part by part.

    A Real operand is applied to both parts of the Complex one.
    """
    ka, kb = rank_of(a), rank_of(b)
    if ka == Rank.REAL and kb == Rank.REAL:
        return fn(a, b)
    if ka == Rank.REAL:
        return Complex(fn(a, b.real), fn(a, b.imag))
    if kb == Rank.REAL:
        return Complex(fn(a.real, b), fn(a.imag, b))
    return Complex(fn(a.real, b.real), fn(a.imag, b.imag))


def _is_scalar_pair(a: Any, b: Any) -> bool:
    return rank_of(a) in _SCALAR and rank_of(b) in _SCALAR


@binary_operation
def add(a: Any, b: Any) -> Any:
    if _is_scalar_pair(a, b):
        if rank_of(a) == Rank.COMPLEX and rank_of(b) == Rank.COMPLEX:
            return scalar_add(a, b)
        return _componentwise(a, b, lambda x, y: x + y)
    return broadcast(a, b, scalar_add, operation="add")


@binary_operation
def sub(a: Any, b: Any) -> Any:
    return add(a, neg(b))


@binary_operation
def mul(a: Any, b: Any) -> Any:
    """Componentwise for scalars; Hadamard product for containers."""
    if _is_scalar_pair(a, b):
        return _componentwise(a, b, lambda x, y: x * y)
    return broadcast(a, b, scalar_mul, operation="mul")


@binary_operation
def div(a: Any, b: Any) -> Any:
    """
    Ordered division.

    A Real divided by zero follows IEEE-754. A container divided by a zero
    Complex raises ZeroDivisionError, since the scalar is applied with field
    division.
    """
    if _is_scalar_pair(a, b):
        return _componentwise(a, b, real_div)
    return broadcast(a, b, scalar_div, pair_fn=div, operation="div")


@binary_operation
def mod(a: Any, b: Any) -> Any:
    """Remainder with the sign of the dividend; modulo zero gives NaN."""
    if _is_scalar_pair(a, b):
        return _componentwise(a, b, real_mod)
    return broadcast(a, b, mod, operation="mod")


@binary_operation
def pow(base: Any, exponent: Any) -> Any:
    """
    Raise to a real exponent.

    Each part of a Complex is raised independently; container elements use
    the field power and the container keeps its variant.
    """
    if rank_of(exponent) != Rank.REAL:
        raise UnsupportedOperationError(
            "Elementwise power requires a real exponent", operation="pow"
        )
    kind = rank_of(base)
    if kind == Rank.REAL:
        return real_pow(base, exponent)
    if kind == Rank.COMPLEX:
        return Complex(real_pow(base.real, exponent), real_pow(base.imag, exponent))
    return base._map(lambda e: scalar_pow(e, exponent))


def inv(value: Any) -> Any:
    """Reciprocal of each component, or field inverse of each element."""
    kind = rank_of(value)
    if kind == Rank.REAL:
        return real_div(1.0, value)
    if kind == Rank.COMPLEX:
        return Complex(real_div(1.0, value.real), real_div(1.0, value.imag))
    return value._map(scalar_inv)


__all__ = ["add", "sub", "mul", "div", "mod", "pow", "inv"]
