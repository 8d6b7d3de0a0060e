"""
Field operators.

Real and Complex combine with true complex algebra; matrices use linear
algebra (matrix product, inverse via the adjugate, integer powers by
repeated squaring). Scalars broadcast over containers.
"""

from __future__ import annotations

import math
from typing import Any

from .core.config import settings
from .core.errors import (
    SingularMatrixError,
    UnsupportedOperationError,
)
from .core.logging import get_context_logger
from .geometric import Matrix, broadcast
from .numeric import (
    Complex,
    real_div,
    real_exp,
    real_log,
    scalar_add,
    scalar_div,
    scalar_inv,
    scalar_log,
    scalar_mul,
    scalar_neg,
    scalar_pow,
)
from .operation import binary_operation
from .value import MathValue, Rank, ToleranceMode, fuzzy_compare, is_real, rank_of

logger = get_context_logger(__name__, component="field")

euler = math.e

_SCALAR = (Rank.REAL, Rank.COMPLEX)


def _require_real_exponent(exponent: Any, operation: str) -> None:
    if rank_of(exponent) != Rank.REAL:
        raise UnsupportedOperationError(
            f"{operation} requires a real exponent", operation=operation
        )


def _reject_vector(operation: str, *values: Any) -> None:
    if any(rank_of(v) == Rank.VECTOR for v in values):
        raise UnsupportedOperationError(
            f"{operation} is not defined for vectors", operation=operation
        )


@binary_operation
def add(a: Any, b: Any) -> Any:
    """Field addition: Complex + Real adds to the real part only."""
    if rank_of(a) in _SCALAR and rank_of(b) in _SCALAR:
        return scalar_add(a, b)
    return broadcast(a, b, scalar_add, operation="add")


@binary_operation
def sub(a: Any, b: Any) -> Any:
    return add(a, neg(b))


@binary_operation
def mul(a: Any, b: Any) -> Any:
    """
    Field multiplication.

    Scalars use complex algebra and broadcast over containers. Two matrices
    multiply as a matrix product.

    Raises:
        UnsupportedOperationError: Vector times Vector or Vector times Matrix
    """
    ka, kb = rank_of(a), rank_of(b)
    if ka in _SCALAR and kb in _SCALAR:
        return scalar_mul(a, b)
    if ka == Rank.MATRIX and kb == Rank.MATRIX:
        return a.mul(b)
    if ka in _SCALAR or kb in _SCALAR:
        return broadcast(a, b, scalar_mul, operation="mul")
    raise UnsupportedOperationError(
        f"Cannot multiply {ka.name.lower()} and {kb.name.lower()}; "
        "use Vector.dot or el.mul",
        operation="mul",
    )


@binary_operation
def div(a: Any, b: Any) -> Any:
    """a * inv(b); for matrices this is A times the inverse of B."""
    return mul(a, inv(b))


def inv(value: Any) -> Any:
    """
    Multiplicative inverse.

    Raises:
        ZeroDivisionError: Zero Complex
        NotSquareError: Non-square matrix
        SingularMatrixError: Determinant exactly zero
        UnsupportedOperationError: Vector
    """
    kind = rank_of(value)
    if kind in _SCALAR:
        return scalar_inv(value)
    if kind == Rank.MATRIX:
        return _matrix_inverse(value)
    raise UnsupportedOperationError("Vectors have no inverse", operation="inv")


def _matrix_inverse(matrix: Matrix) -> Matrix:
    matrix._require_square("Inverse")
    det = matrix.det()
    if equals(det, 0):
        logger.debug("Singular matrix", extra_data={"shape": matrix.shape})
        raise SingularMatrixError(matrix.shape)
    return broadcast(scalar_inv(det), matrix.adjugate(), scalar_mul, operation="mul")


def neg(value: Any) -> Any:
    kind = rank_of(value)
    if kind in _SCALAR:
        return scalar_neg(value)
    return value._map(scalar_neg)


def pow(base: Any, exponent: Any) -> Any:
    """
    Raise base to a real exponent.

    Complex bases use the polar form. Matrix bases need an integer
    exponent; other exponents would need an eigendecomposition.
    """
    _require_real_exponent(exponent, "pow")
    kind = rank_of(base)
    if kind in _SCALAR:
        return scalar_pow(base, exponent)
    if kind == Rank.MATRIX:
        return _matrix_pow(base, exponent)
    raise UnsupportedOperationError("Vectors cannot be raised to a power", operation="pow")


def _matrix_pow(matrix: Matrix, exponent: float) -> Matrix:
    matrix._require_square("Matrix power")
    if not float(exponent).is_integer():
        matrix.eigen_decomposition()

    e = int(exponent)
    if e == 0:
        return Matrix.identity(matrix.n_rows)
    if e == 1:
        return matrix
    if e < 0:
        return _matrix_pow(inv(matrix), -e)

    result = None
    square = matrix
    while e:
        if e & 1:
            result = square if result is None else result.mul(square)
        e >>= 1
        if e:
            square = square.mul(square)
    return result


def exp(value: Any, base: Any | None = None) -> Any:
    """
    base ** value, with Euler's number as the default base.

    Raises:
        NotSquareError: Non-square matrix value
        OperationNotImplementedError: Paths needing an eigendecomposition
        UnsupportedOperationError: Vectors, or a Matrix raised to a Matrix
    """
    if base is None:
        base = euler
    _reject_vector("exp", value, base)
    kv, kb = rank_of(value), rank_of(base)

    if kb == Rank.REAL:
        if kv == Rank.REAL:
            return real_exp(value) if base == euler else scalar_pow(base, value)
        if kv == Rank.COMPLEX:
            theta = value.imag if base == euler else value.imag * real_log(base)
            magnitude = real_exp(value.real) if base == euler else scalar_pow(base, value.real)
            return Complex.create_mag_angle(magnitude, theta)
        value._require_square("Matrix exponential")
        return value.eigen_decomposition()

    if kb == Rank.COMPLEX:
        if kv == Rank.REAL:
            return pow(base, value)
        if kv == Rank.COMPLEX:
            return exp(mul(value, log(base)))
        value._require_square("Matrix exponential")
        return value.eigen_decomposition()

    # Matrix base
    if kv == Rank.REAL:
        return pow(base, value)
    if kv == Rank.COMPLEX:
        return exp(mul(value, log(base)))
    raise UnsupportedOperationError(
        "Matrix raised to a matrix is not supported", operation="exp"
    )


def log(value: Any, base: Any | None = None) -> Any:
    """
    Logarithm of value, natural by default.

    Complex values yield ln|z| + i*arg(z) with arg in (-pi, pi].

    Raises:
        UnsupportedOperationError: Matrix base, or vectors
        OperationNotImplementedError: Matrix value
    """
    if base is not None and rank_of(base) == Rank.MATRIX:
        raise UnsupportedOperationError(
            "Matrix base logarithm not supported", operation="log"
        )
    _reject_vector("log", value, *([] if base is None else [base]))

    kind = rank_of(value)
    if kind == Rank.MATRIX:
        value._require_square("Matrix logarithm")
        return value.eigen_decomposition()

    ln_value = scalar_log(value)
    if base is None:
        return ln_value

    if rank_of(base) == Rank.COMPLEX:
        ln_base = scalar_log(base)
        if ln_base.imag != 0:
            return scalar_div(ln_value, ln_base)
        ln_base = ln_base.real
    else:
        ln_base = real_log(base)
    if kind == Rank.COMPLEX:
        return Complex(real_div(ln_value.real, ln_base), real_div(ln_value.imag, ln_base))
    return real_div(ln_value, ln_base)


def nrt(value: Any, n: Any) -> Any:
    """n-th root, pow(value, 1/n)."""
    return pow(value, real_div(1.0, n))


def sqrt(value: Any) -> Any:
    return nrt(value, 2)


def _kind(value: Any) -> Rank | None:
    if isinstance(value, MathValue) or is_real(value):
        return rank_of(value)
    return None


@binary_operation
def equals(a: Any, b: Any) -> bool:
    """
    Exact structural equality.

    A Real equals a Complex whose imaginary part is exactly zero. Different
    kinds or shapes compare False; this never raises.
    """
    return _compare(a, b, lambda x, y: x == y)


@binary_operation
def is_close(
    a: Any,
    b: Any,
    tolerance: float | None = None,
    mode: str = ToleranceMode.ABSOLUTE,
) -> bool:
    """
    Equality within a tolerance, with the same coercion and shape rules
    as ``equals``. Complex parts are compared independently.
    """
    if tolerance is None:
        tolerance = settings.DEFAULT_TOLERANCE
    return _compare(a, b, lambda x, y: fuzzy_compare(x, y, tolerance, mode))


def _compare(a: Any, b: Any, same) -> bool:
    ka, kb = _kind(a), _kind(b)
    if ka is None or kb is None:
        return False

    if ka in _SCALAR and kb in _SCALAR:
        ar, ai = (a.real, a.imag) if ka == Rank.COMPLEX else (a, 0.0)
        br, bi = (b.real, b.imag) if kb == Rank.COMPLEX else (b, 0.0)
        return same(ar, br) and same(ai, bi)

    if ka != kb:
        return False

    if ka == Rank.VECTOR:
        if a.length != b.length:
            return False
        return all(_compare(x, y, same) for x, y in zip(a.elements, b.elements))

    if a.shape != b.shape:
        return False
    return all(
        _compare(x, y, same)
        for ra, rb in zip(a.cells, b.cells)
        for x, y in zip(ra, rb)
    )


__all__ = [
    "add",
    "sub",
    "mul",
    "div",
    "inv",
    "neg",
    "pow",
    "exp",
    "log",
    "nrt",
    "sqrt",
    "equals",
    "is_close",
    "euler",
]
