"""
Base MathValue class for the valuemath kernel.

This module provides the foundation shared by every value kind:
- The rank (promotion) hierarchy Real < Complex < Vector < Matrix
- The variant tag carried by containers
- Operator overloading that routes into the field layer
- Fuzzy comparison helpers
"""

from __future__ import annotations

import math
import numbers
from abc import ABC, abstractmethod
from enum import Enum, IntEnum
from typing import Any, ClassVar

import numpy as np

from .core.errors import UnsupportedOperationError


class Rank(IntEnum):
    """
    Type promotion hierarchy.

    A binary operation between two kinds yields the higher-ranked kind.
    Reals are plain Python numbers and never carry a tag.
    """

    REAL = 0
    COMPLEX = 1
    VECTOR = 2
    MATRIX = 3


class Variant(str, Enum):
    """Per-container marker recording whether any element is Complex."""

    EMPTY = "0"
    REAL = "r"
    COMPLEX = "c"


class ToleranceMode:
    """Modes for fuzzy comparison."""

    RELATIVE = "relative"  # |a - b| / max(|a|, |b|) <= tol
    ABSOLUTE = "absolute"  # |a - b| <= tol


def is_real(value: Any) -> bool:
    """True for plain (untagged) real numbers."""
    return isinstance(value, numbers.Real)


def is_value(value: Any) -> bool:
    """True for anything the kernel can operate on."""
    return isinstance(value, MathValue) or is_real(value)


def rank_of(value: Any) -> Rank:
    """
    Classify a value.

    Raises:
        UnsupportedOperationError: For objects that are not kernel values
    """
    if isinstance(value, MathValue):
        return value.rank
    if is_real(value):
        return Rank.REAL
    raise UnsupportedOperationError(
        f"Unsupported operand type: {type(value).__name__}"
    )


def variant_of(value: Any) -> Variant:
    """Variant of a scalar or container."""
    kind = rank_of(value)
    if kind == Rank.REAL:
        return Variant.REAL
    if kind == Rank.COMPLEX:
        return Variant.COMPLEX
    return value.variant


def promote_variant(a: Variant, b: Variant) -> Variant:
    """
    Variant of a result combining operands tagged ``a`` and ``b``.

    REAL defers to the other side, COMPLEX defers to anything but REAL,
    and EMPTY absorbs COMPLEX.
    """
    if a == Variant.REAL:
        return b
    if b == Variant.REAL:
        return a
    if a == Variant.COMPLEX:
        return b
    if b == Variant.COMPLEX:
        return a
    return Variant.EMPTY


def format_scalar(value: float) -> str:
    """Format a real, dropping a trailing .0 on integral values."""
    if math.isfinite(value) and value == int(value) and abs(value) < 1e10:
        return str(int(value))
    return str(value)


class MathValue(ABC):
    """
    Base class for tagged kernel values (Complex, Vector, Matrix).

    Provides:
    - The ``rank`` class variable used for promotion
    - Operator overloading (routes to the field layer)
    - String, TeX and NumPy conversions

    Note: Concrete subclasses inherit from both BaseModel and MathValue,
    e.g. ``class Complex(BaseModel, MathValue):``. Because BaseModel comes
    first in the MRO, subclasses define ``__eq__``, ``__hash__``, ``__str__``
    and ``__repr__`` themselves.
    """

    rank: ClassVar[Rank]

    @abstractmethod
    def to_string(self) -> str:
        """Convert to human-readable string."""

    @abstractmethod
    def to_tex(self) -> str:
        """Convert to LaTeX representation."""

    @abstractmethod
    def to_python(self) -> Any:
        """Convert to Python builtins (float, complex, nested lists)."""

    def to_numpy(self) -> np.ndarray:
        """Convert to a NumPy array."""
        return np.asarray(self.to_python())

    # Operator overloading (field semantics)

    def __add__(self, other: Any) -> Any:
        if not is_value(other):
            return NotImplemented
        from .field import add
        return add(self, other)

    def __radd__(self, other: Any) -> Any:
        if not is_value(other):
            return NotImplemented
        from .field import add
        return add(other, self)

    def __sub__(self, other: Any) -> Any:
        if not is_value(other):
            return NotImplemented
        from .field import sub
        return sub(self, other)

    def __rsub__(self, other: Any) -> Any:
        if not is_value(other):
            return NotImplemented
        from .field import sub
        return sub(other, self)

    def __mul__(self, other: Any) -> Any:
        if not is_value(other):
            return NotImplemented
        from .field import mul
        return mul(self, other)

    def __rmul__(self, other: Any) -> Any:
        if not is_value(other):
            return NotImplemented
        from .field import mul
        return mul(other, self)

    def __truediv__(self, other: Any) -> Any:
        if not is_value(other):
            return NotImplemented
        from .field import div
        return div(self, other)

    def __rtruediv__(self, other: Any) -> Any:
        if not is_value(other):
            return NotImplemented
        from .field import div
        return div(other, self)

    def __pow__(self, other: Any) -> Any:
        if not is_value(other):
            return NotImplemented
        from .field import pow
        return pow(self, other)

    def __rpow__(self, other: Any) -> Any:
        if not is_value(other):
            return NotImplemented
        # other ** self == exp(self, base=other)
        from .field import exp
        return exp(self, other)

    def __neg__(self) -> Any:
        from .field import neg
        return neg(self)

    def __pos__(self) -> Any:
        return self


def fuzzy_compare(a: float, b: float, tolerance: float, mode: str) -> bool:
    """
    Compare two floats with tolerance.

    Args:
        a: First value
        b: Second value
        tolerance: Tolerance value
        mode: Comparison mode (relative, absolute)

    Returns:
        True if values are equal within tolerance
    """
    if a == b:
        return True

    if mode == ToleranceMode.ABSOLUTE:
        return abs(a - b) <= tolerance

    elif mode == ToleranceMode.RELATIVE:
        max_abs = max(abs(a), abs(b))
        if max_abs == 0:
            return abs(a - b) <= tolerance
        return abs(a - b) / max_abs <= tolerance

    else:
        raise ValueError(f"Unknown tolerance mode: {mode}")
