"""
Numeric value types: Real helpers and the Complex number type.

Reals are plain Python numbers. Arithmetic on them follows IEEE-754:
division by zero yields a signed infinity, invalid operations yield NaN.

Complex is a frozen pydantic model with real and imaginary parts. The
``scalar_*`` functions implement field arithmetic over Real and Complex and
are the building blocks for the container and operator layers.
"""

from __future__ import annotations

import math
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .value import MathValue, Rank, format_scalar

# IEEE-754 helpers for Reals

def real_div(a: float, b: float) -> float:
    """a / b, yielding a signed infinity or NaN when b is zero."""
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def real_mod(a: float, b: float) -> float:
    """Remainder with the sign of the dividend; NaN when b is zero."""
    if b == 0 or math.isinf(a):
        return math.nan
    return math.fmod(a, b)


def real_pow(base: float, exponent: float) -> float:
    """
    base ** exponent with IEEE results instead of exceptions.

    A negative base with a fractional exponent gives NaN, a zero base with a
    negative exponent gives infinity.
    """
    if base == 0 and exponent < 0:
        # -0 keeps its sign for odd integral exponents
        odd = float(exponent).is_integer() and int(exponent) % 2 == 1
        return math.copysign(math.inf, base) if odd else math.inf
    try:
        return math.pow(base, exponent)
    except ValueError:
        return math.nan
    except OverflowError:
        return math.inf


def real_log(x: float) -> float:
    """Natural logarithm: -inf at zero, NaN for negatives."""
    if x == 0:
        return -math.inf
    if x < 0 or math.isnan(x):
        return math.nan
    return math.log(x)


def real_exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


class Complex(BaseModel, MathValue):
    """
    Complex number value.

    Examples:
        >>> z = Complex(3, 4)
        >>> z.magnitude()
        5.0
        >>> Complex(1, 2) * Complex(3, 4)
        Complex(-5, 10)
    """

    model_config = ConfigDict(frozen=True)

    real: float = Field(description="The real part")
    imag: float = Field(default=0.0, description="The imaginary part")

    rank: ClassVar[Rank] = Rank.COMPLEX

    def __init__(self, real: Any = 0.0, imag: float = 0.0, **kwargs):
        """Initialize from parts, or from a builtin complex."""
        if isinstance(real, complex):
            real, imag = real.real, real.imag
        super().__init__(real=real, imag=imag, **kwargs)

    @classmethod
    def create_mag_angle(cls, magnitude: float, angle: float) -> Complex:
        """Create from polar coordinates."""
        return cls(magnitude * math.cos(angle), magnitude * math.sin(angle))

    def magnitude(self) -> float:
        return math.hypot(self.real, self.imag)

    def phase(self) -> float:
        """Argument in (-pi, pi]."""
        return math.atan2(self.imag, self.real)

    def conj(self) -> Complex:
        return Complex(self.real, -self.imag)

    def to_python(self) -> complex:
        return complex(self.real, self.imag)

    def to_string(self) -> str:
        """Convert to string like '3+4i'."""
        re, im = self.real, self.imag
        if im == 0:
            return format_scalar(re)
        if im == 1:
            im_str = "i"
        elif im == -1:
            im_str = "-i"
        else:
            im_str = f"{format_scalar(im)}i"
        if re == 0:
            return im_str
        if im_str.startswith("-"):
            return f"{format_scalar(re)}{im_str}"
        return f"{format_scalar(re)}+{im_str}"

    def to_tex(self) -> str:
        return self.to_string()

    def __eq__(self, other: Any) -> bool:
        from .field import equals
        return equals(self, other)

    def __hash__(self) -> int:
        return hash(complex(self.real, self.imag))

    def __abs__(self) -> float:
        return self.magnitude()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Complex({format_scalar(self.real)}, {format_scalar(self.imag)})"


Scalar = float | Complex


def parts(value: Any) -> tuple[float, float]:
    """(real, imag) of a Real or Complex."""
    if isinstance(value, Complex):
        return value.real, value.imag
    return value, 0.0


def real(value: Any) -> float:
    return value.real if isinstance(value, Complex) else value


def imag(value: Any) -> float:
    return value.imag if isinstance(value, Complex) else 0.0


def magnitude(value: Any) -> float:
    if isinstance(value, Complex):
        return value.magnitude()
    return abs(value)


def phase(value: Any) -> float:
    if isinstance(value, Complex):
        return value.phase()
    return math.atan2(0.0, value)


def conj(value: Any) -> Any:
    if isinstance(value, Complex):
        return value.conj()
    return value


def create_mag_angle(magnitude: float, angle: float) -> Complex:
    return Complex.create_mag_angle(magnitude, angle)


# Field arithmetic over scalars (Real and Complex)

def scalar_add(a: Any, b: Any) -> Any:
    if isinstance(a, Complex) or isinstance(b, Complex):
        ar, ai = parts(a)
        br, bi = parts(b)
        return Complex(ar + br, ai + bi)
    return a + b


def scalar_neg(a: Any) -> Any:
    if isinstance(a, Complex):
        return Complex(-a.real, -a.imag)
    return -a


def scalar_sub(a: Any, b: Any) -> Any:
    return scalar_add(a, scalar_neg(b))


def scalar_mul(a: Any, b: Any) -> Any:
    """(a+bi)(c+di) = (ac-bd) + (ad+bc)i"""
    if isinstance(a, Complex) and isinstance(b, Complex):
        return Complex(
            a.real * b.real - a.imag * b.imag,
            a.real * b.imag + a.imag * b.real,
        )
    if isinstance(a, Complex):
        return Complex(a.real * b, a.imag * b)
    if isinstance(b, Complex):
        return Complex(a * b.real, a * b.imag)
    return a * b


def scalar_inv(a: Any) -> Any:
    """
    Field reciprocal.

    Raises:
        ZeroDivisionError: For a zero Complex
    """
    if isinstance(a, Complex):
        denom = a.real ** 2 + a.imag ** 2
        if denom == 0:
            raise ZeroDivisionError("Complex division by zero")
        return Complex(a.real / denom, -a.imag / denom)
    return real_div(1.0, a)


def scalar_div(a: Any, b: Any) -> Any:
    return scalar_mul(a, scalar_inv(b))


def scalar_pow(base: Any, exponent: float) -> Any:
    """Real power, or polar-form power for a Complex base."""
    if isinstance(base, Complex):
        if base.real == 0 and base.imag == 0:
            if exponent > 0:
                return Complex(0.0, 0.0)
            if exponent == 0:
                return Complex(1.0, 0.0)
        mag = real_pow(base.magnitude(), exponent)
        return Complex.create_mag_angle(mag, base.phase() * exponent)
    return real_pow(base, exponent)


def scalar_log(value: Any) -> Any:
    """Natural log; a Complex argument yields ln|z| + i*arg(z)."""
    if isinstance(value, Complex):
        return Complex(real_log(value.magnitude()), value.phase())
    return real_log(value)


def to_scalar(value: Any) -> Any:
    """Normalize an element: builtin complex becomes Complex."""
    if isinstance(value, complex):
        return Complex(value)
    return value


__all__ = [
    "Complex",
    "Scalar",
    "real_div",
    "real_mod",
    "real_pow",
    "real_log",
    "real_exp",
    "parts",
    "real",
    "imag",
    "magnitude",
    "phase",
    "conj",
    "create_mag_angle",
    "scalar_add",
    "scalar_sub",
    "scalar_neg",
    "scalar_mul",
    "scalar_inv",
    "scalar_div",
    "scalar_pow",
    "scalar_log",
    "to_scalar",
]
