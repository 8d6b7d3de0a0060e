"""
valuemath - tagged algebraic values for graphics and linear algebra

Immutable value types with:
- Real, Complex, Vector and Matrix kinds with rank promotion
- Field operators (complex algebra, matrix product, inverse, powers)
- Elementwise broadcast operators under ``valuemath.el``
- Transform builders for 2D/3D graphics
"""

__version__ = "0.1.0"

from . import elementwise as el
from . import transforms
from .core.errors import (
    AlgebraError,
    DimensionMismatchError,
    NotSquareError,
    OperationNotImplementedError,
    SingularMatrixError,
    UnsupportedOperationError,
)
from .field import (
    add,
    div,
    equals,
    euler,
    exp,
    inv,
    is_close,
    log,
    mul,
    neg,
    nrt,
    pow,
    sqrt,
    sub,
)
from .geometric import Matrix, Vector
from .numeric import Complex, conj, create_mag_angle, imag, magnitude, phase, real
from .operation import BinaryOperation
from .value import MathValue, Rank, ToleranceMode, Variant

__all__ = [
    "MathValue",
    "Rank",
    "Variant",
    "ToleranceMode",
    "BinaryOperation",
    "Complex",
    "Vector",
    "Matrix",
    "el",
    "transforms",
    "add",
    "sub",
    "mul",
    "div",
    "inv",
    "neg",
    "pow",
    "exp",
    "log",
    "sqrt",
    "nrt",
    "equals",
    "is_close",
    "euler",
    "magnitude",
    "phase",
    "conj",
    "real",
    "imag",
    "create_mag_angle",
    "AlgebraError",
    "DimensionMismatchError",
    "NotSquareError",
    "SingularMatrixError",
    "UnsupportedOperationError",
    "OperationNotImplementedError",
]
