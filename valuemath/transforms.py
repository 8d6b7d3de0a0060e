"""
Transform builders for 2D and 3D graphics.

Matrices use the row-vector convention: points multiply on the left and the
translation sits in the last row. ``to_buffer`` flattens a matrix row-major
into a contiguous NumPy array ready for upload as a uniform.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from .core.errors import UnsupportedOperationError
from .geometric import Matrix, Vector
from .value import Variant


def v2(x: float, y: float) -> Vector:
    return Vector(x, y, length=2)


def v3(x: float, y: float, z: float) -> Vector:
    return Vector(x, y, z, length=3)


def v4(x: float, y: float, z: float, w: float) -> Vector:
    return Vector(x, y, z, w, length=4)


def to_buffer(matrix: Matrix, dtype=np.float32) -> np.ndarray:
    """
    Flatten a real matrix row-major.

    Raises:
        UnsupportedOperationError: If the matrix holds Complex entries
    """
    if matrix.variant == Variant.COMPLEX:
        raise UnsupportedOperationError(
            "Complex matrices cannot be written to a real buffer",
            operation="to_buffer",
        )
    return np.ascontiguousarray(
        np.array(matrix.to_python(), dtype=dtype).reshape(-1)
    )


class Matrix2d:
    """3×3 homogeneous transforms for 2D drawing."""

    @staticmethod
    def proj(width: float, height: float) -> Matrix:
        """Pixel space to clip space, with y pointing down."""
        return Matrix(
            [2 / width, 0, 0],
            [0, -2 / height, 0],
            [0, 0, 1],
            rows=3,
            cols=3,
        )

    @staticmethod
    def identity() -> Matrix:
        return Matrix.identity(3)

    @staticmethod
    def translate(x: float, y: float) -> Matrix:
        return Matrix([1, 0, 0], [0, 1, 0], [x, y, 1], rows=3, cols=3)

    @staticmethod
    def scale(x: float, y: float) -> Matrix:
        return Matrix([x, 0, 0], [0, y, 0], [0, 0, 1], rows=3, cols=3)

    @staticmethod
    def rotate(radians: float) -> Matrix:
        c = math.cos(radians)
        s = math.sin(radians)
        return Matrix([c, -s, 0], [s, c, 0], [0, 0, 1], rows=3, cols=3)

    @classmethod
    def transform(
        cls,
        translate: Sequence[float] = (0.0, 0.0),
        rotation: float = 0.0,
        scale: Sequence[float] = (1.0, 1.0),
    ) -> np.ndarray:
        """scale · rotate · translate, flattened to a float32 buffer."""
        matrix = cls.scale(*scale)
        matrix = matrix.mul(cls.rotate(rotation))
        matrix = matrix.mul(cls.translate(*translate))
        return to_buffer(matrix)


class Matrix3d:
    """4×4 homogeneous transforms for 3D drawing."""

    @staticmethod
    def identity() -> Matrix:
        return Matrix.identity(4)

    @staticmethod
    def translate(x: float, y: float, z: float) -> Matrix:
        return Matrix(
            [1, 0, 0, 0],
            [0, 1, 0, 0],
            [0, 0, 1, 0],
            [x, y, z, 1],
            rows=4,
            cols=4,
        )

    @staticmethod
    def scale(x: float, y: float, z: float) -> Matrix:
        return Matrix(
            [x, 0, 0, 0],
            [0, y, 0, 0],
            [0, 0, z, 0],
            [0, 0, 0, 1],
            rows=4,
            cols=4,
        )

    @staticmethod
    def rotate_x(radians: float) -> Matrix:
        c = math.cos(radians)
        s = math.sin(radians)
        return Matrix(
            [1, 0, 0, 0],
            [0, c, s, 0],
            [0, -s, c, 0],
            [0, 0, 0, 1],
            rows=4,
            cols=4,
        )

    @staticmethod
    def rotate_y(radians: float) -> Matrix:
        c = math.cos(radians)
        s = math.sin(radians)
        return Matrix(
            [c, 0, -s, 0],
            [0, 1, 0, 0],
            [s, 0, c, 0],
            [0, 0, 0, 1],
            rows=4,
            cols=4,
        )

    @staticmethod
    def rotate_z(radians: float) -> Matrix:
        c = math.cos(radians)
        s = math.sin(radians)
        return Matrix(
            [c, s, 0, 0],
            [-s, c, 0, 0],
            [0, 0, 1, 0],
            [0, 0, 0, 1],
            rows=4,
            cols=4,
        )

    @staticmethod
    def transform(width: float, height: float, depth: float) -> Matrix:
        """Clip-space projection of a width × height × depth box."""
        return Matrix(
            [2 / width, 0, 0, 0],
            [0, -2 / height, 0, 0],
            [0, 0, 2 / depth, 0],
            [-1, 1, 0, 1],
            rows=4,
            cols=4,
        )
