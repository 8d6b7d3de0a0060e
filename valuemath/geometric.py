"""
Geometric value types: Vector and Matrix.

Both are frozen pydantic models holding Real and Complex elements plus a
variant tag. Every derivative operation returns a new instance.
"""

from __future__ import annotations

from typing import Any, Callable, ClassVar, Iterable, Iterator

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from .core.config import settings
from .core.errors import (
    DimensionMismatchError,
    NotSquareError,
    OperationNotImplementedError,
    UnsupportedOperationError,
)
from .core.logging import get_context_logger
from .numeric import (
    Complex,
    Scalar,
    magnitude,
    real_div,
    scalar_add,
    scalar_mul,
    scalar_neg,
    scalar_sub,
    to_scalar,
)
from .value import (
    MathValue,
    Rank,
    Variant,
    format_scalar,
    promote_variant,
    rank_of,
    variant_of,
)

logger = get_context_logger(__name__, component="geometric")


def variant_for(elements: Iterable[Any]) -> Variant:
    """Variant of freshly constructed contents."""
    elements = list(elements)
    if not elements:
        return Variant.EMPTY
    if any(isinstance(e, Complex) for e in elements):
        return Variant.COMPLEX
    return Variant.REAL


def _promote_on_set(variant: Variant, value: Any) -> Variant:
    """Setting a Complex into a REAL container promotes it; never demotes."""
    if variant == Variant.REAL and variant_of(value) == Variant.COMPLEX:
        return Variant.COMPLEX
    return variant


def _format(value: Any) -> str:
    if isinstance(value, Complex):
        return value.to_string()
    return format_scalar(value)


def _to_python(value: Any) -> Any:
    if isinstance(value, Complex):
        return value.to_python()
    return float(value)


def _unpack(values: tuple[Any, ...]) -> tuple[Any, ...]:
    # Single list, tuple or ndarray argument
    if len(values) == 1 and isinstance(values[0], (list, tuple, np.ndarray)):
        first = values[0]
        return tuple(first.tolist() if isinstance(first, np.ndarray) else first)
    return values


class Vector(BaseModel, MathValue):
    """
    Vector value.

    Examples:
        >>> v = Vector(1, 2, 3)
        >>> v.norm()
        3.7416573867739413
        >>> Vector(1, 0, 0).cross3d(Vector(0, 1, 0))
        Vector(0, 0, 1)
    """

    model_config = ConfigDict(frozen=True)

    variant: Variant = Field(description="EMPTY, REAL or COMPLEX")
    length: int = Field(ge=0, description="Number of elements")
    elements: tuple[Scalar, ...] = Field(description="Vector components")

    rank: ClassVar[Rank] = Rank.VECTOR

    def __init__(self, *elements: Any, length: int | None = None, **kwargs):
        """
        Initialize vector.

        Args:
            *elements: Components, or a single list/tuple/array of components
            length: Declared length, checked against the element count
        """
        if kwargs:
            super().__init__(**kwargs)
            return

        values = tuple(to_scalar(e) for e in _unpack(elements))
        if length is None:
            length = len(values)
        elif length != len(values):
            logger.debug(
                "Declared vector length mismatch",
                extra_data={"declared": length, "actual": len(values)},
            )
            raise DimensionMismatchError(
                f"Declared length {length} does not match {len(values)} elements",
                left=length,
                right=len(values),
            )

        super().__init__(
            variant=variant_for(values), length=length, elements=values
        )

    @classmethod
    def _build(cls, elements: Iterable[Any], variant: Variant) -> Vector:
        """Construct from trusted elements with an explicit variant."""
        elements = tuple(elements)
        if not elements:
            variant = Variant.EMPTY
        return cls.model_construct(
            variant=variant, length=len(elements), elements=elements
        )

    @classmethod
    def zeros(cls, length: int) -> Vector:
        return cls._build((0.0,) * length, Variant.REAL)

    @classmethod
    def ones(cls, length: int) -> Vector:
        return cls._build((1.0,) * length, Variant.REAL)

    @classmethod
    def basis(cls, length: int, index: int) -> Vector:
        """Standard basis vector e_index of the given length."""
        if not 0 <= index < length:
            raise IndexError(f"Basis index {index} out of range for length {length}")
        return cls._build(
            tuple(1.0 if i == index else 0.0 for i in range(length)), Variant.REAL
        )

    def size(self) -> int:
        return self.length

    def get(self, index: int) -> Any:
        return self.elements[index]

    def set(self, index: int, value: Any) -> Vector:
        """Return a copy with one element replaced."""
        value = to_scalar(value)
        rank_of(value)
        elements = list(self.elements)
        elements[index] = value
        return Vector._build(elements, _promote_on_set(self.variant, value))

    def norm(self) -> float:
        """Euclidean norm, sqrt of the sum of squared magnitudes."""
        return float(np.sqrt(sum(magnitude(e) ** 2 for e in self.elements)))

    def unit(self) -> Vector:
        """
        Unit vector in the same direction.

        A zero vector is returned unchanged.
        """
        n = self.norm()
        if n == 0:
            return self
        return self._map(lambda e: _div_components(e, n))

    def dot(self, other: Vector) -> float:
        """
        Dot product.

        Complex components contribute through their parts, and the result
        is always Real.

        Raises:
            DimensionMismatchError: If lengths differ
        """
        if not isinstance(other, Vector):
            raise UnsupportedOperationError(
                "Dot product requires two vectors", operation="dot"
            )
        self._check_same_length(other, "Dot product")

        total = 0.0
        for a, b in zip(self.elements, other.elements):
            if isinstance(a, Complex) and isinstance(b, Complex):
                total += a.real * b.real + a.imag * b.imag
            elif isinstance(a, Complex):
                total += a.real * b
            elif isinstance(b, Complex):
                total += a * b.real + a * b.imag
            else:
                total += a * b
        return total

    def cross2d(self, other: Vector) -> Any:
        """Scalar cross product a0*b1 - a1*b0 of two 2D vectors."""
        self._require_length(other, 2, "2D cross product")
        a, b = self.elements, other.elements
        return scalar_sub(scalar_mul(a[0], b[1]), scalar_mul(a[1], b[0]))

    def cross3d(self, other: Vector) -> Vector:
        """Cross product of two 3D vectors."""
        self._require_length(other, 3, "3D cross product")
        a, b = self.elements, other.elements
        return Vector(
            scalar_sub(scalar_mul(a[1], b[2]), scalar_mul(a[2], b[1])),
            scalar_sub(scalar_mul(a[2], b[0]), scalar_mul(a[0], b[2])),
            scalar_sub(scalar_mul(a[0], b[1]), scalar_mul(a[1], b[0])),
        )

    def _require_length(self, other: Vector, length: int, operation: str) -> None:
        if (
            not isinstance(other, Vector)
            or self.length != length
            or other.length != length
        ):
            right = other.length if isinstance(other, Vector) else type(other).__name__
            logger.debug(
                f"{operation} shape mismatch",
                extra_data={"left": self.length, "right": right},
            )
            raise DimensionMismatchError(
                f"{operation} requires two vectors of length {length}",
                left=self.length,
                right=right,
            )

    def _check_same_length(self, other: Vector, operation: str) -> None:
        if self.length != other.length:
            logger.debug(
                f"{operation} shape mismatch",
                extra_data={"left": self.length, "right": other.length},
            )
            raise DimensionMismatchError(
                "Vectors of different lengths",
                left=self.length,
                right=other.length,
            )

    def _map(self, fn: Callable[[Any], Any], variant: Variant | None = None) -> Vector:
        return Vector._build(
            (fn(e) for e in self.elements),
            self.variant if variant is None else variant,
        )

    def _zip(
        self,
        other: Vector,
        fn: Callable[[Any, Any], Any],
        variant: Variant,
        operation: str,
    ) -> Vector:
        self._check_same_length(other, operation)
        return Vector._build(
            (fn(a, b) for a, b in zip(self.elements, other.elements)), variant
        )

    def to_python(self) -> list:
        return [_to_python(e) for e in self.elements]

    def to_numpy(self) -> np.ndarray:
        dtype = complex if self.variant == Variant.COMPLEX else float
        return np.array(self.to_python(), dtype=dtype)

    def to_string(self) -> str:
        """Convert to string like '<1, 2, 3>'."""
        return "<" + ", ".join(_format(e) for e in self.elements) + ">"

    def to_tex(self) -> str:
        """Convert to LaTeX column vector."""
        inner = r" \\ ".join(_format(e) for e in self.elements)
        return r"\begin{pmatrix}" + inner + r"\end{pmatrix}"

    def __len__(self) -> int:
        return self.length

    def __getitem__(self, index: int) -> Any:
        return self.elements[index]

    def __iter__(self) -> Iterator[Any]:  # type: ignore[override]
        return iter(self.elements)

    def __eq__(self, other: Any) -> bool:
        from .field import equals
        return equals(self, other)

    def __hash__(self) -> int:
        return hash((Rank.VECTOR, self.elements))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        args = (repr(e) if isinstance(e, Complex) else _format(e) for e in self.elements)
        return "Vector(" + ", ".join(args) + ")"


def _div_components(value: Any, divisor: float) -> Any:
    if isinstance(value, Complex):
        return Complex(real_div(value.real, divisor), real_div(value.imag, divisor))
    return real_div(value, divisor)


class Matrix(BaseModel, MathValue):
    """
    Matrix value, stored row-major.

    Examples:
        >>> m = Matrix([1, 2], [3, 4])
        >>> m.det()
        -2.0
        >>> m.transpose()
        Matrix([1, 3], [2, 4])
    """

    model_config = ConfigDict(frozen=True)

    variant: Variant = Field(description="EMPTY, REAL or COMPLEX")
    n_rows: int = Field(ge=0, description="Number of rows")
    n_cols: int = Field(ge=0, description="Number of columns")
    cells: tuple[tuple[Scalar, ...], ...] = Field(description="Row-major entries")

    rank: ClassVar[Rank] = Rank.MATRIX

    def __init__(
        self,
        *row_values: Any,
        rows: int | None = None,
        cols: int | None = None,
        **kwargs,
    ):
        """
        Initialize matrix.

        Args:
            *row_values: Rows as sequences, or a single 2D array / list of rows
            rows: Declared row count
            cols: Declared column count
        """
        if kwargs:
            super().__init__(**kwargs)
            return

        if len(row_values) == 1:
            first = row_values[0]
            if isinstance(first, np.ndarray) and first.ndim == 2:
                row_values = tuple(first.tolist())
            elif isinstance(first, (list, tuple)) and not first:
                row_values = ()
            elif isinstance(first, (list, tuple)) and isinstance(
                first[0], (list, tuple, np.ndarray, Vector)
            ):
                row_values = tuple(first)

        cells = tuple(
            tuple(to_scalar(e) for e in (r.elements if isinstance(r, Vector) else r))
            for r in row_values
        )
        n_rows = len(cells)
        if rows is not None and rows != n_rows:
            _log_shape_error("Declared row count mismatch", rows, n_rows)
            raise DimensionMismatchError(
                f"Declared {rows} rows but got {n_rows}", left=rows, right=n_rows
            )

        if n_rows == 0:
            n_cols = cols if cols is not None else 0
        else:
            n_cols = len(cells[0])
            if cols is not None and cols != n_cols:
                _log_shape_error("Declared column count mismatch", cols, n_cols)
                raise DimensionMismatchError(
                    f"Declared {cols} columns but got {n_cols}",
                    left=cols,
                    right=n_cols,
                )
            for row in cells:
                if len(row) != n_cols:
                    _log_shape_error("Ragged matrix rows", n_cols, len(row))
                    raise DimensionMismatchError(
                        "Matrix rows must all have the same length",
                        left=n_cols,
                        right=len(row),
                    )

        super().__init__(
            variant=_matrix_variant(cells, n_rows, n_cols),
            n_rows=n_rows,
            n_cols=n_cols,
            cells=cells,
        )

    @classmethod
    def _build(
        cls,
        cells: Iterable[Iterable[Any]],
        variant: Variant,
        n_rows: int | None = None,
        n_cols: int | None = None,
    ) -> Matrix:
        """Construct from trusted cells with an explicit variant."""
        cells = tuple(tuple(r) for r in cells)
        if n_rows is None:
            n_rows = len(cells)
        if n_cols is None:
            n_cols = len(cells[0]) if cells else 0
        if n_rows == 0 or n_cols == 0:
            variant = Variant.EMPTY
        return cls.model_construct(
            variant=variant, n_rows=n_rows, n_cols=n_cols, cells=cells
        )

    # Factories

    @classmethod
    def zeros(cls, rows: int, cols: int) -> Matrix:
        return cls._build(
            ((0.0,) * cols for _ in range(rows)), Variant.REAL, rows, cols
        )

    @classmethod
    def ones(cls, rows: int, cols: int) -> Matrix:
        return cls._build(
            ((1.0,) * cols for _ in range(rows)), Variant.REAL, rows, cols
        )

    @classmethod
    def identity(cls, n: int) -> Matrix:
        """Create n×n identity matrix."""
        return cls._build(
            (tuple(1.0 if i == j else 0.0 for j in range(n)) for i in range(n)),
            Variant.REAL,
            n,
            n,
        )

    @classmethod
    def diag(cls, values: Any, size: int | None = None) -> Matrix:
        """
        Square matrix with the given values on the diagonal.

        Args:
            values: A Vector or a sequence of scalars
            size: Declared size, checked against the number of values
        """
        values = tuple(values.elements if isinstance(values, Vector) else values)
        if size is not None and size != len(values):
            _log_shape_error("Declared diagonal size mismatch", size, len(values))
            raise DimensionMismatchError(
                f"Declared size {size} does not match {len(values)} values",
                left=size,
                right=len(values),
            )
        n = len(values)
        return cls(
            *(tuple(values[i] if i == j else 0.0 for j in range(n)) for i in range(n))
        )

    @classmethod
    def row(cls, vector: Vector) -> Matrix:
        """1×n matrix from a vector."""
        return cls._build((vector.elements,), vector.variant, 1, vector.length)

    @classmethod
    def col(cls, vector: Vector) -> Matrix:
        """n×1 matrix from a vector."""
        return cls._build(((e,) for e in vector.elements), vector.variant, vector.length, 1)

    # Shape and access

    def rows(self) -> int:
        return self.n_rows

    def cols(self) -> int:
        return self.n_cols

    @property
    def shape(self) -> tuple[int, int]:
        return (self.n_rows, self.n_cols)

    def is_square(self) -> bool:
        return self.n_rows == self.n_cols

    def get(self, i: int, j: int) -> Any:
        return self.cells[i][j]

    def set(self, i: int, j: int, value: Any) -> Matrix:
        """Return a copy with one entry replaced."""
        value = to_scalar(value)
        rank_of(value)
        cells = [list(r) for r in self.cells]
        cells[i][j] = value
        return Matrix._build(
            cells, _promote_on_set(self.variant, value), self.n_rows, self.n_cols
        )

    def get_row(self, i: int) -> Vector:
        return Vector(*self.cells[i])

    def set_row(self, i: int, vector: Vector) -> Matrix:
        if vector.length != self.n_cols:
            _log_shape_error("Row length mismatch", self.n_cols, vector.length)
            raise DimensionMismatchError(
                f"Row must have {self.n_cols} elements, got {vector.length}",
                left=self.shape,
                right=vector.length,
            )
        cells = list(self.cells)
        cells[i] = vector.elements
        return Matrix._build(
            cells,
            _promote_on_set(self.variant, vector),
            self.n_rows,
            self.n_cols,
        )

    def get_col(self, j: int) -> Vector:
        return Vector(*(r[j] for r in self.cells))

    def set_col(self, j: int, vector: Vector) -> Matrix:
        if vector.length != self.n_rows:
            _log_shape_error("Column length mismatch", self.n_rows, vector.length)
            raise DimensionMismatchError(
                f"Column must have {self.n_rows} elements, got {vector.length}",
                left=self.shape,
                right=vector.length,
            )
        cells = [list(r) for r in self.cells]
        for i, value in enumerate(vector.elements):
            cells[i][j] = value
        return Matrix._build(
            cells,
            _promote_on_set(self.variant, vector),
            self.n_rows,
            self.n_cols,
        )

    def diag_of(self) -> Vector:
        """Main diagonal as a vector."""
        n = min(self.n_rows, self.n_cols)
        return Vector(*(self.cells[i][i] for i in range(n)))

    # Linear algebra

    def transpose(self) -> Matrix:
        return Matrix._build(
            (
                tuple(self.cells[i][j] for i in range(self.n_rows))
                for j in range(self.n_cols)
            ),
            self.variant,
            self.n_cols,
            self.n_rows,
        )

    def minor(self, i: int, j: int) -> Matrix:
        """Matrix with row i and column j removed."""
        if not (0 <= i < self.n_rows and 0 <= j < self.n_cols):
            raise IndexError(f"Minor index ({i}, {j}) out of range for {self.shape}")
        return Matrix._build(
            (
                tuple(v for c, v in enumerate(row) if c != j)
                for r, row in enumerate(self.cells)
                if r != i
            ),
            self.variant,
            self.n_rows - 1,
            self.n_cols - 1,
        )

    def cofactor(self, i: int, j: int) -> Any:
        """(-1)^(i+j) * det(minor(i, j))"""
        sign = 1.0 if (i + j) % 2 == 0 else -1.0
        return scalar_mul(sign, self.minor(i, j).det())

    def det(self) -> Any:
        """
        Determinant by first-row cofactor expansion.

        The expansion is factorial-time; matrices larger than
        ``settings.COFACTOR_WARN_SIZE`` log a warning.

        Raises:
            NotSquareError: If matrix is not square
        """
        self._require_square("Determinant")
        if self.n_rows > settings.COFACTOR_WARN_SIZE:
            logger.warning(
                "Cofactor expansion on a large matrix",
                extra_data={"size": self.n_rows},
            )
        return self._expand()

    def _expand(self) -> Any:
        n = self.n_rows
        c = self.cells
        if n == 0:
            return 1.0
        if n == 1:
            return c[0][0]
        if n == 2:
            return scalar_sub(scalar_mul(c[0][0], c[1][1]), scalar_mul(c[0][1], c[1][0]))

        total: Any = 0.0
        for j in range(n):
            minor_det = self.minor(0, j)._expand()
            term = scalar_mul(c[0][j], minor_det)
            total = scalar_add(total, term if j % 2 == 0 else scalar_neg(term))
        return total

    def adjugate(self) -> Matrix:
        """Transpose of the cofactor matrix."""
        self._require_square("Adjugate")
        n = self.n_rows
        cofactors = Matrix._build(
            (tuple(self.cofactor(i, j) for j in range(n)) for i in range(n)),
            self.variant,
            n,
            n,
        )
        return cofactors.transpose()

    def trace(self) -> Any:
        self._require_square("Trace")
        total: Any = 0.0
        for i in range(self.n_rows):
            total = scalar_add(total, self.cells[i][i])
        return total

    def norm(self) -> float:
        """Frobenius norm."""
        return float(
            np.sqrt(sum(magnitude(e) ** 2 for row in self.cells for e in row))
        )

    def mul(self, other: Matrix) -> Matrix:
        """
        Matrix product.

        Raises:
            DimensionMismatchError: If self.cols != other.rows
        """
        if not isinstance(other, Matrix):
            raise UnsupportedOperationError(
                "Matrix product requires two matrices", operation="mul"
            )
        if self.n_cols != other.n_rows:
            _log_shape_error("Matrix product shape mismatch", self.shape, other.shape)
            raise DimensionMismatchError(
                "Invalid matrix dimensions for multiplication",
                left=self.shape,
                right=other.shape,
            )

        cells = []
        for i in range(self.n_rows):
            row = []
            for j in range(other.n_cols):
                acc: Any = 0.0
                for k in range(self.n_cols):
                    acc = scalar_add(acc, scalar_mul(self.cells[i][k], other.cells[k][j]))
                row.append(acc)
            cells.append(tuple(row))
        return Matrix._build(
            cells, variant_for(e for r in cells for e in r), self.n_rows, other.n_cols
        )

    def inv(self) -> Matrix:
        from .field import inv
        return inv(self)

    def pow(self, exponent: float) -> Matrix:
        from .field import pow
        return pow(self, exponent)

    def eigen_decomposition(self) -> Any:
        """Eigendecomposition (not available)."""
        raise OperationNotImplementedError("Eigendecomposition")

    def _require_square(self, operation: str) -> None:
        if not self.is_square():
            logger.debug(
                f"{operation} on non-square matrix",
                extra_data={"shape": self.shape},
            )
            raise NotSquareError(operation, self.shape)

    def _map(self, fn: Callable[[Any], Any], variant: Variant | None = None) -> Matrix:
        return Matrix._build(
            (tuple(fn(e) for e in row) for row in self.cells),
            self.variant if variant is None else variant,
            self.n_rows,
            self.n_cols,
        )

    def _zip(
        self,
        other: Matrix,
        fn: Callable[[Any, Any], Any],
        variant: Variant,
        operation: str,
    ) -> Matrix:
        if self.shape != other.shape:
            _log_shape_error(f"{operation} shape mismatch", self.shape, other.shape)
            raise DimensionMismatchError(
                "Matrices must be the same dimensions",
                left=self.shape,
                right=other.shape,
            )
        return Matrix._build(
            (
                tuple(fn(a, b) for a, b in zip(ra, rb))
                for ra, rb in zip(self.cells, other.cells)
            ),
            variant,
            self.n_rows,
            self.n_cols,
        )

    # Conversions

    def to_python(self) -> list:
        return [[_to_python(e) for e in row] for row in self.cells]

    def to_numpy(self) -> np.ndarray:
        dtype = complex if self.variant == Variant.COMPLEX else float
        return np.array(self.to_python(), dtype=dtype).reshape(self.n_rows, self.n_cols)

    def to_string(self) -> str:
        """Convert to string like '[[1, 2], [3, 4]]'."""
        rows = ["[" + ", ".join(_format(e) for e in row) + "]" for row in self.cells]
        return "[" + ", ".join(rows) + "]"

    def to_tex(self) -> str:
        """Convert to LaTeX pmatrix."""
        rows = [" & ".join(_format(e) for e in row) for row in self.cells]
        return r"\begin{pmatrix}" + r" \\ ".join(rows) + r"\end{pmatrix}"

    def __iter__(self) -> Iterator[tuple[Any, ...]]:  # type: ignore[override]
        return iter(self.cells)

    def __len__(self) -> int:
        return self.n_rows

    def __getitem__(self, index: int) -> tuple[Any, ...]:
        return self.cells[index]

    def __matmul__(self, other: Any) -> Any:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.mul(other)

    def __eq__(self, other: Any) -> bool:
        from .field import equals
        return equals(self, other)

    def __hash__(self) -> int:
        return hash((Rank.MATRIX, self.n_rows, self.n_cols, self.cells))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        rows = ["[" + ", ".join(_format(e) for e in row) + "]" for row in self.cells]
        return "Matrix(" + ", ".join(rows) + ")"


def _matrix_variant(cells: tuple[tuple[Any, ...], ...], n_rows: int, n_cols: int) -> Variant:
    if n_rows == 0 or n_cols == 0:
        return Variant.EMPTY
    return variant_for(e for row in cells for e in row)


def _log_shape_error(message: str, left: Any, right: Any) -> None:
    logger.debug(message, extra_data={"left": left, "right": right})


def broadcast(
    a: Any,
    b: Any,
    scalar_fn: Callable[[Any, Any], Any],
    pair_fn: Callable[[Any, Any], Any] | None = None,
    operation: str = "operation",
) -> Any:
    """
    Apply a binary function across containers.

    A scalar paired with a container is combined with every element through
    ``scalar_fn``. Two containers of the same kind are combined position by
    position through ``pair_fn`` (defaulting to ``scalar_fn``).

    Raises:
        DimensionMismatchError: Same-kind containers with different shapes
        UnsupportedOperationError: Vector paired with Matrix
    """
    pair_fn = pair_fn or scalar_fn
    ka, kb = rank_of(a), rank_of(b)

    if ka >= Rank.VECTOR and kb <= Rank.COMPLEX:
        return a._map(
            lambda e: scalar_fn(e, b), promote_variant(a.variant, variant_of(b))
        )
    if kb >= Rank.VECTOR and ka <= Rank.COMPLEX:
        return b._map(
            lambda e: scalar_fn(a, e), promote_variant(variant_of(a), b.variant)
        )
    if ka == kb and ka >= Rank.VECTOR:
        return a._zip(b, pair_fn, promote_variant(a.variant, b.variant), operation)

    raise UnsupportedOperationError(
        f"Cannot {operation} {ka.name.lower()} and {kb.name.lower()}",
        operation=operation,
    )
