"""Tests for Vector."""

import math

import numpy as np
import pytest

from valuemath import (
    Complex,
    DimensionMismatchError,
    UnsupportedOperationError,
    Variant,
    Vector,
)


class TestVectorInstantiation:
    """Test vector construction and variant tagging."""

    def test_create_real_vector(self):
        """Test creating a vector with numeric literals."""
        v = Vector(1, 2, 3)
        assert v.length == 3
        assert v.elements == (1.0, 2.0, 3.0)
        assert v.variant == Variant.REAL

    def test_create_from_list(self):
        """Test creating a vector from a single list argument."""
        assert Vector([1, 2, 3]) == Vector(1, 2, 3)

    def test_create_from_numpy_array(self):
        assert Vector(np.array([1.0, 2.0])) == Vector(1, 2)

    def test_empty_vector_has_empty_variant(self):
        v = Vector()
        assert v.length == 0
        assert v.variant == Variant.EMPTY

    def test_any_complex_element_tags_complex(self):
        """Test that Real entries are kept as-is in a COMPLEX vector."""
        v = Vector(1, Complex(0, 1))
        assert v.variant == Variant.COMPLEX
        assert v.elements[0] == 1.0
        assert not isinstance(v.elements[0], Complex)

    def test_builtin_complex_elements_are_converted(self):
        v = Vector(1j, 2)
        assert v.elements[0] == Complex(0, 1)
        assert v.variant == Variant.COMPLEX

    def test_declared_length_must_match(self):
        """Test that a declared length different from the count raises."""
        with pytest.raises(DimensionMismatchError):
            Vector(1, 2, length=3)
        assert Vector(1, 2, length=2).length == 2

    def test_dimension_mismatch_is_type_error(self):
        with pytest.raises(TypeError):
            Vector(1, length=2)

    def test_invalid_element_raises_validation_error(self, assert_validation_error):
        assert_validation_error(Vector, "abc", expected_field="elements")


class TestVectorFactories:
    """Test zeros, ones and basis."""

    def test_zeros(self):
        v = Vector.zeros(3)
        assert v == Vector(0, 0, 0)
        assert v.variant == Variant.REAL

    def test_ones(self):
        assert Vector.ones(2) == Vector(1, 1)

    def test_basis(self):
        assert Vector.basis(3, 1) == Vector(0, 1, 0)

    def test_basis_index_out_of_range(self):
        with pytest.raises(IndexError):
            Vector.basis(3, 3)

    def test_zero_length_factories_are_empty(self):
        assert Vector.zeros(0).variant == Variant.EMPTY


class TestVectorNormAndUnit:
    """Test norm and normalization."""

    def test_norm(self):
        assert Vector(3, 4).norm() == 5.0

    def test_norm_uses_complex_magnitude(self):
        assert Vector(Complex(3, 4)).norm() == 5.0

    def test_unit_has_norm_one(self):
        u = Vector(3, 4).unit()
        assert u.elements == pytest.approx((0.6, 0.8))
        assert u.norm() == pytest.approx(1.0)

    def test_unit_of_complex_vector(self):
        u = Vector(Complex(3, 4), 0).unit()
        assert u.norm() == pytest.approx(1.0)
        assert u.variant == Variant.COMPLEX

    def test_unit_of_zero_vector_is_unchanged(self):
        zero = Vector.zeros(3)
        assert zero.unit() == zero


class TestVectorProducts:
    """Test dot and cross products."""

    def test_dot_real(self):
        assert Vector(1, 2, 3).dot(Vector(4, 5, 6)) == 32.0

    def test_dot_real_with_complex(self):
        """Test Real·Complex contributes a·re + a·im."""
        assert Vector(2).dot(Vector(Complex(3, 4))) == 14.0

    def test_dot_complex_with_real(self):
        """Test Complex·Real contributes re·b."""
        assert Vector(Complex(3, 4)).dot(Vector(2)) == 6.0

    def test_dot_complex_with_complex(self):
        """Test Complex·Complex contributes re·re + im·im."""
        assert Vector(Complex(1, 2)).dot(Vector(Complex(3, 4))) == 11.0

    def test_dot_length_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            Vector(1, 2).dot(Vector(1, 2, 3))

    def test_cross2d(self):
        assert Vector(1, 2).cross2d(Vector(3, 4)) == -2.0

    def test_cross2d_is_anticommutative(self):
        a, b = Vector(1, 2), Vector(5, -3)
        assert a.cross2d(b) == -b.cross2d(a)

    def test_cross3d_of_basis(self):
        assert Vector(1, 0, 0).cross3d(Vector(0, 1, 0)) == Vector(0, 0, 1)

    def test_cross3d_is_orthogonal(self):
        a, b = Vector(1, 2, 3), Vector(4, 5, 6)
        c = a.cross3d(b)
        assert c == Vector(-3, 6, -3)
        assert a.dot(c) == pytest.approx(0.0)
        assert b.dot(c) == pytest.approx(0.0)

    def test_cross_requires_matching_lengths(self):
        with pytest.raises(TypeError):
            Vector(1, 2).cross3d(Vector(1, 2, 3))
        with pytest.raises(DimensionMismatchError):
            Vector(1, 2, 3).cross2d(Vector(1, 2, 3))


class TestVectorAccess:
    """Test get/set and the sequence protocol."""

    def test_get(self):
        assert Vector(1, 2, 3).get(1) == 2.0

    def test_set_returns_new_vector(self):
        v = Vector(1, 2, 3)
        w = v.set(0, 9)
        assert w == Vector(9, 2, 3)
        assert v == Vector(1, 2, 3)

    def test_set_complex_promotes_variant(self):
        v = Vector(1, 2).set(0, Complex(0, 1))
        assert v.variant == Variant.COMPLEX
        assert v.elements[1] == 2.0

    def test_set_real_never_demotes(self):
        v = Vector(Complex(1, 1), 2).set(0, 5)
        assert v.variant == Variant.COMPLEX

    def test_len_index_iter(self):
        v = Vector(1, 2, 3)
        assert len(v) == 3
        assert v[2] == 3.0
        assert list(v) == [1.0, 2.0, 3.0]
        assert v.size() == 3


class TestVectorOperators:
    """Test Python operators on vectors."""

    def test_add(self):
        assert Vector(1, 2) + Vector(3, 4) == Vector(4, 6)

    def test_scalar_multiplication(self):
        assert 2 * Vector(1, 2) == Vector(2, 4)
        assert Vector(1, 2) * Complex(0, 1) == Vector(Complex(0, 1), Complex(0, 2))

    def test_vector_times_vector_unsupported(self):
        with pytest.raises(UnsupportedOperationError):
            Vector(1, 2) * Vector(3, 4)

    def test_length_mismatch_on_add(self):
        with pytest.raises(DimensionMismatchError):
            Vector(1, 2) + Vector(1, 2, 3)

    def test_negation_keeps_variant(self):
        v = -Vector(1, Complex(0, 1))
        assert v == Vector(-1, Complex(0, -1))
        assert v.variant == Variant.COMPLEX


class TestVectorEqualityAndConversion:
    """Test equality, hashing and conversions."""

    def test_different_lengths_not_equal(self):
        assert Vector(1, 2) != Vector(1, 2, 0)

    def test_equal_across_representation(self):
        assert Vector(5, 1) == Vector(Complex(5, 0), 1)
        assert hash(Vector(5, 1)) == hash(Vector(Complex(5, 0), 1))

    def test_to_string(self):
        assert str(Vector(1, 2.5, 3)) == "<1, 2.5, 3>"

    def test_to_numpy(self):
        arr = Vector(1, 2).to_numpy()
        assert arr.dtype == np.float64
        assert arr.tolist() == [1.0, 2.0]

    def test_to_numpy_complex(self):
        arr = Vector(1, Complex(0, 1)).to_numpy()
        assert arr.dtype == np.complex128
        assert arr[1] == 1j

    def test_to_python(self):
        assert Vector(1, Complex(2, 3)).to_python() == [1.0, 2 + 3j]

    def test_nan_is_not_equal_to_itself(self):
        assert Vector(math.nan) != Vector(math.nan)
