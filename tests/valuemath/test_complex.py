"""Tests for Complex and the Real helpers."""

import math

import pytest
from pydantic import ValidationError

from valuemath import Complex, Rank, conj, create_mag_angle, imag, magnitude, phase, real
from valuemath.numeric import real_div, real_log, real_mod, real_pow


class TestComplexInstantiation:
    """Test construction and field access."""

    def test_instantiate_from_parts(self):
        """Test creating Complex from real and imaginary parts."""
        z = Complex(2, 3)
        assert z.real == 2.0
        assert z.imag == 3.0

    def test_imaginary_part_defaults_to_zero(self):
        """Test creating Complex from a real part only."""
        z = Complex(5)
        assert z.imag == 0.0

    def test_instantiate_from_builtin_complex(self):
        """Test that a builtin complex is split into parts."""
        z = Complex(1 + 2j)
        assert (z.real, z.imag) == (1.0, 2.0)

    def test_rank_is_complex(self):
        """Test the promotion rank."""
        assert Complex(1, 1).rank == Rank.COMPLEX

    def test_invalid_part_raises_validation_error(self, assert_validation_error):
        """Test that non-numeric parts are rejected."""
        assert_validation_error(Complex, "abc", 1, expected_field="real")

    def test_is_frozen(self):
        """Test that parts cannot be reassigned."""
        z = Complex(1, 2)
        with pytest.raises(ValidationError):
            z.real = 5


class TestComplexOperations:
    """Test magnitude, phase, conjugate and polar construction."""

    def test_magnitude(self):
        assert Complex(3, 4).magnitude() == 5.0
        assert magnitude(Complex(3, 4)) == 5.0

    def test_magnitude_of_real(self):
        assert magnitude(-2) == 2

    def test_phase(self):
        """Test argument of points on the axes."""
        assert phase(Complex(0, 1)) == pytest.approx(math.pi / 2)
        assert phase(Complex(-1, 0)) == pytest.approx(math.pi)
        assert phase(Complex(1, 0)) == 0.0

    def test_conj(self):
        assert conj(Complex(1, 2)) == Complex(1, -2)
        assert Complex(1, 2).conj() == Complex(1, -2)

    def test_conj_of_real_is_identity(self):
        assert conj(3) == 3

    def test_create_mag_angle(self, assert_values_close):
        """Test polar construction."""
        z = create_mag_angle(2, math.pi / 2)
        assert_values_close(z, Complex(0, 2))
        assert_values_close(Complex.create_mag_angle(1, math.pi), Complex(-1, 0))

    def test_real_and_imag_accept_reals(self):
        """Test part accessors on plain numbers."""
        assert real(5) == 5
        assert imag(5) == 0.0
        assert real(Complex(1, 2)) == 1.0
        assert imag(Complex(1, 2)) == 2.0


class TestComplexOperators:
    """Test Python operators route through field arithmetic."""

    def test_multiplication(self):
        assert Complex(1, 2) * Complex(3, 4) == Complex(-5, 10)

    def test_add_real_touches_real_part_only(self):
        assert Complex(1, 2) + 3 == Complex(4, 2)
        assert 3 + Complex(1, 2) == Complex(4, 2)

    def test_subtraction(self):
        assert Complex(5, 3) - Complex(1, 1) == Complex(4, 2)
        assert 1 - Complex(1, 1) == Complex(0, -1)

    def test_division(self, assert_values_close):
        assert_values_close(Complex(-5, 10) / Complex(3, 4), Complex(1, 2))

    def test_division_by_zero_complex_raises(self):
        with pytest.raises(ZeroDivisionError):
            1 / Complex(0, 0)

    def test_negation(self):
        assert -Complex(1, -2) == Complex(-1, 2)

    def test_power_uses_polar_form(self, assert_values_close):
        """Test (1+i)^2 == 2i."""
        assert_values_close(Complex(1, 1) ** 2, Complex(0, 2))

    def test_foreign_operand_is_not_supported(self):
        with pytest.raises(TypeError):
            Complex(1, 1) + "x"


class TestComplexEqualityAndHashing:
    """Test equality coercion and hash consistency."""

    def test_equal_to_real_with_zero_imaginary(self):
        assert Complex(5, 0) == 5
        assert 5 == Complex(5, 0)

    def test_not_equal_with_nonzero_imaginary(self):
        assert Complex(5, 1) != 5

    def test_hash_matches_equal_float(self):
        assert hash(Complex(5, 0)) == hash(5.0)
        assert len({Complex(5, 0), 5.0}) == 1

    def test_not_equal_to_foreign_objects(self):
        assert Complex(1, 2) != "1+2i"


class TestComplexConversions:
    """Test string and Python conversions."""

    def test_to_string(self):
        assert str(Complex(3, 4)) == "3+4i"
        assert str(Complex(3, -4)) == "3-4i"
        assert str(Complex(0, 1)) == "i"
        assert str(Complex(2, 0)) == "2"

    def test_repr(self):
        assert repr(Complex(-5, 10)) == "Complex(-5, 10)"

    def test_to_python(self):
        assert Complex(3, 4).to_python() == 3 + 4j


class TestRealHelpers:
    """Test IEEE-754 semantics for Real arithmetic."""

    def test_division_by_zero_is_signed_infinity(self):
        assert real_div(1, 0) == math.inf
        assert real_div(-1, 0) == -math.inf
        assert real_div(1, -0.0) == -math.inf

    def test_zero_over_zero_is_nan(self):
        assert math.isnan(real_div(0, 0))

    def test_mod_takes_sign_of_dividend(self):
        assert real_mod(-7, 3) == -1.0
        assert real_mod(7, -3) == 1.0

    def test_mod_by_zero_is_nan(self):
        assert math.isnan(real_mod(5, 0))

    def test_pow_edge_cases(self):
        """Test negative base with fractional exponent and zero base."""
        assert math.isnan(real_pow(-8, 1 / 3))
        assert real_pow(0, -1) == math.inf
        assert real_pow(2, 10) == 1024.0

    def test_log_edge_cases(self):
        assert real_log(0) == -math.inf
        assert math.isnan(real_log(-1))
