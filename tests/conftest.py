"""
Shared pytest fixtures and utilities for testing valuemath.

This module provides:
- Fixtures for comparing values within a tolerance
- Utilities for testing Pydantic validation
"""

import pytest
from typing import Any, Type
from pydantic import BaseModel, ValidationError

from valuemath import is_close


@pytest.fixture
def assert_validation_error():
    """Helper to assert that a ValidationError is raised with expected details."""
    def _assert_validation(
        model_class: Type[BaseModel],
        *args: Any,
        expected_field: str | None = None,
        expected_type: str | None = None,
        **data: Any,
    ) -> ValidationError:
        """
        Assert that creating a model raises ValidationError.

        Args:
            model_class: The Pydantic model class
            *args: Positional constructor arguments
            expected_field: Expected field name in error (optional)
            expected_type: Expected error type (optional)
            **data: Keyword constructor arguments

        Returns:
            The ValidationError that was raised
        """
        with pytest.raises(ValidationError) as exc_info:
            model_class(*args, **data)

        error = exc_info.value
        if expected_field:
            field_errors = [e for e in error.errors() if e['loc'][0] == expected_field]
            assert len(field_errors) > 0, f"Expected error for field '{expected_field}' not found"

        if expected_type:
            assert any(
                expected_type in str(e['type']).lower() for e in error.errors()
            ), f"Expected error type containing '{expected_type}' not found"

        return error

    return _assert_validation


@pytest.fixture
def assert_values_close():
    """Helper to assert that two kernel values agree within a tolerance."""
    def _assert_close(actual: Any, expected: Any, tolerance: float = 1e-9) -> None:
        """
        Assert closeness with the same shape rules as ``equals``.

        Args:
            actual: Value produced by the code under test
            expected: Expected value
            tolerance: Absolute tolerance per component
        """
        assert is_close(actual, expected, tolerance=tolerance), (
            f"Values not close:\n{actual!r}\n!=\n{expected!r}"
        )

    return _assert_close
