"""
Kernel exceptions.

Every failure is raised synchronously at the point of violation. Each class
also derives from the builtin exception a Python caller would expect
(``TypeError`` for shape and kind problems, ``ValueError`` for bad matrices,
``NotImplementedError`` for the eigen path).
"""

from typing import Any, Dict, Optional

from .logging import get_logger

logger = get_logger(__name__)


class AlgebraError(Exception):
    """Base exception for kernel errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DimensionMismatchError(AlgebraError, TypeError):
    """Raised when vector/matrix shapes are incompatible"""

    def __init__(self, message: str, left: Any = None, right: Any = None):
        details = {}
        if left is not None:
            details["left"] = left
        if right is not None:
            details["right"] = right
        super().__init__(message, details)


class NotSquareError(AlgebraError, ValueError):
    """Raised when a square matrix is required"""

    def __init__(self, operation: str, shape: tuple[int, int]):
        super().__init__(
            message=f"{operation} only defined for square matrices",
            details={"operation": operation, "shape": shape},
        )


class SingularMatrixError(AlgebraError, ValueError):
    """Raised when inverting a matrix whose determinant is exactly zero"""

    def __init__(self, shape: tuple[int, int]):
        super().__init__(
            message="Matrix is singular and cannot be inverted",
            details={"shape": shape},
        )


class UnsupportedOperationError(AlgebraError, TypeError):
    """Raised for declared but disallowed operand combinations"""

    def __init__(self, message: str, operation: Optional[str] = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message, details)


class OperationNotImplementedError(AlgebraError, NotImplementedError):
    """Raised by eigendecomposition and everything that depends on it"""

    def __init__(self, operation: str):
        super().__init__(
            message=f"{operation} is not implemented",
            details={"operation": operation},
        )


def error_payload(error: Exception, include_details: bool = True) -> Dict[str, Any]:
    """Create a standardized error description and log it"""

    error_data: Dict[str, Any] = {
        "error": {
            "type": error.__class__.__name__,
            "message": str(error),
        }
    }

    if isinstance(error, AlgebraError) and include_details:
        error_data["error"]["details"] = error.details

    logger.error(
        f"Error occurred: {error}",
        extra={
            "extra_data": {
                "error_type": error.__class__.__name__,
                **(error.details if isinstance(error, AlgebraError) else {}),
            }
        },
        exc_info=error,
    )

    return error_data
