"""Core utilities package"""

from .config import settings, get_settings, Settings
from .logging import setup_logging, get_logger, get_context_logger
from .errors import (
    AlgebraError,
    DimensionMismatchError,
    NotSquareError,
    SingularMatrixError,
    UnsupportedOperationError,
    OperationNotImplementedError,
    error_payload,
)

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "setup_logging",
    "get_logger",
    "get_context_logger",
    "AlgebraError",
    "DimensionMismatchError",
    "NotSquareError",
    "SingularMatrixError",
    "UnsupportedOperationError",
    "OperationNotImplementedError",
    "error_payload",
]
