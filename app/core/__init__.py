"""
Core module initialization
"""

from .config import config
from .errors import (
    ErrorResponse,
    ErrorResponseModel,
    ValidationError,
    NotFoundError,
    ConflictError,
)
from .logger import logger

__all__ = [
    "config",
    "ErrorResponse",
    "ErrorResponseModel",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "logger",
]
