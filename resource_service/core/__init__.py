"""
Core module initialization
"""

from .config import config
from .errors import (
    ErrorResponse,
    ErrorResponseModel,
    NotFoundError,
    ConflictError,
    StoreUnavailableError,
    ChannelFailure,
    HandlerFailure,
)
from .logger import logger

__all__ = [
    "config",
    "ErrorResponse",
    "ErrorResponseModel",
    "NotFoundError",
    "ConflictError",
    "StoreUnavailableError",
    "ChannelFailure",
    "HandlerFailure",
    "logger",
]
