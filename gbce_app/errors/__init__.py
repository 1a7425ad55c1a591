"""
Error classification for the GBCE trade indicator service.

Every public operation either returns a concrete result or raises one of
these typed errors; none of them are retried automatically.
"""

from .base import GBCEServiceError
from .request_errors import (
    InvalidArgumentError,
    NotFoundError,
    NoDataError,
)
from .system_failures import (
    InternalError,
    ExecutionFailureError,
)

__all__ = [
    "GBCEServiceError",
    # Request Errors
    "InvalidArgumentError",
    "NotFoundError",
    "NoDataError",
    # System Failures
    "InternalError",
    "ExecutionFailureError",
]
