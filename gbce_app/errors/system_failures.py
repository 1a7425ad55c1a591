"""
System failure error classifications.

These represent broken invariants or failures of the underlying cache-load
machinery rather than anything the caller did wrong.
"""

from typing import Optional

from .base import GBCEServiceError


class InternalError(GBCEServiceError):
    """Invariant violation, e.g. an instrument type outside the known set."""

    kind = "internal"

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("recoverable", False)
        super().__init__(message, **kwargs)


class ExecutionFailureError(GBCEServiceError):
    """Unexpected failure raised while loading a cache entry."""

    kind = "execution_failure"

    def __init__(self, message: str, operation: Optional[str] = None,
                 cause: Optional[BaseException] = None, **kwargs):
        kwargs.setdefault("recoverable", False)
        super().__init__(message, **kwargs)
        self.operation = operation
        self.cause = cause
