"""Base class shared by all GBCE service errors."""

from typing import Optional, Dict, Any


class GBCEServiceError(Exception):
    """Base class for typed failures returned to callers of the service."""

    kind = "error"

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None,
                 recoverable: bool = True):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.recoverable = recoverable

    def to_dict(self) -> Dict[str, Any]:
        """Tagged representation for an outer API or CLI layer."""
        return {
            "kind": self.kind,
            "message": self.message,
            "context": self.context,
        }
