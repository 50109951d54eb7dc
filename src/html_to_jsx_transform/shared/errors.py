"""Exception types raised by the conversion engine.

Malformed markup is never an error: the tree builder repairs it and records a
diagnostic instead. The only failure the engine reports is running out of a
resource (nesting depth, input size or memory).
"""

from typing import Optional


class ConversionError(Exception):
    """Base exception for conversion failures."""


class ResourceExhaustedError(ConversionError):
    """Raised when input exceeds a configured limit or memory runs out."""

    def __init__(
        self,
        message: str,
        resource: str,
        limit: Optional[int] = None,
        observed: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.resource = resource
        self.limit = limit
        self.observed = observed
