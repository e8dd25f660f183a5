"""
Error types for the Gen I save engine.

Every failure raised by the buffer, the codecs and the checksum engine is a
SaveError carrying an ErrorKind, so callers can branch on the kind instead of
on message text. Each concrete error also derives from the matching builtin
(IndexError, ValueError, OSError) so generic handlers keep working.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Distinguishable failure kinds."""
    OUT_OF_RANGE    = "out_of_range"     # byte/bit/slice or box/bank index outside bounds
    DOMAIN_RANGE    = "domain_range"     # value too large for its byte or packed-decimal field
    MALFORMED_RANGE = "malformed_range"  # checksum range with end < start
    UNEXPECTED_SIZE = "unexpected_size"  # strict size check failed
    IO_FAILURE      = "io_failure"       # storage layer open/read/write/flush


class SaveError(Exception):
    """Base class for all save engine errors."""
    kind: ErrorKind = ErrorKind.OUT_OF_RANGE

    def to_dict(self):
        return {'kind': self.kind.value, 'error': str(self)}


class OutOfRangeError(SaveError, IndexError):
    kind = ErrorKind.OUT_OF_RANGE


class DomainRangeError(SaveError, ValueError):
    kind = ErrorKind.DOMAIN_RANGE


class MalformedRangeError(SaveError, ValueError):
    kind = ErrorKind.MALFORMED_RANGE


class UnexpectedSizeError(SaveError, ValueError):
    kind = ErrorKind.UNEXPECTED_SIZE

    def __init__(self, actual: int, expected: int):
        super().__init__(f"Unexpected save size: 0x{actual:x} (expected 0x{expected:x})")
        self.actual   = actual
        self.expected = expected


class SaveIOError(SaveError, OSError):
    """Storage failure, naming the operation and the path involved."""
    kind = ErrorKind.IO_FAILURE

    def __init__(self, operation: str, path: str, reason: str, cause: Optional[BaseException] = None):
        super().__init__(f"{operation} failed: {reason}: {path}")
        self.operation = operation
        self.path      = path
        self.reason    = reason
        self.cause     = cause
