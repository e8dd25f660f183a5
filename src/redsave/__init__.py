"""
redsave: Gen I (Pokemon Red/Blue) save-file layout and integrity engine.

Bounds-checked access to the 32 KiB SRAM dump, the game's text and BCD
codecs, the three checksum families, and read-only record extraction.
"""

__version__ = "1.0.0"

from .core.buffer import SaveBuffer
from .core.errors import (
    DomainRangeError,
    ErrorKind,
    MalformedRangeError,
    OutOfRangeError,
    SaveError,
    SaveIOError,
    UnexpectedSizeError,
)
from .features.records import SaveReader
from .features.validator import SaveValidator

__all__ = [
    "__version__",
    "SaveBuffer",
    "SaveReader",
    "SaveValidator",
    "SaveError",
    "ErrorKind",
    "OutOfRangeError",
    "DomainRangeError",
    "MalformedRangeError",
    "UnexpectedSizeError",
    "SaveIOError",
]
