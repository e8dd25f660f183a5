"""
Integrity gate used before trusting extracted data.

The boolean checks are advisory: they never raise, so a caller can check an
undersized or malformed file safely. require_expected_size is the strict
variant for entry points that refuse non-conforming input.
"""

import logging

from ..core import layout
from ..core.buffer import SaveBuffer
from ..core.errors import UnexpectedSizeError
from . import checksum

logger = logging.getLogger(__name__)


class SaveValidator:

    @staticmethod
    def has_expected_size(buffer: SaveBuffer) -> bool:
        return buffer.size() == layout.EXPECTED_SIZE

    @staticmethod
    def has_valid_main_checksum(buffer: SaveBuffer) -> bool:
        try:
            return checksum.validate_main(buffer)
        except Exception as e:
            logger.debug(f"Main checksum not computable: {e}")
            return False

    @staticmethod
    def require_expected_size(buffer: SaveBuffer) -> None:
        """Raises UnexpectedSizeError unless the buffer is exactly 32 KiB."""
        if buffer.size() != layout.EXPECTED_SIZE:
            raise UnexpectedSizeError(buffer.size(), layout.EXPECTED_SIZE)
