"""
Bounds-checked byte access to an in-memory Gen I save.

SaveBuffer owns a fixed-length bytearray. Every accessor validates the whole
target range, and every write its value, before touching anything, so a failing
call never leaves the buffer half-written.
"""

from typing import Union

from .errors import DomainRangeError, OutOfRangeError


BytesLike = Union[bytes, bytearray, memoryview]


class SaveBuffer:
    """
    Owned, fixed-length byte sequence with safe read/write helpers.

    The buffer is never resized after construction. Multi-byte helpers come in
    the two byte orders the Gen I format actually uses: little-endian 16-bit
    and big-endian 24-bit.
    """

    def __init__(self, data: BytesLike = b''):
        self._bytes = bytearray(data)

    def __len__(self) -> int:
        return len(self._bytes)

    def __repr__(self) -> str:
        return f"SaveBuffer(size=0x{len(self._bytes):x})"

    def size(self) -> int:
        return len(self._bytes)

    def to_bytes(self) -> bytes:
        """Immutable copy of the whole buffer, for writing back to disk."""
        return bytes(self._bytes)

    def copy(self) -> 'SaveBuffer':
        return SaveBuffer(self._bytes)

    # ── Bounds checking ────────────────────────────────────────────────────────
    def require_range(self, offset: int, length: int) -> None:
        """
        Fail unless [offset, offset + length) lies inside the buffer.

        A zero-length range is always accepted, even past the end.

        Raises:
            OutOfRangeError: on a negative offset/length, an offset past the end,
                or a range running past the end of the buffer.
        """
        if length == 0:
            return
        size = len(self._bytes)
        if offset < 0 or length < 0 or offset > size:
            raise OutOfRangeError(f"SaveBuffer: offset 0x{offset:x} out of range (size 0x{size:x})")
        if offset + length > size:
            raise OutOfRangeError(
                f"SaveBuffer: range 0x{offset:x}+{length} out of range (size 0x{size:x})"
            )

    # ── Reads ──────────────────────────────────────────────────────────────────
    def read_u8(self, offset: int) -> int:
        self.require_range(offset, 1)
        return self._bytes[offset]

    def read_u16le(self, offset: int) -> int:
        self.require_range(offset, 2)
        return self._bytes[offset] | (self._bytes[offset + 1] << 8)

    def read_u24be(self, offset: int) -> int:
        """3 bytes: [hi][mid][lo]."""
        self.require_range(offset, 3)
        b = self._bytes
        return (b[offset] << 16) | (b[offset + 1] << 8) | b[offset + 2]

    # ── Writes ─────────────────────────────────────────────────────────────────
    @staticmethod
    def _require_value(value: int, width: int) -> None:
        """Fail unless value fits in `width` unsigned bytes."""
        limit = (1 << (8 * width)) - 1
        if not 0 <= value <= limit:
            raise DomainRangeError(f"SaveBuffer: value {value} does not fit 0..0x{limit:X}")

    def write_u8(self, offset: int, value: int) -> None:
        self._require_value(value, 1)
        self.require_range(offset, 1)
        self._bytes[offset] = value

    def write_u16le(self, offset: int, value: int) -> None:
        self._require_value(value, 2)
        self.require_range(offset, 2)
        self._bytes[offset]     = value & 0xFF
        self._bytes[offset + 1] = value >> 8

    def write_u24be(self, offset: int, value: int) -> None:
        self._require_value(value, 3)
        self.require_range(offset, 3)
        self._bytes[offset]     = value >> 16
        self._bytes[offset + 1] = (value >> 8) & 0xFF
        self._bytes[offset + 2] = value & 0xFF

    def write_bytes(self, offset: int, data: BytesLike) -> None:
        """Copy a whole block in one step, after checking its full range."""
        self.require_range(offset, len(data))
        self._bytes[offset:offset + len(data)] = data

    # ── Bits ───────────────────────────────────────────────────────────────────
    @staticmethod
    def _require_bit_index(bit_index: int) -> None:
        if not 0 <= bit_index <= 7:
            raise OutOfRangeError(f"SaveBuffer: bit index must be 0..7, got {bit_index}")

    def get_bit(self, byte_offset: int, bit_index: int) -> bool:
        self._require_bit_index(bit_index)
        self.require_range(byte_offset, 1)
        return bool(self._bytes[byte_offset] & (1 << bit_index))

    def set_bit(self, byte_offset: int, bit_index: int, value: bool) -> None:
        self._require_bit_index(bit_index)
        self.require_range(byte_offset, 1)
        mask = 1 << bit_index
        if value:
            self._bytes[byte_offset] |= mask
        else:
            self._bytes[byte_offset] &= ~mask & 0xFF

    # ── Slices ─────────────────────────────────────────────────────────────────
    def slice(self, offset: int, length: int) -> bytes:
        """Owned copy of [offset, offset + length)."""
        self.require_range(offset, length)
        return bytes(self._bytes[offset:offset + length])
