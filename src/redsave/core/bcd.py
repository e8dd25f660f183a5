"""
Packed-decimal (BCD) helpers for money (3 bytes) and slot-machine coins (2 bytes).

Each nibble holds one decimal digit, most-significant nibble of the first
byte first. A nibble above 9 reads as 0 rather than failing.
"""

from typing import List

from .buffer import SaveBuffer
from .errors import DomainRangeError

MONEY_MAX = 999999
COINS_MAX = 9999


def _digit(nibble: int) -> int:
    return nibble if nibble <= 9 else 0


def _read_digits(buffer: SaveBuffer, offset: int, num_bytes: int) -> int:
    raw = buffer.slice(offset, num_bytes)
    value = 0
    for byte in raw:
        value = value * 10 + _digit(byte >> 4)
        value = value * 10 + _digit(byte & 0x0F)
    return value


def _pack_digits(value: int, num_bytes: int) -> bytes:
    digits: List[int] = [int(d) for d in str(value).zfill(num_bytes * 2)]
    return bytes((digits[i] << 4) | digits[i + 1] for i in range(0, len(digits), 2))


def _check_value(value: int, maximum: int, field: str) -> None:
    if not 0 <= value <= maximum:
        raise DomainRangeError(f"{field}: value must be 0..{maximum}, got {value}")


def read_bcd3(buffer: SaveBuffer, offset: int) -> int:
    return _read_digits(buffer, offset, 3)


def write_bcd3(buffer: SaveBuffer, offset: int, value: int) -> None:
    _check_value(value, MONEY_MAX, "write_bcd3")
    buffer.write_bytes(offset, _pack_digits(value, 3))


def read_bcd2(buffer: SaveBuffer, offset: int) -> int:
    return _read_digits(buffer, offset, 2)


def write_bcd2(buffer: SaveBuffer, offset: int, value: int) -> None:
    _check_value(value, COINS_MAX, "write_bcd2")
    buffer.write_bytes(offset, _pack_digits(value, 2))
