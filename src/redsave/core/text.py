"""
Gen I text codec (names).

The games use their own 1-byte character set. Only the glyphs needed for
names are mapped here:

  - 0x80..0x99 -> 'A'..'Z'
  - 0xA0..0xA9 -> '0'..'9'
  - 0x7F       -> ' '
  - 0x50       -> string terminator

Every other byte decodes to UNKNOWN_CHAR. Encoding is lossy: any
character outside A-Z, 0-9 and space becomes a space.
"""

from .buffer import SaveBuffer

TERMINATOR      = 0x50
SPACE           = 0x7F
LETTERS_START   = 0x80
DIGITS_START    = 0xA0

TERMINATOR_CHAR = '\0'
UNKNOWN_CHAR    = '?'


def byte_to_char(byte: int) -> str:
    if LETTERS_START <= byte <= LETTERS_START + 25:
        return chr(ord('A') + byte - LETTERS_START)
    if DIGITS_START <= byte <= DIGITS_START + 9:
        return chr(ord('0') + byte - DIGITS_START)
    if byte == SPACE:
        return ' '
    if byte == TERMINATOR:
        return TERMINATOR_CHAR
    return UNKNOWN_CHAR


def char_to_byte(char: str) -> int:
    upper = char.upper()
    if 'A' <= upper <= 'Z' and len(upper) == 1:
        return LETTERS_START + ord(upper) - ord('A')
    if '0' <= char <= '9' and len(char) == 1:
        return DIGITS_START + ord(char) - ord('0')
    return SPACE


def decode_name(buffer: SaveBuffer, offset: int, length: int) -> str:
    """Decode a fixed-length name field, stopping before the first terminator."""
    chars = []
    for byte in buffer.slice(offset, length):
        char = byte_to_char(byte)
        if char == TERMINATOR_CHAR:
            break
        chars.append(char)
    return ''.join(chars)


def encode_name(buffer: SaveBuffer, offset: int, length: int, name: str) -> None:
    """
    Encode `name` into a fixed-length field.

    At most length - 1 characters are kept, the text is always followed by a
    terminator and the rest of the field is padded with terminators. The
    whole field is written in one bounds-checked step.
    """
    if length == 0:
        return
    out = bytearray([TERMINATOR] * length)
    visible = name[:length - 1]
    for i, char in enumerate(visible):
        out[i] = char_to_byte(char)
    out[len(visible)] = TERMINATOR
    buffer.write_bytes(offset, out)
