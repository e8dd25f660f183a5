"""
Gen I (Red/Blue/Yellow) SRAM save layout.

A 32 KiB save is split into four 8 KiB banks:

  - Bank 0 (0x0000): scratch data and the Hall of Fame (no checksum)
  - Bank 1 (0x2000): the main game state, protected by one checksum byte
  - Bank 2 (0x4000): PC boxes 1-6, a bank-wide checksum and 6 per-box checksums
  - Bank 3 (0x6000): PC boxes 7-12, same arrangement as bank 2

All offsets below are absolute from the start of the file. Box/bank helpers
accept box indices 1..12 and bank indices 2..3 and reject anything else.
"""

from .errors import OutOfRangeError

# ── File / Bank Geometry ───────────────────────────────────────────────────────

EXPECTED_SIZE   = 0x8000    # 32 KiB SRAM dump

BANK0_BASE      = 0x0000
BANK1_BASE      = 0x2000
BANK2_BASE      = 0x4000
BANK3_BASE      = 0x6000
BANK_SIZE       = 0x2000

# ── Bank 1: Trainer / Game State ───────────────────────────────────────────────

TRAINER_NAME_OFF    = 0x2598
TRAINER_NAME_LEN    = 11        # includes terminator

POKEDEX_OWNED_OFF   = 0x25A3
POKEDEX_SEEN_OFF    = 0x25B6
POKEDEX_BITS_LEN    = 0x13      # 19 bytes = 152 bits, dex #1..151 used
POKEDEX_MAX_DEX     = 151

BAG_ITEMS_OFF       = 0x25C9
BAG_ITEMS_LEN       = 0x2A

MONEY_OFF           = 0x25F3    # 3-byte BCD
MONEY_LEN           = 3

RIVAL_NAME_OFF      = 0x25F6
RIVAL_NAME_LEN      = 11

OPTIONS_OFF         = 0x2601
BADGES_OFF          = 0x2602
LETTER_DELAY_OFF    = 0x2604
TRAINER_ID_OFF      = 0x2605    # big-endian u16: [hi][lo]

MUSIC_ID_OFF        = 0x2607
MUSIC_BANK_OFF      = 0x2608
CONTRAST_OFF        = 0x2609

MAP_ID_OFF          = 0x260A
# Some references list X/Y swapped; these follow the Bulbapedia save structure.
Y_COORD_OFF         = 0x260D
X_COORD_OFF         = 0x260E

COINS_OFF           = 0x2850    # 2-byte BCD
COINS_LEN           = 2

HALL_OF_FAME_COUNT_OFF = 0x284E

EVENT_FLAGS_OFF     = 0x29F3
EVENT_FLAGS_LEN     = 0x140

PLAYTIME_HOURS_OFF   = 0x2CED
PLAYTIME_MAXED_OFF   = 0x2CEE
PLAYTIME_MINUTES_OFF = 0x2CEF
PLAYTIME_SECONDS_OFF = 0x2CF0
PLAYTIME_FRAMES_OFF  = 0x2CF1

# ── Main Checksum (Bank 1) ─────────────────────────────────────────────────────

MAIN_CHECKSUM_START = 0x2598
MAIN_CHECKSUM_END   = 0x3522    # inclusive
MAIN_CHECKSUM_OFF   = 0x3523

# ── PC Boxes (Banks 2 and 3) ───────────────────────────────────────────────────

BOX_COUNT           = 12
BOXES_PER_BANK      = 6
BOX_BLOCK_SIZE      = 0x462

BOX_MAX_POKEMON     = 20
BOX_SPECIES_LIST_LEN = 20
BOX_MONS_OFFSET     = 0x16      # 1 count + 20 species + 1 padding
BOX_MON_SIZE        = 0x21
# Level byte inside the 0x21-byte box struct; isolated here in case later
# research moves it.
BOX_MON_LEVEL_OFFSET = 0x03

BOX1_OFF            = 0x4000
BANK2_ALL_CHECKSUM_OFF  = 0x5A4C
BANK2_BOX_CHECKSUMS_OFF = 0x5A4D    # 6 bytes, one per box

BOX7_OFF            = 0x6000
BANK3_ALL_CHECKSUM_OFF  = 0x7A4C
BANK3_BOX_CHECKSUMS_OFF = 0x7A4D    # 6 bytes

BOX_BANKS = (2, 3)

# ── Hall of Fame (Bank 0, unprotected) ─────────────────────────────────────────

HALL_OF_FAME_OFF            = 0x0598
HALL_OF_FAME_LEN            = 0x12C0
HALL_OF_FAME_MAX_RECORDS    = 50
HALL_OF_FAME_RECORD_SIZE    = 0x60
HALL_OF_FAME_MONS_PER_RECORD = 6
HALL_OF_FAME_MON_SIZE       = 0x10
HALL_OF_FAME_SPECIES_OFFSET = 0x00
HALL_OF_FAME_LEVEL_OFFSET   = 0x01
HALL_OF_FAME_NAME_OFFSET    = 0x02
HALL_OF_FAME_NAME_LEN       = 0x0B


# ── Box / Bank Helpers ─────────────────────────────────────────────────────────

def _require_box_index(box_index: int) -> None:
    if not 1 <= box_index <= BOX_COUNT:
        raise OutOfRangeError(f"Box index must be 1..{BOX_COUNT}, got {box_index}")


def _require_bank_index(bank_index: int) -> None:
    if bank_index not in BOX_BANKS:
        raise OutOfRangeError(f"Bank index must be 2 or 3, got {bank_index}")


def bank_for_box(box_index: int) -> int:
    """Boxes 1-6 live in bank 2, boxes 7-12 in bank 3."""
    _require_box_index(box_index)
    return 2 if box_index <= BOXES_PER_BANK else 3


def box_index_within_bank(box_index: int) -> int:
    """0-based position of a box inside its 6-box bank."""
    _require_box_index(box_index)
    return (box_index - 1) % BOXES_PER_BANK


def box_base_offset(box_index: int) -> int:
    """Absolute offset of the 0x462-byte block for box 1..12."""
    first = BOX1_OFF if bank_for_box(box_index) == 2 else BOX7_OFF
    return first + box_index_within_bank(box_index) * BOX_BLOCK_SIZE


def bank_all_checksum_offset(box_index: int) -> int:
    """Bank-wide checksum byte for the bank containing box 1..12."""
    return bank_all_checksum_offset_for_bank(bank_for_box(box_index))


def bank_per_box_checksums_base(box_index: int) -> int:
    """Start of the 6-byte per-box checksum table for the bank containing box 1..12."""
    if bank_for_box(box_index) == 2:
        return BANK2_BOX_CHECKSUMS_OFF
    return BANK3_BOX_CHECKSUMS_OFF


def bank_base_offset(bank_index: int) -> int:
    _require_bank_index(bank_index)
    return BANK2_BASE if bank_index == 2 else BANK3_BASE


def bank_all_checksum_offset_for_bank(bank_index: int) -> int:
    _require_bank_index(bank_index)
    return BANK2_ALL_CHECKSUM_OFF if bank_index == 2 else BANK3_ALL_CHECKSUM_OFF


def boxes_in_bank(bank_index: int) -> range:
    _require_bank_index(bank_index)
    first = 1 if bank_index == 2 else BOXES_PER_BANK + 1
    return range(first, first + BOXES_PER_BANK)


def hall_of_fame_record_offset(record_index: int) -> int:
    """Offset of 0-based Hall of Fame record slot."""
    if not 0 <= record_index < HALL_OF_FAME_MAX_RECORDS:
        raise OutOfRangeError(
            f"Hall of Fame record index must be 0..{HALL_OF_FAME_MAX_RECORDS - 1}, got {record_index}"
        )
    return HALL_OF_FAME_OFF + record_index * HALL_OF_FAME_RECORD_SIZE
