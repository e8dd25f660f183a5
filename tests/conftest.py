"""Shared fixtures for redsave tests."""

import pytest

from redsave.core import layout
from redsave.core.bcd import write_bcd2, write_bcd3
from redsave.core.buffer import SaveBuffer
from redsave.core.text import encode_name
from redsave.features import checksum


# =============================================================================
# Helpers
# =============================================================================

def put_hof_mon(buf, record, position, species, level, name):
    """Write one Hall of Fame entry into record slot `record` (0-based)."""
    off = layout.hall_of_fame_record_offset(record) + position * layout.HALL_OF_FAME_MON_SIZE
    buf.write_u8(off + layout.HALL_OF_FAME_SPECIES_OFFSET, species)
    buf.write_u8(off + layout.HALL_OF_FAME_LEVEL_OFFSET, level)
    encode_name(buf, off + layout.HALL_OF_FAME_NAME_OFFSET, layout.HALL_OF_FAME_NAME_LEN, name)


def put_box(buf, box_index, levels, count=None):
    """Fill a PC box with mons at the given levels."""
    base = layout.box_base_offset(box_index)
    buf.write_u8(base, len(levels) if count is None else count)
    for slot, level in enumerate(levels):
        mon = base + layout.BOX_MONS_OFFSET + slot * layout.BOX_MON_SIZE
        buf.write_u8(mon, 0x99)  # species byte, unused by the stats
        buf.write_u8(mon + layout.BOX_MON_LEVEL_OFFSET, level)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def blank_save():
    """A zero-filled 32 KiB save."""
    return SaveBuffer(bytes(layout.EXPECTED_SIZE))


@pytest.fixture
def populated_save():
    """A 32 KiB save with trainer data filled in and every checksum valid."""
    buf = SaveBuffer(bytes(layout.EXPECTED_SIZE))
    encode_name(buf, layout.TRAINER_NAME_OFF, layout.TRAINER_NAME_LEN, "ASH")
    encode_name(buf, layout.RIVAL_NAME_OFF, layout.RIVAL_NAME_LEN, "GARY")
    buf.write_u8(layout.TRAINER_ID_OFF, 0x12)
    buf.write_u8(layout.TRAINER_ID_OFF + 1, 0x34)
    write_bcd3(buf, layout.MONEY_OFF, 123456)
    write_bcd2(buf, layout.COINS_OFF, 789)
    buf.write_u8(layout.BADGES_OFF, 0b00000101)     # Boulder + Thunder
    buf.write_u8(layout.MAP_ID_OFF, 0x01)           # Viridian City
    buf.write_u8(layout.X_COORD_OFF, 7)
    buf.write_u8(layout.Y_COORD_OFF, 9)
    buf.write_u8(layout.PLAYTIME_HOURS_OFF, 12)
    buf.write_u8(layout.PLAYTIME_MINUTES_OFF, 34)
    buf.write_u8(layout.PLAYTIME_SECONDS_OFF, 56)
    buf.set_bit(layout.POKEDEX_OWNED_OFF, 0, True)  # dex #1
    buf.set_bit(layout.POKEDEX_SEEN_OFF, 0, True)
    buf.set_bit(layout.POKEDEX_SEEN_OFF, 1, True)   # dex #2
    put_box(buf, 1, [10, 200, 50, 0, 99])
    checksum.fix_all(buf)
    return buf


@pytest.fixture
def save_file(tmp_path, populated_save):
    """The populated save written to disk as red.sav."""
    path = tmp_path / "red.sav"
    path.write_bytes(populated_save.to_bytes())
    return path


@pytest.fixture
def hof_mon():
    return put_hof_mon


@pytest.fixture
def fill_box():
    return put_box
