"""Tests for the byte buffer, layout helpers, text codec and BCD codec."""

import pytest

from redsave.core import layout, lookups
from redsave.core.bcd import read_bcd2, read_bcd3, write_bcd2, write_bcd3
from redsave.core.buffer import SaveBuffer
from redsave.core.errors import DomainRangeError, ErrorKind, OutOfRangeError
from redsave.core.text import (
    SPACE,
    TERMINATOR,
    byte_to_char,
    char_to_byte,
    decode_name,
    encode_name,
)


# =============================================================================
# SaveBuffer
# =============================================================================

class TestSaveBuffer:
    def test_size(self, blank_save):
        assert blank_save.size() == 0x8000
        assert len(blank_save) == 0x8000

    def test_u16_is_little_endian(self):
        buf = SaveBuffer(b'\x34\x12')
        assert buf.read_u16le(0) == 0x1234

    def test_u24_is_big_endian(self):
        buf = SaveBuffer(b'\x12\x34\x56')
        assert buf.read_u24be(0) == 0x123456

    def test_writes_use_declared_byte_order(self):
        buf = SaveBuffer(bytes(5))
        buf.write_u16le(0, 0xBEEF)
        buf.write_u24be(2, 0x010203)
        assert buf.to_bytes() == b'\xEF\xBE\x01\x02\x03'

    def test_read_then_write_leaves_bytes_unchanged(self):
        data = bytes(range(16))
        buf = SaveBuffer(data)
        buf.write_u8(3, buf.read_u8(3))
        buf.write_u16le(5, buf.read_u16le(5))
        buf.write_u24be(10, buf.read_u24be(10))
        assert buf.to_bytes() == data

    def test_require_range_accepts_exact_fit(self):
        buf = SaveBuffer(bytes(8))
        buf.require_range(0, 8)
        buf.require_range(7, 1)

    def test_zero_length_at_end_is_legal(self):
        buf = SaveBuffer(bytes(8))
        buf.require_range(8, 0)
        buf.require_range(100, 0)

    @pytest.mark.parametrize("offset,length", [(0, 9), (8, 1), (7, 2), (9, 1), (-1, 1)])
    def test_require_range_rejects_overrun(self, offset, length):
        buf = SaveBuffer(bytes(8))
        with pytest.raises(OutOfRangeError):
            buf.require_range(offset, length)

    def test_out_of_range_is_index_error(self):
        buf = SaveBuffer(bytes(2))
        with pytest.raises(IndexError) as exc:
            buf.read_u24be(0)
        assert exc.value.kind is ErrorKind.OUT_OF_RANGE

    def test_failed_write_changes_nothing(self):
        buf = SaveBuffer(bytes(4))
        with pytest.raises(OutOfRangeError):
            buf.write_bytes(2, b'\xFF\xFF\xFF')
        with pytest.raises(OutOfRangeError):
            buf.write_u24be(2, 0xFFFFFF)
        assert buf.to_bytes() == bytes(4)

    @pytest.mark.parametrize("method,value", [
        ("write_u8", 0x100),
        ("write_u8", -1),
        ("write_u16le", 0x10000),
        ("write_u16le", -1),
        ("write_u24be", 0x1000000),
        ("write_u24be", -1),
    ])
    def test_write_rejects_value_wider_than_field(self, method, value):
        buf = SaveBuffer(bytes(4))
        with pytest.raises(DomainRangeError) as exc:
            getattr(buf, method)(0, value)
        assert exc.value.kind is ErrorKind.DOMAIN_RANGE
        assert buf.to_bytes() == bytes(4)

    def test_write_accepts_field_maximum(self):
        buf = SaveBuffer(bytes(6))
        buf.write_u8(0, 0xFF)
        buf.write_u16le(1, 0xFFFF)
        buf.write_u24be(3, 0xFFFFFF)
        assert buf.to_bytes() == b'\xFF' * 6

    def test_bits(self):
        buf = SaveBuffer(bytes(1))
        buf.set_bit(0, 7, True)
        buf.set_bit(0, 0, True)
        assert buf.read_u8(0) == 0x81
        assert buf.get_bit(0, 7)
        assert not buf.get_bit(0, 3)
        buf.set_bit(0, 7, False)
        assert buf.read_u8(0) == 0x01

    @pytest.mark.parametrize("bit", [-1, 8])
    def test_bit_index_must_be_0_to_7(self, bit):
        buf = SaveBuffer(bytes(1))
        with pytest.raises(OutOfRangeError):
            buf.get_bit(0, bit)
        with pytest.raises(OutOfRangeError):
            buf.set_bit(0, bit, True)

    def test_slice_is_a_copy(self):
        buf = SaveBuffer(b'\x01\x02\x03')
        part = buf.slice(1, 2)
        assert part == b'\x02\x03'
        buf.write_u8(1, 0xFF)
        assert part == b'\x02\x03'

    def test_copy_is_independent(self):
        buf = SaveBuffer(bytes(2))
        clone = buf.copy()
        clone.write_u8(0, 1)
        assert buf.read_u8(0) == 0


# =============================================================================
# Layout helpers
# =============================================================================

class TestLayout:
    @pytest.mark.parametrize("box,offset", [
        (1, 0x4000),
        (2, 0x4462),
        (6, 0x4000 + 5 * 0x462),
        (7, 0x6000),
        (12, 0x6000 + 5 * 0x462),
    ])
    def test_box_base_offset(self, box, offset):
        assert layout.box_base_offset(box) == offset

    def test_sixth_box_ends_at_bank_checksum(self):
        end = layout.box_base_offset(6) + layout.BOX_BLOCK_SIZE
        assert end == layout.BANK2_ALL_CHECKSUM_OFF

    def test_bank_checksum_offsets_split_at_box_7(self):
        assert layout.bank_all_checksum_offset(6) == 0x5A4C
        assert layout.bank_all_checksum_offset(7) == 0x7A4C
        assert layout.bank_per_box_checksums_base(1) == 0x5A4D
        assert layout.bank_per_box_checksums_base(12) == 0x7A4D

    @pytest.mark.parametrize("box", [0, 13, -1])
    def test_box_helpers_reject_bad_index(self, box):
        for helper in (layout.box_base_offset,
                       layout.bank_all_checksum_offset,
                       layout.bank_per_box_checksums_base):
            with pytest.raises(OutOfRangeError):
                helper(box)

    @pytest.mark.parametrize("bank", [0, 1, 4])
    def test_bank_helpers_reject_bad_index(self, bank):
        with pytest.raises(OutOfRangeError):
            layout.bank_base_offset(bank)
        with pytest.raises(OutOfRangeError):
            layout.bank_all_checksum_offset_for_bank(bank)

    def test_boxes_in_bank(self):
        assert list(layout.boxes_in_bank(2)) == [1, 2, 3, 4, 5, 6]
        assert list(layout.boxes_in_bank(3)) == [7, 8, 9, 10, 11, 12]

    def test_box_index_within_bank(self):
        assert layout.box_index_within_bank(1) == 0
        assert layout.box_index_within_bank(7) == 0
        assert layout.box_index_within_bank(12) == 5


# =============================================================================
# Lookup tables
# =============================================================================

class TestLookups:
    def test_tables_are_dense(self):
        assert len(lookups.SPECIES_NAMES) == 256
        assert len(lookups.POKEDEX_TO_SPECIES) == 256
        assert len(lookups.MAP_NAMES) == 256

    def test_species_name(self):
        assert lookups.species_name(0x01) == "RHYDON"
        assert lookups.species_name(0x00) == lookups.INVALID
        assert lookups.species_name(0xFF) == lookups.INVALID
        assert lookups.species_name(999) == lookups.INVALID

    def test_dex_indirection(self):
        assert lookups.species_id_for_dex(1) == 153
        assert lookups.dex_display_name(1) == "BULBASAUR"
        assert lookups.species_id_for_dex(0) == -1
        assert lookups.dex_display_name(0) == lookups.INVALID

    def test_map_lookups(self):
        assert lookups.map_name(0) == "Pallet Town"
        assert lookups.map_hex(0x25) == "0x25"
        assert lookups.map_name(-3) == lookups.INVALID


# =============================================================================
# Text codec
# =============================================================================

class TestTextCodec:
    @pytest.mark.parametrize("byte,char", [
        (0x80, 'A'), (0x99, 'Z'), (0xA0, '0'), (0xA9, '9'),
        (0x7F, ' '), (0x50, '\0'), (0x00, '?'), (0x9A, '?'), (0xFF, '?'),
    ])
    def test_byte_to_char(self, byte, char):
        assert byte_to_char(byte) == char

    def test_char_to_byte_is_case_insensitive(self):
        assert char_to_byte('a') == char_to_byte('A') == 0x80
        assert char_to_byte('7') == 0xA7

    def test_unsupported_chars_become_space(self):
        assert char_to_byte('!') == SPACE
        assert char_to_byte('é') == SPACE

    def test_encode_writes_terminated_field(self):
        buf = SaveBuffer(bytes(11))
        encode_name(buf, 0, 11, "Ash")
        assert buf.slice(0, 4) == b'\x80\x92\x87\x50'
        assert buf.slice(4, 7) == bytes([TERMINATOR]) * 7

    def test_encode_truncates_to_length_minus_one(self):
        buf = SaveBuffer(bytes(11))
        encode_name(buf, 0, 11, "ABCDEFGHIJKLMNOP")
        assert buf.read_u8(10) == TERMINATOR
        assert decode_name(buf, 0, 11) == "ABCDEFGHIJ"

    def test_encode_zero_length_is_noop(self):
        buf = SaveBuffer(bytes(2))
        encode_name(buf, 5, 0, "ASH")
        assert buf.to_bytes() == bytes(2)

    def test_encode_out_of_range_writes_nothing(self):
        buf = SaveBuffer(bytes(8))
        with pytest.raises(OutOfRangeError):
            encode_name(buf, 4, 11, "ASH")
        assert buf.to_bytes() == bytes(8)

    def test_decode_without_terminator_reads_whole_field(self):
        buf = SaveBuffer(b'\x80\x81\x82')
        assert decode_name(buf, 0, 3) == "ABC"

    def test_decode_encode_round_trip_is_stable(self):
        buf = SaveBuffer(b'\x92\x7F\xA1\x50\x33\x80')
        text = decode_name(buf, 0, 6)
        assert text == "S 1"
        encode_name(buf, 0, 6, text)
        assert decode_name(buf, 0, 6) == text

    def test_unknown_glyph_comes_back_as_space(self):
        buf = SaveBuffer(b'\x80\x00\x50')
        assert decode_name(buf, 0, 3) == "A?"
        encode_name(buf, 0, 3, decode_name(buf, 0, 3))
        assert decode_name(buf, 0, 3) == "A "


# =============================================================================
# BCD codec
# =============================================================================

class TestBcd:
    def test_money_layout(self):
        buf = SaveBuffer(bytes(3))
        write_bcd3(buf, 0, 123456)
        assert buf.to_bytes() == b'\x12\x34\x56'
        assert read_bcd3(buf, 0) == 123456

    @pytest.mark.parametrize("value", [0, 1, 999, 100000, 999999])
    def test_bcd3_round_trip(self, value):
        buf = SaveBuffer(bytes(3))
        write_bcd3(buf, 0, value)
        assert read_bcd3(buf, 0) == value

    @pytest.mark.parametrize("value", [0, 42, 9999])
    def test_bcd2_round_trip(self, value):
        buf = SaveBuffer(bytes(2))
        write_bcd2(buf, 0, value)
        assert read_bcd2(buf, 0) == value

    def test_bcd3_rejects_overflow_before_writing(self):
        buf = SaveBuffer(b'\x11\x11\x11')
        with pytest.raises(DomainRangeError) as exc:
            write_bcd3(buf, 0, 1000000)
        assert exc.value.kind is ErrorKind.DOMAIN_RANGE
        assert buf.to_bytes() == b'\x11\x11\x11'

    def test_bcd2_rejects_overflow(self):
        buf = SaveBuffer(bytes(2))
        with pytest.raises(ValueError):
            write_bcd2(buf, 0, 10000)
        with pytest.raises(DomainRangeError):
            write_bcd2(buf, 0, -1)

    def test_nibble_above_nine_reads_as_zero(self):
        buf = SaveBuffer(b'\x1A\xF2\x00')
        assert read_bcd3(buf, 0) == 100200

    def test_read_out_of_range(self):
        with pytest.raises(OutOfRangeError):
            read_bcd3(SaveBuffer(bytes(2)), 0)
