"""
Gen I checksum engine.

Three checksum families protect the save:

  - Main:      bytes 0x2598..0x3522 of bank 1, stored at 0x3523
  - Bank-all:  for bank 2 and bank 3, every byte from the bank base up to the
               byte before the bank's "all" checksum, stored at that byte
  - Per-box:   each 0x462-byte box block, stored in a 6-byte table per bank

All three use the same algorithm: sum the inclusive byte range, keep the low
8 bits and invert them. They differ only in the range summed and where the
result lives, so each one is described by a ChecksumRegion.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from ..core import layout
from ..core.buffer import SaveBuffer
from ..core.errors import MalformedRangeError

logger = logging.getLogger(__name__)


# ── Data Classes ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ChecksumRegion:
    """An inclusive byte range and the offset where its checksum is stored."""
    name:      str
    start:     int
    end:       int      # inclusive
    stored_at: int


@dataclass
class ChecksumStatus:
    """Stored vs freshly computed checksum for one region."""
    region:   ChecksumRegion
    stored:   int
    computed: int

    @property
    def is_valid(self) -> bool:
        return self.stored == self.computed

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name':      self.region.name,
            'start':     self.region.start,
            'end':       self.region.end,
            'stored_at': self.region.stored_at,
            'stored':    self.stored,
            'computed':  self.computed,
            'valid':     self.is_valid,
        }


# ── Core Primitive ─────────────────────────────────────────────────────────────

def sum_and_invert(buffer: SaveBuffer, start: int, end: int) -> int:
    """
    Complement of the low byte of the sum of buffer[start..end] (inclusive).

    A zero-length range is not supported: end < start is a contract
    violation, not an empty sum.

    Raises:
        MalformedRangeError: if end < start.
        OutOfRangeError: if the range does not fit in the buffer.
    """
    if end < start:
        raise MalformedRangeError(f"Checksum: end 0x{end:x} < start 0x{start:x}")
    total = sum(buffer.slice(start, end - start + 1))
    return ~total & 0xFF


# ── Regions ────────────────────────────────────────────────────────────────────

def main_region() -> ChecksumRegion:
    return ChecksumRegion(
        name="main",
        start=layout.MAIN_CHECKSUM_START,
        end=layout.MAIN_CHECKSUM_END,
        stored_at=layout.MAIN_CHECKSUM_OFF,
    )


def bank_region(bank_index: int) -> ChecksumRegion:
    """Bank-all region for bank 2 or 3."""
    stored_at = layout.bank_all_checksum_offset_for_bank(bank_index)
    return ChecksumRegion(
        name=f"bank{bank_index}",
        start=layout.bank_base_offset(bank_index),
        end=stored_at - 1,
        stored_at=stored_at,
    )


def box_region(box_index: int) -> ChecksumRegion:
    """Per-box region for box 1..12."""
    start = layout.box_base_offset(box_index)
    table = layout.bank_per_box_checksums_base(box_index)
    return ChecksumRegion(
        name=f"box{box_index}",
        start=start,
        end=start + layout.BOX_BLOCK_SIZE - 1,
        stored_at=table + layout.box_index_within_bank(box_index),
    )


def box_regions() -> List[ChecksumRegion]:
    """Per-box regions for boxes 1..12, bank 2 first."""
    return [box_region(i) for b in layout.BOX_BANKS for i in layout.boxes_in_bank(b)]


def all_regions() -> List[ChecksumRegion]:
    """Every region in repair order: boxes, then banks, then main."""
    regions = box_regions()
    regions.extend(bank_region(b) for b in layout.BOX_BANKS)
    regions.append(main_region())
    return regions


# ── Generic Compute / Validate / Fix ───────────────────────────────────────────

def compute(buffer: SaveBuffer, region: ChecksumRegion) -> int:
    return sum_and_invert(buffer, region.start, region.end)


def status(buffer: SaveBuffer, region: ChecksumRegion) -> ChecksumStatus:
    computed = compute(buffer, region)
    stored = buffer.read_u8(region.stored_at)
    if stored != computed:
        logger.debug(
            f"Checksum {region.name} mismatch: stored 0x{stored:02X}, computed 0x{computed:02X}"
        )
    return ChecksumStatus(region=region, stored=stored, computed=computed)


def validate(buffer: SaveBuffer, region: ChecksumRegion) -> bool:
    return status(buffer, region).is_valid


def fix(buffer: SaveBuffer, region: ChecksumRegion) -> int:
    """Overwrite the stored byte with the computed checksum and return it."""
    value = compute(buffer, region)
    buffer.write_u8(region.stored_at, value)
    return value


# ── Per-Family Wrappers ────────────────────────────────────────────────────────

def compute_main(buffer: SaveBuffer) -> int:
    return compute(buffer, main_region())


def validate_main(buffer: SaveBuffer) -> bool:
    return validate(buffer, main_region())


def fix_main(buffer: SaveBuffer) -> int:
    return fix(buffer, main_region())


def compute_bank_all(buffer: SaveBuffer, bank_index: int) -> int:
    return compute(buffer, bank_region(bank_index))


def validate_bank_all(buffer: SaveBuffer, bank_index: int) -> bool:
    return validate(buffer, bank_region(bank_index))


def fix_bank_all(buffer: SaveBuffer, bank_index: int) -> int:
    return fix(buffer, bank_region(bank_index))


def compute_box(buffer: SaveBuffer, box_index: int) -> int:
    return compute(buffer, box_region(box_index))


def validate_box(buffer: SaveBuffer, box_index: int) -> bool:
    return validate(buffer, box_region(box_index))


def fix_box(buffer: SaveBuffer, box_index: int) -> int:
    return fix(buffer, box_region(box_index))


# ── Whole-Save Helpers ─────────────────────────────────────────────────────────

def checksum_report(buffer: SaveBuffer) -> List[ChecksumStatus]:
    """Status of main, bank 2, bank 3 and boxes 1..12, in that order."""
    regions = [main_region()]
    regions.extend(bank_region(b) for b in layout.BOX_BANKS)
    regions.extend(box_regions())
    return [status(buffer, r) for r in regions]


def fix_all(buffer: SaveBuffer) -> List[ChecksumStatus]:
    """
    Repair every checksum so that all of them validate afterwards.

    No region covers another region's stored byte (the per-box table sits
    just past the bank-all byte), so one pass in any order is enough. Boxes
    go first, then banks, then main.

    Returns:
        The status of every region before repair.
    """
    before = checksum_report(buffer)
    for region in all_regions():
        fix(buffer, region)
    repaired = [s.region.name for s in before if not s.is_valid]
    if repaired:
        logger.info(f"Repaired checksums: {', '.join(repaired)}")
    return before
