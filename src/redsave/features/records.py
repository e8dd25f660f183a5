"""
Read-only record extraction for Gen I saves.

Turns fixed-offset fields into plain Python records:

  - TrainerSummary: names, ID, money, coins, badges, location, playtime
  - BoxStats: occupancy and average level for PC boxes 1-12
  - FlagSummary: the set bits of the event-flag region
  - PokedexSummary: owned/seen dex numbers (and optional names)
  - HallOfFameEntry: teams recorded in the unprotected Hall of Fame bank

Nothing here writes to the buffer. Every record is rebuilt from the bytes on
each call; none of them keeps a reference into the buffer.

Hall of Fame data lives in bank 0, which carries no checksum. Slots that were
never written contain whatever the cartridge RAM held, so each entry goes
through the predicates below before it is trusted.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core import layout, lookups
from ..core.bcd import read_bcd2, read_bcd3
from ..core.buffer import SaveBuffer
from ..core.text import UNKNOWN_CHAR, decode_name

logger = logging.getLogger(__name__)

MIN_SPECIES_ID = 1
MAX_SPECIES_ID = 151
MIN_LEVEL      = 1
MAX_LEVEL      = 100

HALL_OF_FAME_SENTINELS = (0x00, 0xFF)


# ── Data Classes ───────────────────────────────────────────────────────────────

@dataclass
class TrainerSummary:
    """Trainer identity, wallet, badges, location and playtime."""
    trainer_name: str
    rival_name:   str
    trainer_id:   int
    money:        int
    coins:        int
    badges:       int
    map_id:       int
    x:            int
    y:            int
    play_hours:   int
    play_minutes: int
    play_seconds: int

    def has_badge(self, bit: int) -> bool:
        return bool(self.badges & (1 << bit))

    @property
    def badge_list(self) -> List[str]:
        return [name for i, name in enumerate(lookups.BADGE_NAMES) if self.has_badge(i)]

    @property
    def map_name(self) -> str:
        return lookups.map_name(self.map_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'trainer_name': self.trainer_name,
            'rival_name':   self.rival_name,
            'trainer_id':   self.trainer_id,
            'money':        self.money,
            'coins':        self.coins,
            'badges':       self.badges,
            'badge_list':   self.badge_list,
            'map_id':       self.map_id,
            'map_hex':      lookups.map_hex(self.map_id),
            'map_name':     self.map_name,
            'x':            self.x,
            'y':            self.y,
            'play_hours':   self.play_hours,
            'play_minutes': self.play_minutes,
            'play_seconds': self.play_seconds,
        }


@dataclass
class BoxStats:
    box_index:     int
    pokemon_count: int
    average_level: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'box_index':     self.box_index,
            'pokemon_count': self.pokemon_count,
            'average_level': self.average_level,
        }


@dataclass
class FlagSummary:
    total_checked: int
    total_set:     int
    set_indices:   List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_checked': self.total_checked,
            'total_set':     self.total_set,
            'set_indices':   list(self.set_indices),
        }


@dataclass
class PokedexSummary:
    owned_count:       int
    seen_count:        int
    owned_dex_numbers: List[int] = field(default_factory=list)
    seen_dex_numbers:  List[int] = field(default_factory=list)
    owned_names:       List[str] = field(default_factory=list)    # empty unless requested
    seen_names:        List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'owned_count':       self.owned_count,
            'seen_count':        self.seen_count,
            'owned_dex_numbers': list(self.owned_dex_numbers),
            'seen_dex_numbers':  list(self.seen_dex_numbers),
            'owned_names':       list(self.owned_names),
            'seen_names':        list(self.seen_names),
        }


@dataclass
class HallOfFamePokemon:
    species_id:   int
    species_name: str
    level:        int
    name:         str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'species_id':   self.species_id,
            'species_name': self.species_name,
            'level':        self.level,
            'name':         self.name,
        }


@dataclass
class HallOfFameEntry:
    """One recorded team. entry_index is 1-based display numbering."""
    entry_index: int
    team:        List[HallOfFamePokemon] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'entry_index': self.entry_index,
            'team':        [p.to_dict() for p in self.team],
        }


# ── Plausibility Predicates ────────────────────────────────────────────────────

def is_valid_species_id(species_id: int) -> bool:
    return MIN_SPECIES_ID <= species_id <= MAX_SPECIES_ID


def is_valid_level(level: int) -> bool:
    return MIN_LEVEL <= level <= MAX_LEVEL


def name_looks_reasonable(name: str) -> bool:
    """
    Heuristic for decoded names read from unprotected memory.

    A name passes when it is non-empty, has at least one non-space character
    and fewer than half of its characters are the unknown-glyph placeholder.
    """
    if not name:
        return False
    if not name.strip(' '):
        return False
    unknown = name.count(UNKNOWN_CHAR)
    return unknown * 2 < len(name)


# ── Reader ─────────────────────────────────────────────────────────────────────

class SaveReader:
    """
    Read-only view over a SaveBuffer.

    Usage:
        reader = SaveReader(SaveBuffer(raw_bytes))
        trainer = reader.get_trainer_summary()
        boxes = reader.get_all_box_stats()
    """

    def __init__(self, buffer: SaveBuffer):
        self.buffer = buffer

    # ── Trainer ────────────────────────────────────────────────────────────

    def get_trainer_summary(self) -> TrainerSummary:
        buf = self.buffer
        # The ID is stored high byte first, unlike the buffer's u16 reader.
        hi = buf.read_u8(layout.TRAINER_ID_OFF)
        lo = buf.read_u8(layout.TRAINER_ID_OFF + 1)
        return TrainerSummary(
            trainer_name=decode_name(buf, layout.TRAINER_NAME_OFF, layout.TRAINER_NAME_LEN),
            rival_name=decode_name(buf, layout.RIVAL_NAME_OFF, layout.RIVAL_NAME_LEN),
            trainer_id=(hi << 8) | lo,
            money=read_bcd3(buf, layout.MONEY_OFF),
            coins=read_bcd2(buf, layout.COINS_OFF),
            badges=buf.read_u8(layout.BADGES_OFF),
            map_id=buf.read_u8(layout.MAP_ID_OFF),
            x=buf.read_u8(layout.X_COORD_OFF),
            y=buf.read_u8(layout.Y_COORD_OFF),
            play_hours=buf.read_u8(layout.PLAYTIME_HOURS_OFF),
            play_minutes=buf.read_u8(layout.PLAYTIME_MINUTES_OFF),
            play_seconds=buf.read_u8(layout.PLAYTIME_SECONDS_OFF),
        )

    # ── PC Boxes ───────────────────────────────────────────────────────────

    def get_box_stats(self, box_index: int) -> BoxStats:
        """
        Occupancy and average level for one PC box.

        Args:
            box_index: 1..12

        Returns:
            BoxStats with the count clamped to 0..20. Levels outside 1..100
            are left out of the average entirely.
        """
        base = layout.box_base_offset(box_index)
        count = min(self.buffer.read_u8(base), layout.BOX_MAX_POKEMON)

        if count == 0:
            return BoxStats(box_index=box_index, pokemon_count=0, average_level=0.0)

        mons_base = base + layout.BOX_MONS_OFFSET
        levels = []
        for slot in range(count):
            level = self.buffer.read_u8(
                mons_base + slot * layout.BOX_MON_SIZE + layout.BOX_MON_LEVEL_OFFSET
            )
            if is_valid_level(level):
                levels.append(level)
            else:
                logger.debug(f"Box {box_index} slot {slot}: level {level} ignored")

        average = sum(levels) / len(levels) if levels else 0.0
        return BoxStats(box_index=box_index, pokemon_count=count, average_level=average)

    def get_all_box_stats(self) -> List[BoxStats]:
        return [self.get_box_stats(i) for i in range(1, layout.BOX_COUNT + 1)]

    # ── Event Flags ────────────────────────────────────────────────────────

    def get_event_flag_summary(self) -> FlagSummary:
        raw = self.buffer.slice(layout.EVENT_FLAGS_OFF, layout.EVENT_FLAGS_LEN)
        indices = [
            byte_index * 8 + bit
            for byte_index, byte in enumerate(raw)
            for bit in range(8)
            if byte & (1 << bit)
        ]
        return FlagSummary(
            total_checked=layout.EVENT_FLAGS_LEN * 8,
            total_set=len(indices),
            set_indices=indices,
        )

    # ── Pokedex ────────────────────────────────────────────────────────────

    @staticmethod
    def _dex_numbers(bits: bytes) -> List[int]:
        found = []
        for dex in range(1, layout.POKEDEX_MAX_DEX + 1):
            bit_index = dex - 1
            if bits[bit_index // 8] & (1 << (bit_index % 8)):
                found.append(dex)
        return found

    def get_pokedex_summary(self, include_names: bool = False) -> PokedexSummary:
        owned_bits = self.buffer.slice(layout.POKEDEX_OWNED_OFF, layout.POKEDEX_BITS_LEN)
        seen_bits = self.buffer.slice(layout.POKEDEX_SEEN_OFF, layout.POKEDEX_BITS_LEN)

        owned = self._dex_numbers(owned_bits)
        seen = self._dex_numbers(seen_bits)

        summary = PokedexSummary(
            owned_count=len(owned),
            seen_count=len(seen),
            owned_dex_numbers=owned,
            seen_dex_numbers=seen,
        )
        if include_names:
            summary.owned_names = [lookups.dex_display_name(n) for n in owned]
            summary.seen_names = [lookups.dex_display_name(n) for n in seen]
        return summary

    # ── Hall of Fame ───────────────────────────────────────────────────────

    def get_hall_of_fame_count_hint(self) -> int:
        hint = self.buffer.read_u8(layout.HALL_OF_FAME_COUNT_OFF)
        return min(hint, layout.HALL_OF_FAME_MAX_RECORDS)

    def _read_hall_of_fame_mon(self, offset: int) -> Optional[HallOfFamePokemon]:
        """Decode one entry, or None if any plausibility check fails."""
        species_id = self.buffer.read_u8(offset + layout.HALL_OF_FAME_SPECIES_OFFSET)
        level = self.buffer.read_u8(offset + layout.HALL_OF_FAME_LEVEL_OFFSET)
        if not is_valid_species_id(species_id) or not is_valid_level(level):
            return None

        name = decode_name(
            self.buffer, offset + layout.HALL_OF_FAME_NAME_OFFSET, layout.HALL_OF_FAME_NAME_LEN
        )
        if not name_looks_reasonable(name):
            return None

        return HallOfFamePokemon(
            species_id=species_id,
            species_name=lookups.species_name(species_id),
            level=level,
            name=name,
        )

    def _read_hall_of_fame_slot(self, record_index: int) -> List[HallOfFamePokemon]:
        """
        Scan one record slot.

        A sentinel species byte ends the slot. A bad first entry means the
        whole slot is garbage; a bad later entry is skipped.
        """
        base = layout.hall_of_fame_record_offset(record_index)
        team: List[HallOfFamePokemon] = []

        for position in range(layout.HALL_OF_FAME_MONS_PER_RECORD):
            offset = base + position * layout.HALL_OF_FAME_MON_SIZE
            if self.buffer.read_u8(offset) in HALL_OF_FAME_SENTINELS:
                break

            mon = self._read_hall_of_fame_mon(offset)
            if mon is None:
                if position == 0:
                    logger.debug(f"Hall of Fame slot {record_index}: first entry invalid, slot discarded")
                    return []
                logger.debug(f"Hall of Fame slot {record_index}: entry {position} skipped")
                continue
            team.append(mon)

        return team

    def get_hall_of_fame(self) -> List[HallOfFameEntry]:
        """
        Recorded Hall of Fame teams, newest last, numbered from 1.

        Every slot is scanned because the count byte cannot be trusted on its
        own. When more plausible slots exist than the count byte claims, only
        the last `count` are kept.
        """
        hint = self.get_hall_of_fame_count_hint()

        valid: List[HallOfFameEntry] = []
        for record_index in range(layout.HALL_OF_FAME_MAX_RECORDS):
            team = self._read_hall_of_fame_slot(record_index)
            if team:
                valid.append(HallOfFameEntry(entry_index=record_index + 1, team=team))

        if hint == 0:
            return []

        if len(valid) > hint:
            logger.debug(f"Hall of Fame: {len(valid)} plausible slots, keeping newest {hint}")
            valid = valid[-hint:]

        for number, entry in enumerate(valid, start=1):
            entry.entry_index = number
        return valid
