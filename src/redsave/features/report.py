"""
Human-readable and JSON-ready views of a save.

The render_* helpers format one record each. dump_full_summary stitches them
into the full text report printed by the CLI; build_report_dict gathers the
same data as plain dicts for JSON output.
"""

from typing import Any, Dict, List

from ..core import layout, lookups
from ..core.buffer import SaveBuffer
from . import checksum
from .records import (
    BoxStats,
    FlagSummary,
    HallOfFameEntry,
    HallOfFamePokemon,
    PokedexSummary,
    SaveReader,
    TrainerSummary,
)
from .validator import SaveValidator

FLAG_PREVIEW_LIMIT = 10
DIVIDER = "=" * 38


def _valid_label(ok: bool) -> str:
    return "VALID" if ok else "INVALID"


# ── Record Renderers ───────────────────────────────────────────────────────────

def render_trainer(t: TrainerSummary) -> str:
    lines = [
        f"Trainer Name: {t.trainer_name}",
        f"Rival Name:   {t.rival_name}",
        f"Trainer ID:   {t.trainer_id}",
        f"Money:        ₽{t.money}",
        f"Coins:        {t.coins}",
        "Badges List:  ",
    ]
    for i, name in enumerate(lookups.BADGE_NAMES):
        lines.append(f"{i + 1}.{name} ->{'Yes' if t.has_badge(i) else 'No'}")
    lines.append("")
    lines.append(
        f"Location:     MapID={t.map_id}, Hex= ({lookups.map_hex(t.map_id)}) {t.map_name}"
        f" X={t.x} Y={t.y}"
    )
    lines.append(f"Playtime:     {t.play_hours}h {t.play_minutes}m {t.play_seconds}s")
    return "\n".join(lines) + "\n"


def render_box_stats(stats: BoxStats) -> str:
    text = f"Box {stats.box_index}: {stats.pokemon_count} Pokémon"
    if stats.pokemon_count > 0:
        text += f", Avg Lv {stats.average_level:.2f}"
    return text


def render_flag_summary(flags: FlagSummary) -> str:
    lines = [
        f"Flags Checked: {flags.total_checked}",
        f"Flags Set:     {flags.total_set}",
    ]
    if flags.set_indices:
        preview = ", ".join(str(i) for i in flags.set_indices[:FLAG_PREVIEW_LIMIT])
        if len(flags.set_indices) > FLAG_PREVIEW_LIMIT:
            preview += " ..."
        lines.append(f"Set Flag Indices (first {FLAG_PREVIEW_LIMIT}): {preview}")
    return "\n".join(lines) + "\n"


def render_pokedex(dex: PokedexSummary) -> str:
    lines = [
        f"Owned: {dex.owned_count} / {layout.POKEDEX_MAX_DEX}",
        f"Seen:  {dex.seen_count} / {layout.POKEDEX_MAX_DEX}",
        DIVIDER,
    ]
    if dex.owned_names:
        lines.append(f"Owned List: {', '.join(dex.owned_names)}")
    lines.append(DIVIDER)
    if dex.seen_names:
        lines.append(f"Seen List:  {', '.join(dex.seen_names)}")
    lines.append(DIVIDER)
    return "\n".join(lines) + "\n"


def render_hall_of_fame_pokemon(mon: HallOfFamePokemon) -> str:
    text = f"Species ID={mon.species_id} Species Name: {mon.species_name} Lv {mon.level}"
    if mon.name:
        text += f' "{mon.name}"'
    return text


def render_hall_of_fame_entry(entry: HallOfFameEntry) -> str:
    lines = [f"Entry #{entry.entry_index}:"]
    for i, mon in enumerate(entry.team, start=1):
        lines.append(f"  {i}) {render_hall_of_fame_pokemon(mon)}")
    return "\n".join(lines) + "\n"


# ── Whole-Save Reports ─────────────────────────────────────────────────────────

def dump_full_summary(buffer: SaveBuffer) -> str:
    reader = SaveReader(buffer)
    parts: List[str] = ["=== Save Summary ===\n\n"]

    parts.append(render_trainer(reader.get_trainer_summary()) + "\n")

    parts.append(f"Main Checksum: {_valid_label(checksum.validate_main(buffer))}\n")
    parts.append(f"Bank2 All Checksum: {_valid_label(checksum.validate_bank_all(buffer, 2))}\n")
    parts.append(f"Bank3 All Checksum: {_valid_label(checksum.validate_bank_all(buffer, 3))}\n")

    parts.append("--- Pokédex ---\n")
    parts.append(render_pokedex(reader.get_pokedex_summary(include_names=True)) + "\n")

    hall_of_fame = reader.get_hall_of_fame()
    if hall_of_fame:
        parts.append("--- Hall of Fame ---\n")
        parts.extend(render_hall_of_fame_entry(e) for e in hall_of_fame)
        parts.append("\n")

    parts.append("--- PC Boxes (Stats) ---\n")
    parts.extend(render_box_stats(s) + "\n" for s in reader.get_all_box_stats())
    parts.append("\n")

    parts.append("--- Event Flags (Summary) ---\n")
    parts.append(render_flag_summary(reader.get_event_flag_summary()) + "\n")

    return "".join(parts)


def build_report_dict(buffer: SaveBuffer) -> Dict[str, Any]:
    """Everything dump_full_summary shows, as JSON-serialisable dicts."""
    reader = SaveReader(buffer)
    return {
        'size':          buffer.size(),
        'expected_size': SaveValidator.has_expected_size(buffer),
        'trainer':       reader.get_trainer_summary().to_dict(),
        'checksums':     [s.to_dict() for s in checksum.checksum_report(buffer)],
        'pokedex':       reader.get_pokedex_summary(include_names=True).to_dict(),
        'hall_of_fame':  [e.to_dict() for e in reader.get_hall_of_fame()],
        'boxes':         [s.to_dict() for s in reader.get_all_box_stats()],
        'event_flags':   reader.get_event_flag_summary().to_dict(),
    }
