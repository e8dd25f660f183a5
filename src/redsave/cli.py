"""
Command-line entry point.

    redsave "Pokemon - Red Version.sav"
    redsave --json red.sav
    redsave --fix-checksums red.sav

Flow: back up the file, load it, report size and main checksum, then print
the full summary. --fix-checksums writes a repaired "(EDITED)" copy next to
the input and lists the regions it rewrote. The input file is left as it was
and the report describes the input, not the repaired copy.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from . import __version__
from .core import layout
from .core.buffer import SaveBuffer
from .core.errors import SaveError
from .features import checksum
from .features.report import build_report_dict, dump_full_summary
from .features.validator import SaveValidator
from .storage.file_manipulation import backup_file, load_file, make_edited_path, write_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="redsave",
        description="Inspect and validate Pokemon Red/Blue (Gen I) save files.",
    )
    parser.add_argument("save", help="Path to a 32 KiB .sav file.")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON.")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Refuse files that are not exactly 0x8000 bytes.",
    )
    parser.add_argument(
        "--fix-checksums",
        action="store_true",
        help='Repair every checksum and write the result to "(EDITED) <name>".',
    )
    parser.add_argument(
        "--no-backup",
        action="store_true",
        help='Do not create "(BACKUP) <name>" before reading.',
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run(args: argparse.Namespace) -> int:
    backup_path = None if args.no_backup else backup_file(args.save)

    save = SaveBuffer(load_file(args.save))
    if args.strict:
        SaveValidator.require_expected_size(save)

    # The report always describes the input; repairs go to a separate copy.
    edited_path = None
    repaired = None
    if args.fix_checksums:
        edited = save.copy()
        before = checksum.fix_all(edited)
        repaired = [s.region.name for s in before if not s.is_valid]
        edited_path = make_edited_path(args.save)
        write_file(edited_path, edited.to_bytes())

    if not SaveValidator.has_expected_size(save):
        logger.warning(f"{args.save}: size 0x{save.size():x} is not 0x{layout.EXPECTED_SIZE:x}")

    if args.json:
        report = build_report_dict(save)
        report['input'] = str(args.save)
        report['backup'] = str(backup_path) if backup_path else None
        report['edited'] = str(edited_path) if edited_path else None
        report['repaired'] = repaired
        report['main_checksum_valid'] = SaveValidator.has_valid_main_checksum(save)
        print(json.dumps(report, indent=2, ensure_ascii=False))
        return 0

    print(f"Input:  {args.save}")
    print(f"Backup: {backup_path if backup_path else '(skipped)'}")
    print(f"Size:   0x{save.size():x} bytes")
    if not SaveValidator.has_expected_size(save):
        print("[WARN] Save size is not 0x8000 (32KB). This may not be a Gen I save.")
    if edited_path:
        print(f"Edited: {edited_path}")
        print(f"Repaired: {', '.join(repaired) if repaired else 'nothing to fix'}")
    valid = SaveValidator.has_valid_main_checksum(save)
    print(f"Main Checksum: {'VALID' if valid else 'INVALID'}\n")

    print(dump_full_summary(save))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return run(args)
    except (SaveError, OSError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"[FATAL] {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
