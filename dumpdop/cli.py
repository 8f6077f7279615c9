"""
Command line entry point.

Usage:
    dump-dop [-h] [--nav PATH] PGPS_FILE OUTPUT_FILE

Examples:
    dump-dop LD_060512_1530.pgps track          # VDOP into track.trk
    dump-dop -h LD_060512_1530.pgps track.trk   # HDOP
"""

import argparse
import logging
import math
import sys
from pathlib import Path
from typing import Optional, Sequence

from dumpdop.companion import CompanionResolver, require_companion_path, resolve_companion_path
from dumpdop.correlation import DopCorrelator
from dumpdop.data_models import CorrelationStats
from dumpdop.display_info import print_done, print_progress, print_summary
from dumpdop.exceptions import DumpDopError
from dumpdop.global_config import (
    configure_utc_timezone,
    get_global_config,
    update_match_settings,
)
from dumpdop.gnss_time import GNSSTime
from dumpdop.gps_reader import open_gps_file
from dumpdop.nav_locator import open_nav_file
from dumpdop.track_writer import open_track_file

logger = logging.getLogger(__name__)


def gap_seconds(value: str) -> float:
    """argparse type for --max-gap: a finite number of seconds, 0 or more."""
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number of seconds: {value}")
    if not math.isfinite(seconds) or seconds < 0:
        raise argparse.ArgumentTypeError(f"gap must be a finite value >= 0, got {value}")
    return seconds


def build_parser() -> argparse.ArgumentParser:
    # -h selects HDOP, so automatic help is moved to --help
    parser = argparse.ArgumentParser(
        prog="dump_dop",
        description="Dump HDOP or VDOP from Optech .pgps files onto an SBET/POS track",
        add_help=False,
    )
    parser.add_argument("gps_file", metavar="PGPS_FILENAME", help="Input .pgps file")
    parser.add_argument("output_file", metavar="OUTPUT_FILENAME", help="Output track file (.trk appended if missing)")
    parser.add_argument(
        "-h",
        dest="hdop",
        action="store_true",
        help="Dump HDOP instead of VDOP"
    )
    parser.add_argument(
        "--nav", "-n",
        help="SBET or POS file to use instead of looking for one next to the input"
    )
    parser.add_argument(
        "--match",
        choices=["nearest", "exact"],
        default="nearest",
        help="Navigation record matching policy (default: nearest)"
    )
    parser.add_argument(
        "--max-gap",
        type=gap_seconds,
        default=None,
        metavar="SECONDS",
        help="Reject nearest matches farther than this many seconds"
    )
    parser.add_argument(
        "--tie-break",
        choices=["earlier", "later"],
        default="earlier",
        help="Record chosen when the target is exactly between two fixes (default: earlier)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug details to stderr"
    )
    parser.add_argument("--help", action="help", help="Show this help message and exit")
    return parser


def output_path_for(output_file: str) -> Path:
    ext = get_global_config().output_extension
    if not output_file.endswith(ext):
        output_file += ext
    return Path(output_file)


def dump_dop(
    gps_file: str,
    output_file: str,
    dop_type: str = "VDOP",
    nav_file: Optional[str] = None,
    resolver: CompanionResolver = resolve_companion_path,
    progress=None,
) -> CorrelationStats:
    """
    Run one DOP dump.

    Every precondition is checked before the output file is created.

    Raises:
        DumpDopError: bad filename, no companion file, unknown navigation layout,
            header overflow
        OSError: unreadable input or unwritable output
    """
    config = get_global_config()
    if not gps_file.endswith(config.input_extension):
        raise DumpDopError(f"Input file {gps_file} is not a PGPS file")

    week_start = GNSSTime.week_start_from_filename(gps_file)
    logger.debug(f"GPS week start {week_start} (week {GNSSTime.gps_week_number(week_start)})")

    nav_path = Path(nav_file) if nav_file else require_companion_path(gps_file, resolver)
    out_path = output_path_for(output_file)

    with open_gps_file(gps_file) as gps_reader, \
            open_nav_file(nav_path, week_start) as locator:
        created = False
        try:
            with open_track_file(out_path) as writer:
                created = True
                correlator = DopCorrelator(gps_reader, locator, writer, week_start, dop_type, progress)
                stats = correlator.run()
        except (DumpDopError, OSError):
            # A track left with its placeholder header would read as valid
            if created:
                logger.warning(f"Removing incomplete track file {out_path}")
                out_path.unlink(missing_ok=True)
            raise
    return stats


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_utc_timezone()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        update_match_settings({
            "policy": args.match,
            "max_gap_seconds": args.max_gap,
            "tie_break": args.tie_break,
        })
        sys.stderr.write("\n\n")
        stats = dump_dop(
            args.gps_file,
            args.output_file,
            dop_type="HDOP" if args.hdop else "VDOP",
            nav_file=args.nav,
            progress=print_progress,
        )
    except (DumpDopError, OSError) as e:
        print(e, file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    print_done()
    print_summary(stats)
    return 0


if __name__ == "__main__":
    sys.exit(main())
