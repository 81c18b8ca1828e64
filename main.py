#!/usr/bin/env python3
"""
stopalign - Unified CLI
=======================
Align trip stop sequences and build timetables from GTFS data.

Usage:
    python main.py align SEQ [SEQ ...]
    python main.py directions --route R --service S
    python main.py timetable --route R --service S [--direction D] [--csv]
    python main.py info

Examples:
    python main.py align S1,S2,S3 S1,S3
    python main.py --data-dir feed/ timetable --route 10 --service WK --direction 0 --csv
"""

import argparse
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def print_header(title: str) -> None:
    """Print a styled header."""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)


def build_budget(args):
    """Alignment budget from CLI flags (0 disables a limit)."""
    from stopalign.scs import AlignmentBudget
    from stopalign.config import MAX_SCS_STATES, SCS_TIMEOUT_SECONDS

    max_states = MAX_SCS_STATES if args.max_states is None else args.max_states
    timeout = SCS_TIMEOUT_SECONDS if args.timeout is None else args.timeout
    return AlignmentBudget(
        max_states=max_states or None,
        timeout_seconds=timeout or None,
    )


def cmd_align(args) -> int:
    """Align comma-separated sequences given on the command line."""
    from stopalign.scs import align_sequences, visualize_alignment

    sequences = [[item.strip() for item in raw.split(',') if item.strip()] for raw in args.sequences]

    print_header("Shortest Common Supersequence")
    result = align_sequences(sequences, budget=build_budget(args))

    print(f"\n🧭 Supersequence ({len(result.supersequence)}): {', '.join(result.supersequence)}")
    print("\n🔗 Position mappings:")
    for index, mapping in result.alignments.items():
        pairs = ', '.join(f"{local}->{pos}" for local, pos in mapping.items())
        print(f"   S{index + 1}: {pairs or '(empty)'}")

    print()
    print(visualize_alignment(result.sequences, result.supersequence))
    return 0


def cmd_directions(args) -> int:
    """List directions for a route and service."""
    from stopalign.data.gtfs_loader import GTFSLoader
    from stopalign.timetable import TimetableDataProcessor

    print_header(f"Directions for route {args.route}, service {args.service}")
    processor = TimetableDataProcessor(GTFSLoader(args.data_dir))
    directions = processor.get_available_directions(args.route, args.service)

    if not directions:
        print("\n  No trips found.")
        return 1
    for info in directions:
        print(f"   {info.id}  {info.name:<12} {info.trip_count:>4} trips")
    return 0


def cmd_timetable(args) -> int:
    """Generate timetable HTML (and CSV) for a route and service."""
    from stopalign.data.gtfs_loader import GTFSLoader
    from stopalign.generators import TimetableGenerator
    from stopalign.timetable import TimetableDataProcessor

    print_header("Timetable Generator")

    print("\n📦 Loading GTFS data...")
    loader = GTFSLoader(args.data_dir)
    processor = TimetableDataProcessor(
        loader,
        budget=build_budget(args),
        allow_partial=not args.strict,
    )

    if args.direction is not None:
        direction_ids = [args.direction]
    else:
        direction_ids = [d.id for d in processor.get_available_directions(args.route, args.service)]
        if not direction_ids:
            print(f"\n  ⚠️  No trips for route {args.route}, service {args.service}")
            return 1

    for direction_id in direction_ids:
        generator = TimetableGenerator(
            loader,
            route_id=args.route,
            service_id=args.service,
            direction_id=direction_id,
            processor=processor,
            output_dir=args.output_dir,
            arrival_departure=args.arrival_departure,
        )
        print(f"\n🔧 Generating direction {direction_id}...")
        output_path = generator.save()
        print(f"   ✅ Saved: {output_path.name}")
        if args.csv:
            csv_path = generator.save_csv()
            print(f"   ✅ Saved: {csv_path.name}")
        for warning in generator.data.warnings:
            print(f"   ⚠️  {warning}")

    print_header("COMPLETE!")
    return 0


def cmd_info(args) -> int:
    """Show dataset information."""
    from stopalign.data.gtfs_loader import GTFSLoader

    print_header("GTFS Dataset Info")

    loader = GTFSLoader(args.data_dir)
    print(f"\n📁 Data directory: {loader.data_dir}")

    print("\n📊 Table sizes:")
    print(f"   Stops:      {len(loader.stops):,} rows")
    print(f"   Routes:     {len(loader.routes):,} rows")
    print(f"   Trips:      {len(loader.trips):,} rows")
    print(f"   Stop Times: {len(loader.stop_times):,} rows")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='stopalign - align trip stop sequences and build timetables',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--data-dir', type=Path, default=None, help='GTFS directory (default: data/)')
    parser.add_argument('--output-dir', type=Path, default=None, help='Output directory (default: outputs/)')
    parser.add_argument('--max-states', type=int, default=None, help='SCS state budget (0 = unlimited)')
    parser.add_argument('--timeout', type=float, default=None, help='SCS time budget in seconds (0 = unlimited)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    align_parser = subparsers.add_parser('align', help='Align comma-separated sequences')
    align_parser.add_argument('sequences', nargs='+', help='Sequence such as S1,S2,S3')
    align_parser.set_defaults(func=cmd_align)

    dir_parser = subparsers.add_parser('directions', help='List directions of a route')
    dir_parser.add_argument('--route', required=True, help='route_id')
    dir_parser.add_argument('--service', required=True, help='service_id')
    dir_parser.set_defaults(func=cmd_directions)

    tt_parser = subparsers.add_parser('timetable', help='Generate timetable pages')
    tt_parser.add_argument('--route', required=True, help='route_id')
    tt_parser.add_argument('--service', required=True, help='service_id')
    tt_parser.add_argument('--direction', default=None, help='direction_id (default: all)')
    tt_parser.add_argument('--csv', action='store_true', help='Also write the grid as CSV')
    tt_parser.add_argument('--arrival-departure', action='store_true',
                           help='Separate arrival and departure columns')
    tt_parser.add_argument('--strict', action='store_true',
                           help='Fail instead of showing a partial timetable when alignment is too complex')
    tt_parser.set_defaults(func=cmd_timetable)

    info_parser = subparsers.add_parser('info', help='Show dataset information')
    info_parser.set_defaults(func=cmd_info)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(message)s'
    )

    if args.command is None:
        parser.print_help()
        return 0

    from stopalign.scs import StopAlignError

    try:
        return args.func(args)
    except (StopAlignError, FileNotFoundError) as e:
        logger.error(f"❌ {e}")
        return 2


if __name__ == '__main__':
    sys.exit(main())
