"""
Command-line interface for camera assessment.

Usage:
    camera-assessment max-distance --zoom ZOOM --gap GAP [--height H] [--marker-gap G]
    camera-assessment analyze --zoom RANGE --gap GAP [--format {table,csv}] [--output PATH]
"""

import argparse
import logging
import sys
from typing import List, Optional

from .analysis import analyze
from .batch import process_batch, get_failed_results
from .config import Config
from .errors import ImpossibleConstraintError, SearchDivergedError, ValidationError
from .report import rows_from_results, format_markdown, format_csv, save_csv, save_markdown
from .zoom_range import parse_zoom_range


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def build_parser() -> argparse.ArgumentParser:
    """Argument parser with the max-distance and analyze commands."""
    parser = argparse.ArgumentParser(
        prog='camera-assessment',
        description='Compute how far a fixed-height camera can resolve evenly spaced ground markings',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
    # Maximum distance at zoom 5 with 10 px between the farthest markings
    camera-assessment max-distance -z 5 -g 10

    # Table for zoom levels 1 to 5 and 10
    camera-assessment analyze -z 1-5,10 -g 10

    # CSV file with a custom rig configuration
    camera-assessment --config rig.yaml analyze -z 1-25 -g 20 --format csv -o table.csv
'''
    )

    parser.add_argument(
        '--config', '-c',
        type=str,
        default=None,
        help='Path to YAML configuration file (default: reference rig)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose output'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    single = subparsers.add_parser(
        'max-distance',
        help='Maximum distance for a single zoom level'
    )
    single.add_argument('--zoom', '-z', type=float, required=True, help='Zoom level (>= 1)')

    batch = subparsers.add_parser(
        'analyze',
        help='Distance, tilt and line count table over a zoom range'
    )
    batch.add_argument('--zoom', '-z', type=str, required=True, help='Zoom range, e.g. "1-5,7"')
    batch.add_argument(
        '--format', '-f',
        choices=['table', 'csv'],
        default=None,
        help='Output format (default: table on stdout, csv with --output)'
    )
    batch.add_argument('--output', '-o', type=str, default=None, help='Write the table to this path instead of stdout')
    batch.add_argument('--workers', '-w', type=int, default=1, help='Worker processes (default: 1)')
    batch.add_argument('--progress', action='store_true', help='Show a progress bar')

    for sub in (single, batch):
        sub.add_argument(
            '--gap', '-g',
            type=float,
            required=True,
            help='Minimum vertical pixel separation between consecutive markings'
        )
        sub.add_argument('--height', type=float, default=None, help='Camera height in meters')
        sub.add_argument('--marker-gap', type=float, default=None, help='Marking spacing in meters')

    return parser


def _run_max_distance(args: argparse.Namespace, config: Config) -> int:
    analysis = analyze(
        args.zoom,
        args.gap,
        camera_height=args.height,
        marker_gap=args.marker_gap,
        camera=config.camera,
        settings=config.solver,
    )
    print(f"Maximum distance: {analysis.distance_meters:g} meters")
    return 0


def _run_analyze(args: argparse.Namespace, config: Config) -> int:
    logger = logging.getLogger(__name__)

    zoom_levels = parse_zoom_range(args.zoom)
    results = process_batch(
        zoom_levels,
        args.gap,
        camera_height=args.height,
        marker_gap=args.marker_gap,
        config=config,
        workers=args.workers,
        progress=args.progress,
    )
    rows = rows_from_results(results)

    if args.output:
        if args.format == 'table':
            save_markdown(rows, args.output)
        else:
            save_csv(rows, args.output)
    elif args.format == 'csv':
        print(format_csv(rows), end='')
    else:
        print(format_markdown(rows))

    failed = get_failed_results(results)
    if failed:
        logger.error(f"{len(failed)} of {len(results)} zoom levels failed")
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Setup logging
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = Config.from_yaml(args.config) if args.config else Config()

        if args.command == 'max-distance':
            return _run_max_distance(args, config)
        return _run_analyze(args, config)

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except ImpossibleConstraintError as e:
        logger.error(str(e))
        return 1
    except ValidationError as e:
        logger.error(f"Invalid input: {e}")
        return 1
    except SearchDivergedError as e:
        logger.error(f"Computation error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
