#!/usr/bin/env python3
"""
pointscan command-line driver
=============================

Scans files of point records and prints the point furthest from the origin
in each one. Every requested file is attempted; failures are reported on
stderr and never stop later files.

Usage:
    pointscan [options] [PATH ...]

Options:
    -t, --type TYPE         Component type for positional paths (default: int)
    -n, --size N            Components per point for positional paths (default: 1)
    --job TYPE N PATH       Scan PATH with its own type and size (repeatable)
    -v, --verbose           Log debug details
    -q, --quiet             Log errors only
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .geometry import NumericType, PointShape
from .scanner import ScanResult, scan_file


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s [%(module)s:%(lineno)d] %(message)s"


@dataclass(frozen=True)
class ScanJob:
    """One file to scan, with the shape its points have."""
    path: str
    shape: PointShape


def _numeric_type(value: str) -> NumericType:
    try:
        return NumericType.from_name(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _dimension(value: str) -> int:
    try:
        dimension = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid point size: {value!r}")
    if dimension < 1:
        raise argparse.ArgumentTypeError(f"point size must be positive, got {dimension}")
    return dimension


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pointscan",
        description="Find the point furthest from the origin in files of point records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    pointscan -t int -n 2 points.txt             # 2D integer points
    pointscan --job double 3 a.txt --job int 1 b.txt
        """
    )

    parser.add_argument('paths', nargs='*', metavar='PATH',
                        help='Files scanned with the default --type and --size')
    parser.add_argument('-t', '--type', dest='numeric_type', type=_numeric_type,
                        default=NumericType.INT,
                        help='Component type: int, long, float or double (default: int)')
    parser.add_argument('-n', '--size', dest='dimension', type=_dimension, default=1,
                        help='Number of components per point (default: 1)')
    parser.add_argument('--job', nargs=3, action='append', default=[],
                        metavar=('TYPE', 'N', 'PATH'),
                        help='Scan PATH with its own component type and size')

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-v', '--verbose', action='store_true',
                           help='Log debug details')
    verbosity.add_argument('-q', '--quiet', action='store_true',
                           help='Log errors only')
    return parser


def collect_jobs(parser: argparse.ArgumentParser, args: argparse.Namespace) -> List[ScanJob]:
    """Turn parsed arguments into jobs: --job entries first, then positional paths."""
    jobs = []
    for type_name, size, path in args.job:
        try:
            shape = PointShape(_numeric_type(type_name), _dimension(size))
        except argparse.ArgumentTypeError as e:
            parser.error(f"argument --job: {e}")
        jobs.append(ScanJob(path, shape))

    default_shape = PointShape(args.numeric_type, args.dimension)
    jobs.extend(ScanJob(path, default_shape) for path in args.paths)

    if not jobs:
        parser.error("no input files given")
    return jobs


def configure_logging(verbose: bool = False, quiet: bool = False):
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    package_logger = logging.getLogger("pointscan")
    package_logger.handlers[:] = [handler]
    package_logger.setLevel(level)
    package_logger.propagate = False


def format_result(result: ScanResult) -> str:
    return (f"the point furthest from {result.shape.zero()} in "
            f"{result.source} is {result.maximum}")


def run(jobs: Sequence[ScanJob], out=None) -> List[ScanResult]:
    """Scan every job in order, printing each maximum found."""
    out = out if out is not None else sys.stdout
    results = []
    for job in jobs:
        logger.debug("scanning %s as %s", job.path, job.shape)
        result = scan_file(job.path, job.shape)
        if result.ok:
            print(format_result(result), file=out)
            print(file=out)
        results.append(result)
    return results


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the pointscan command"""
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)
    jobs = collect_jobs(parser, args)

    configure_logging(verbose=args.verbose, quiet=args.quiet)
    results = run(jobs)

    failed = sum(1 for result in results if not result.ok)
    logger.info("scanned %d file(s), %d without a result", len(results), failed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
