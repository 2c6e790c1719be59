"""
pointscan Package

Reads files of fixed-shape numeric points written as ``( v0 v1 ... )``
records, validates every record, and reports the point furthest from the
origin in each file. Malformed records are reported and skipped.

Architecture:
    pointscan/
    ├── geometry/        # Numeric types and the Point value type
    ├── reader/          # Character stream and point parser
    ├── scanner/         # Error-recovering maximum scan
    └── cli.py           # Command-line driver

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__email__ = "dev@pointscan.org"
__license__ = "MIT"

from .geometry import NumericType, Point, PointShape
from .reader import (
    CharStream, PointParser, ParseResult, FailureKind, ParseFailure,
    PointParseError, parse_point
)
from .scanner import Scanner, ScanResult, ScanStatus, scan_stream, scan_file

__all__ = [
    # Core classes
    "NumericType",
    "Point",
    "PointShape",
    "CharStream",
    "PointParser",
    "ParseResult",
    "FailureKind",
    "ParseFailure",
    "PointParseError",
    "Scanner",
    "ScanResult",
    "ScanStatus",

    # Convenience functions
    "parse_point",
    "scan_stream",
    "scan_file",

    # Version info
    "__version__",
    "__author__",
    "__email__",
    "__license__",
]
