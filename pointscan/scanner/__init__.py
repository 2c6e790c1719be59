"""
pointscan Scanner Package

Scans inputs of point records for the point furthest from the origin,
reporting malformed records without stopping.

Author: xwest
"""

from .scanner import Scanner, ScanResult, ScanStatus, scan_stream, scan_file
from .diagnostics import (
    ScanDiagnostic, INVALID_ELEMENT, FIRST_ELEMENT, UNRECOVERABLE, UNOPENABLE
)

__all__ = [
    "Scanner",
    "ScanResult",
    "ScanStatus",
    "scan_stream",
    "scan_file",
    "ScanDiagnostic",
    "INVALID_ELEMENT",
    "FIRST_ELEMENT",
    "UNRECOVERABLE",
    "UNOPENABLE",
]
