"""
pointscan Geometry Package

Numeric component types and the fixed-size Point value type.

Key Features:
- Closed set of component types (int, long, float, double) backed by numpy dtypes
- Immutable points with Euclidean distance and magnitude ordering
- Canonical ``( c0 c1 ... )`` text form

Author: xwest
"""

from .numeric import NumericType
from .point import Point, PointShape, OPEN_MARKER, CLOSE_MARKER

__all__ = [
    "NumericType",
    "Point",
    "PointShape",
    "OPEN_MARKER",
    "CLOSE_MARKER",
]
