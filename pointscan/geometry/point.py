"""
Fixed-size numeric points.

A point is an ordered tuple of N values of one numeric type. The (type, N)
pair is carried by a PointShape and never changes for the life of the point.

Author: xwest
"""

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

import numpy as np

from .numeric import NumericType, Number


OPEN_MARKER = '('
CLOSE_MARKER = ')'


@dataclass(frozen=True)
class PointShape:
    """
    Numeric type and dimension shared by every point read from one input.
    """
    numeric_type: NumericType
    dimension: int

    def __post_init__(self):
        if isinstance(self.dimension, bool) or not isinstance(self.dimension, int):
            raise ValueError(f"Point dimension must be an integer, got {self.dimension!r}")
        if self.dimension < 1:
            raise ValueError(f"Point dimension must be positive, got {self.dimension}")

    def __str__(self) -> str:
        return f"{self.numeric_type}[{self.dimension}]"

    @classmethod
    def of(cls, type_name: str, dimension: int) -> "PointShape":
        """Build a shape from a type name such as "int" or "double"."""
        return cls(NumericType.from_name(type_name), dimension)

    def zero(self) -> "Point":
        return Point(self)

    def make(self, values: Iterable[Number]) -> "Point":
        return Point(self, values)


class Point:
    """
    An immutable point in N-dimensional space.

    Points order by their distance from the origin only: ``p > q`` holds when
    p lies strictly further out than q. Points at equal distance are not
    ordered either way, so ``>`` is enough to track a maximum but is not a
    sort key.
    """

    __slots__ = ("_shape", "_components")

    def __init__(self, shape: PointShape, values: Optional[Iterable[Number]] = None):
        """
        Args:
            shape: numeric type and dimension of the point
            values: exactly ``shape.dimension`` component values; all zero
                when omitted
        """
        dtype = shape.numeric_type.dtype
        if values is None:
            components = np.zeros(shape.dimension, dtype=dtype)
        else:
            values = list(values)
            if len(values) != shape.dimension:
                raise ValueError(
                    f"Expected {shape.dimension} components for {shape}, got {len(values)}"
                )
            components = np.array(values, dtype=dtype)
            if shape.numeric_type.is_integral:
                for stored, original in zip(components, values):
                    if stored != original:
                        raise ValueError(
                            f"Component {original!r} is not representable as {shape.numeric_type}"
                        )

        components.flags.writeable = False
        self._shape = shape
        self._components = components

    @property
    def shape(self) -> PointShape:
        return self._shape

    @property
    def components(self) -> np.ndarray:
        """Read-only view of the component array."""
        return self._components

    def __len__(self) -> int:
        return self._shape.dimension

    def __iter__(self) -> Iterator[np.number]:
        return iter(self._components)

    def __getitem__(self, index: int) -> np.number:
        return self._components[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return (self._shape == other._shape and
                bool(np.array_equal(self._components, other._components)))

    def __hash__(self) -> int:
        return hash((self._shape, tuple(self._components.tolist())))

    def distance(self, other: "Point") -> float:
        """Euclidean distance to another point of the same shape."""
        if other._shape != self._shape:
            raise ValueError(f"Shape mismatch: {self._shape} vs {other._shape}")

        # Accumulate in float64 so integral components cannot overflow.
        diff = self._components.astype(np.float64) - other._components.astype(np.float64)
        return math.sqrt(float(np.dot(diff, diff)))

    def magnitude(self) -> float:
        """Distance from the zero point of the same shape."""
        return self.distance(self._shape.zero())

    def is_greater(self, other: "Point") -> bool:
        return self.magnitude() > other.magnitude()

    def __gt__(self, other) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.is_greater(other)

    def to_text(self) -> str:
        """Canonical text form: ``( c0 c1 ... cN-1 )``."""
        parts = [OPEN_MARKER, ' ']
        for component in self._components:
            parts.append(str(component))
            parts.append(' ')
        parts.append(CLOSE_MARKER)
        return ''.join(parts)

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"Point({self._shape!r}, {self._components.tolist()!r})"
