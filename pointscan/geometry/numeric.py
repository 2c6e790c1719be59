"""
Numeric component types for points.

Each type pairs a numpy dtype with the literal grammar used to read it from
text. Integer types accept plain decimal literals; real types accept the
usual decimal/exponent forms. Neither accepts inf or nan.

Author: xwest
"""

import re
from enum import Enum
from typing import Optional, Union

import numpy as np


Number = Union[int, float, np.number]


# Viable prefixes: everything a one-character-lookahead reader may consume
# while a literal could still be completed.
INTEGER_PREFIX = re.compile(r'[+-]?\d*')
INTEGER_LITERAL = re.compile(r'[+-]?\d+')

REAL_PREFIX = re.compile(
    r'[+-]?(?:\d+\.?\d*(?:[eE][+-]?\d*)?|\.(?:\d+(?:[eE][+-]?\d*)?)?)?'
)
REAL_LITERAL = re.compile(r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')

# Significant digits of the widest integer dtype (int64).
MAX_INTEGER_DIGITS = 19


class NumericType(Enum):
    """Component types a point can be declared with."""

    INT = ("int", np.int32)
    LONG = ("long", np.int64)
    FLOAT = ("float", np.float32)
    DOUBLE = ("double", np.float64)

    def __init__(self, type_name: str, dtype):
        self.type_name = type_name
        self.dtype = np.dtype(dtype)

    def __str__(self) -> str:
        return self.type_name

    @classmethod
    def from_name(cls, name: str) -> "NumericType":
        """Look up a numeric type by its C-style name ("int", "double", ...)."""
        wanted = name.strip().lower()
        for member in cls:
            if member.type_name == wanted:
                return member
        known = ", ".join(member.type_name for member in cls)
        raise ValueError(f"Unknown numeric type '{name}' (expected one of: {known})")

    @property
    def is_integral(self) -> bool:
        return self.dtype.kind == 'i'

    @property
    def prefix_pattern(self):
        return INTEGER_PREFIX if self.is_integral else REAL_PREFIX

    @property
    def literal_pattern(self):
        return INTEGER_LITERAL if self.is_integral else REAL_LITERAL

    def is_viable_prefix(self, text: str) -> bool:
        """True if more characters could still turn ``text`` into a literal."""
        return self.prefix_pattern.fullmatch(text) is not None

    def convert_literal(self, lexeme: str) -> Optional[np.number]:
        """
        Convert a lexeme to a scalar of this type.

        Returns None when the lexeme is not a complete literal or its value
        does not fit the type's range.
        """
        if self.literal_pattern.fullmatch(lexeme) is None:
            return None

        if self.is_integral:
            sign = '-' if lexeme[0] == '-' else ''
            digits = lexeme.lstrip('+-').lstrip('0') or '0'
            # Longer runs cannot fit any integer dtype; int() also refuses very long strings.
            if len(digits) > MAX_INTEGER_DIGITS:
                return None
            value = int(sign + digits)
            limits = np.iinfo(self.dtype)
            if value < limits.min or value > limits.max:
                return None
            return self.dtype.type(value)

        value = float(lexeme)
        if not np.isfinite(value) or abs(value) > float(np.finfo(self.dtype).max):
            return None
        return self.dtype.type(value)
