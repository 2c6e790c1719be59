"""
pointscan Reader Package

Implements the character stream and the point parser that reads
``( v0 v1 ... )`` records from text.

Key Features:
- One-character lookahead stream over strings or text files
- Literal lexing per numeric type, with range checks
- Classified failures (empty stream vs. invalid symbol) instead of exceptions
- Source location tracking for diagnostics

Author: xwest
"""

from .stream import CharStream, SourceLocation
from .parser import PointParser, ParseResult, parse_point
from .errors import FailureKind, ParseFailure, PointParseError, READER_ERROR_CODES

__all__ = [
    "CharStream",
    "SourceLocation",
    "PointParser",
    "ParseResult",
    "parse_point",
    "FailureKind",
    "ParseFailure",
    "PointParseError",
    "READER_ERROR_CODES",
]
