"""
Point parser.

Reads one point from a character stream:

    point     := '(' component{N} ')'
    component := numeric literal of the shape's type

Whitespace only separates tokens. The parser consumes exactly what it
validates and never rewinds; on failure the caller is left positioned just
past the offending input and is responsible for recovery.

Author: xwest
"""

import logging
from dataclasses import dataclass
from typing import Optional, TextIO, Union

import numpy as np

from ..geometry import Point, PointShape, OPEN_MARKER, CLOSE_MARKER
from .stream import CharStream
from .errors import (
    FailureKind, ParseFailure, PointParseError, create_empty_stream_failure,
    create_invalid_delimiter_failure, create_unreadable_value_failure,
    create_unexpected_end_failure
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseResult:
    """Either a parsed point or the reason there is none."""
    point: Optional[Point] = None
    failure: Optional[ParseFailure] = None

    def __post_init__(self):
        if (self.point is None) == (self.failure is None):
            raise ValueError("ParseResult needs exactly one of point or failure")

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def kind(self) -> Optional[FailureKind]:
        return self.failure.kind if self.failure is not None else None

    def unwrap(self) -> Point:
        """Return the point, or raise PointParseError carrying the failure."""
        if self.failure is not None:
            raise PointParseError(self.failure)
        return self.point


class PointParser:
    """
    Parser for points of a single fixed shape.

    One parser can be reused for any number of parse() calls and streams.
    """

    def __init__(self, shape: PointShape):
        self.shape = shape
        self.numeric_type = shape.numeric_type

    def parse(self, stream: CharStream) -> ParseResult:
        """
        Parse the next point from the stream.

        Returns a ParseResult holding the point, or an EMPTY_STREAM failure
        if the stream held nothing but whitespace, or an INVALID_SYMBOL
        failure for anything malformed. I/O errors from the stream are not
        caught here.
        """
        failure = self._expect_delimiter(stream, OPEN_MARKER, opening=True)
        if failure is not None:
            return ParseResult(failure=failure)

        values = []
        for index in range(self.shape.dimension):
            value = self.read_value(stream)
            if value is None:
                logger.debug("component %d of %s unreadable at %s",
                             index, self.shape, stream.location())
                return ParseResult(failure=create_unreadable_value_failure(stream.location()))
            values.append(value)

        failure = self._expect_delimiter(stream, CLOSE_MARKER, opening=False)
        if failure is not None:
            return ParseResult(failure=failure)

        return ParseResult(point=Point(self.shape, values))

    def _expect_delimiter(self, stream: CharStream, marker: str,
                          opening: bool) -> Optional[ParseFailure]:
        stream.skip_whitespace()
        char = stream.advance()

        if not char:
            # Nothing read yet means a clean end; inside a point it is truncation.
            # A missing ')' is therefore InvalidSymbol (R005), not EmptyStream,
            # even though the input simply ran out.
            if opening:
                return create_empty_stream_failure(stream.location())
            return create_unexpected_end_failure(marker, stream.location())

        if char != marker:
            return create_invalid_delimiter_failure(marker, char, stream.location())

        return None

    def read_value(self, stream: CharStream) -> Optional[np.number]:
        """
        Read one numeric literal of the parser's type.

        Consumes the longest run of characters that could still form a
        literal, then converts it. Returns None if that run is not a
        complete, in-range literal (the run stays consumed).
        """
        stream.skip_whitespace()

        lexeme = ""
        while True:
            char = stream.peek()
            if not char or not self.numeric_type.is_viable_prefix(lexeme + char):
                break
            lexeme += stream.advance()

        if not lexeme:
            return None
        return self.numeric_type.convert_literal(lexeme)


def parse_point(source: Union[str, TextIO], shape: PointShape,
                filename: str = "<string>") -> Point:
    """
    Convenience function to parse a single point.

    Args:
        source: text (or text file) starting with the point
        shape: numeric type and dimension of the point
        filename: name used in failure locations

    Returns:
        The parsed point

    Raises:
        PointParseError: If no valid point could be read
    """
    return PointParser(shape).parse(CharStream(source, filename)).unwrap()
