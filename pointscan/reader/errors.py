"""
Failure classification for the point reader.

Parsing never raises for bad input. It returns a ParseFailure tagged with
one of a closed set of kinds, and the caller decides how to recover.

Author: xwest
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .stream import SourceLocation


class FailureKind(Enum):
    """Why a point could not be read."""
    EMPTY_STREAM = auto()       # No data left before the point started
    INVALID_SYMBOL = auto()     # Data present but not a valid point
    UNCLASSIFIED = auto()       # Anything else (I/O faults); not produced by the parser

    @property
    def label(self) -> str:
        return self.name.lower().replace('_', ' ')


@dataclass(frozen=True)
class ParseFailure:
    """A classified parse failure with a human-readable reason."""
    kind: FailureKind
    message: str
    location: SourceLocation
    code: Optional[str] = None

    @property
    def recoverable(self) -> bool:
        return self.kind is FailureKind.INVALID_SYMBOL

    def __str__(self) -> str:
        return self.message


class PointParseError(Exception):
    """
    Raised by ParseResult.unwrap() when the result holds a failure.

    Carries the original ParseFailure for inspection.
    """

    def __init__(self, failure: ParseFailure):
        super().__init__(failure.message)
        self.failure = failure

    @property
    def kind(self) -> FailureKind:
        return self.failure.kind

    def __str__(self) -> str:
        prefix = f"[{self.failure.code}] " if self.failure.code else ""
        return f"{prefix}{self.failure.message} at {self.failure.location}"


# Error codes for categorization
READER_ERROR_CODES = {
    "R001": "Empty stream",
    "R002": "Expected open parenthesis",
    "R003": "Unable to read value",
    "R004": "Expected close parenthesis",
    "R005": "Unexpected end of input",
    "R006": "Unrecoverable read error",
}


# Helper functions for creating common failures

def create_empty_stream_failure(location: SourceLocation) -> ParseFailure:
    return ParseFailure(FailureKind.EMPTY_STREAM, "empty stream", location, code="R001")


def create_invalid_delimiter_failure(expected: str, found: str,
                                     location: SourceLocation) -> ParseFailure:
    """Create a failure for a delimiter that is present but wrong."""
    name = "open parenthesis" if expected == '(' else "close parenthesis"
    code = "R002" if expected == '(' else "R004"
    return ParseFailure(
        FailureKind.INVALID_SYMBOL,
        f"expected {name} '{expected}', found {found!r}",
        location,
        code=code,
    )


def create_unreadable_value_failure(location: SourceLocation) -> ParseFailure:
    return ParseFailure(FailureKind.INVALID_SYMBOL, "unable to read value", location, code="R003")


def create_unexpected_end_failure(expected: str, location: SourceLocation) -> ParseFailure:
    """Create a failure for input that ends inside a point."""
    return ParseFailure(
        FailureKind.INVALID_SYMBOL,
        f"unexpected end of input, expected '{expected}'",
        location,
        code="R005",
    )


def create_unclassified_failure(error: BaseException, location: SourceLocation) -> ParseFailure:
    """Wrap an I/O fault raised while reading."""
    return ParseFailure(
        FailureKind.UNCLASSIFIED,
        f"{type(error).__name__}: {error}",
        location,
        code="R006",
    )
