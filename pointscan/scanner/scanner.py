"""
Maximum-point scanner.

Drives the point parser over a whole input, keeping the point furthest from
the origin. Malformed records are reported and skipped by discarding the
rest of their line; a clean end of input finishes the scan, and an I/O
fault aborts this scan only.

Author: xwest
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, TextIO, Union

from ..geometry import Point, PointShape
from ..reader import (
    CharStream, SourceLocation, PointParser, ParseResult, FailureKind, ParseFailure
)
from ..reader.errors import create_unclassified_failure
from .diagnostics import (
    ScanDiagnostic, INVALID_ELEMENT, FIRST_ELEMENT, UNRECOVERABLE, UNOPENABLE
)


logger = logging.getLogger(__name__)

# Faults from the underlying file, as opposed to malformed text.
READ_ERRORS = (OSError, UnicodeDecodeError)


class ScanStatus(Enum):
    """How a scan ended."""
    COMPLETED = auto()          # Reached end of input; maximum is set
    NO_FIRST_ELEMENT = auto()   # First record could not be read
    ABORTED = auto()            # Unrecoverable failure part way through


@dataclass
class ScanResult:
    """Outcome of scanning one input."""
    source: str
    shape: PointShape
    status: ScanStatus = ScanStatus.COMPLETED
    maximum: Optional[Point] = None
    diagnostics: List[ScanDiagnostic] = field(default_factory=list)
    points_read: int = 0

    @property
    def ok(self) -> bool:
        return self.status is ScanStatus.COMPLETED

    def has_errors(self) -> bool:
        return len(self.diagnostics) > 0


class Scanner:
    """
    Finds the point with the greatest magnitude in a stream of records.

    Records are nominally one per line; after an invalid record the scanner
    resynchronizes at the start of the next line.
    """

    def __init__(self, shape: PointShape):
        self.shape = shape
        self.parser = PointParser(shape)

    def scan(self, stream: CharStream) -> ScanResult:
        result = ScanResult(source=stream.filename, shape=self.shape)

        first = self._next(stream)
        if not first.ok:
            self._report(result, FIRST_ELEMENT, first.failure)
            result.status = ScanStatus.NO_FIRST_ELEMENT
            return result

        maximum = first.point
        result.points_read = 1

        while True:
            outcome = self._next(stream)

            if outcome.ok:
                result.points_read += 1
                if outcome.point > maximum:
                    maximum = outcome.point
                continue

            if outcome.kind is FailureKind.EMPTY_STREAM:
                break

            if outcome.kind is FailureKind.INVALID_SYMBOL:
                self._report(result, INVALID_ELEMENT, outcome.failure)
                try:
                    discarded = stream.skip_line()
                except READ_ERRORS as e:
                    self._report(result, UNRECOVERABLE,
                                 create_unclassified_failure(e, stream.location()))
                    result.status = ScanStatus.ABORTED
                    return result
                logger.debug("resynchronized %s at line %d after discarding %d characters",
                             stream.filename, stream.line, discarded)
                continue

            self._report(result, UNRECOVERABLE, outcome.failure)
            result.status = ScanStatus.ABORTED
            return result

        result.maximum = maximum
        result.status = ScanStatus.COMPLETED
        logger.info("%s: %d points read, %d invalid, maximum %s",
                    stream.filename, result.points_read, len(result.diagnostics), maximum)
        return result

    def _next(self, stream: CharStream) -> ParseResult:
        try:
            return self.parser.parse(stream)
        except READ_ERRORS as e:
            return ParseResult(failure=create_unclassified_failure(e, stream.location()))

    def _report(self, result: ScanResult, category: str, failure: ParseFailure):
        diagnostic = ScanDiagnostic(category, failure, result.source)
        result.diagnostics.append(diagnostic)
        # stacklevel=2 attributes the record to the line in scan() that reported it
        logger.error("%s", diagnostic, stacklevel=2)


def scan_stream(source: Union[str, TextIO], shape: PointShape,
                filename: str = "<string>") -> ScanResult:
    """
    Convenience function to scan text or an already-open text file.

    The caller keeps ownership of any file object passed in.
    """
    return Scanner(shape).scan(CharStream(source, filename))


def scan_file(path: Union[str, os.PathLike], shape: PointShape) -> ScanResult:
    """
    Scan a file of points.

    The file is opened as UTF-8 text and closed when the scan ends, however
    it ends. A file that cannot be opened gives an ABORTED result with one
    diagnostic rather than an exception.
    """
    filename = os.fspath(path)
    try:
        infile = open(filename, 'r', encoding='utf-8')
    except OSError as e:
        result = ScanResult(source=filename, shape=shape, status=ScanStatus.ABORTED)
        failure = create_unclassified_failure(e, SourceLocation(filename, 1, 1, 0))
        diagnostic = ScanDiagnostic(UNOPENABLE, failure, filename)
        result.diagnostics.append(diagnostic)
        logger.error("%s", diagnostic)
        return result

    with infile:
        return Scanner(shape).scan(CharStream(infile, filename))
