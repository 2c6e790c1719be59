"""
Diagnostics reported while scanning a file of points.

Author: xwest
"""

from dataclasses import dataclass

from ..reader.errors import ParseFailure


# Report categories
INVALID_ELEMENT = "ignoring invalid element"
FIRST_ELEMENT = "unable to read first element"
UNRECOVERABLE = "unable to recover"
UNOPENABLE = "unable to open input"


@dataclass(frozen=True)
class ScanDiagnostic:
    """One reported failure: what went wrong, where, and how it was handled."""
    category: str
    failure: ParseFailure
    source: str

    @property
    def message(self) -> str:
        return self.failure.message

    @property
    def position(self) -> int:
        return self.failure.location.offset

    def __str__(self) -> str:
        location = self.failure.location
        result = f"{self.category} ({self.failure.message})\n"
        result += f"  reading from: {self.source}\n"
        result += (f"  at position: {location.offset} "
                   f"(line {location.line}, column {location.column})")
        return result
