"""
Character stream with one character of lookahead.

Wraps a string or an open text file and hands out characters one at a time,
tracking the offset, line and column of the cursor for diagnostics. Nothing
is ever pushed back: once a character is consumed it stays consumed.

Author: xwest
"""

from dataclasses import dataclass
from io import StringIO
from typing import TextIO, Union


CHUNK_SIZE = 4096


@dataclass(frozen=True)
class SourceLocation:
    """
    A position in an input stream.

    Used for error reporting; offset counts characters, not bytes.
    """
    filename: str
    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


class CharStream:
    """
    Forward-only cursor over text.

    Reads from the underlying file in chunks; I/O errors raised by the file
    (OSError, UnicodeDecodeError) propagate to the caller unchanged.
    """

    def __init__(self, source: Union[str, TextIO], filename: str = "<string>"):
        """
        Args:
            source: text to read, or a file object opened in text mode
            filename: name of the input for error reporting
        """
        if isinstance(source, str):
            source = StringIO(source)
        self._file = source
        self.filename = filename
        self._buffer = ""
        self._index = 0
        self._exhausted = False

        self.offset = 0
        self.line = 1
        self.column = 1

    def _fill(self) -> bool:
        """Make sure a character is buffered. Returns False at end of input."""
        if self._index < len(self._buffer):
            return True
        if self._exhausted:
            return False

        chunk = self._file.read(CHUNK_SIZE)
        if not chunk:
            self._exhausted = True
            return False

        self._buffer = chunk
        self._index = 0
        return True

    def peek(self) -> str:
        """Next character without consuming it; '' at end of input."""
        if not self._fill():
            return ''
        return self._buffer[self._index]

    def advance(self) -> str:
        """Consume and return the next character; '' at end of input."""
        if not self._fill():
            return ''

        char = self._buffer[self._index]
        self._index += 1
        self.offset += 1
        if char == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def at_end(self) -> bool:
        return not self._fill()

    def skip_whitespace(self) -> int:
        """Consume whitespace (newlines included). Returns the count skipped."""
        skipped = 0
        while True:
            char = self.peek()
            if not char or not char.isspace():
                return skipped
            self.advance()
            skipped += 1

    def skip_line(self) -> int:
        """
        Discard input up to and including the next newline.

        Stops quietly at end of input. Returns the number of characters
        discarded.
        """
        discarded = 0
        while True:
            char = self.advance()
            if not char:
                return discarded
            discarded += 1
            if char == '\n':
                return discarded

    def location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.offset)
