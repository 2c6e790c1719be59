"""
Test suite for the pointscan scanner.

Tests cover:
- Maximum tracking across records
- Recovery from invalid records by line resynchronization
- First-record failures and unrecoverable read errors
- Scanning files from disk

Author: xwest
"""

import io
import unittest
import sys
import os
import tempfile
from unittest import mock

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from pointscan.geometry import PointShape
from pointscan.reader import CharStream, FailureKind
from pointscan.scanner import (
    Scanner, ScanStatus, scan_stream, scan_file,
    INVALID_ELEMENT, FIRST_ELEMENT, UNRECOVERABLE, UNOPENABLE
)


class FlakyFile:
    """Text file stand-in that fails after handing out its text."""

    def __init__(self, text: str, error: Exception):
        self._text = io.StringIO(text)
        self._error = error
        self.closed = False

    def read(self, size=-1):
        chunk = self._text.read(size)
        if not chunk:
            raise self._error
        return chunk

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class TestScanner(unittest.TestCase):
    """Test cases for the maximum-point scan loop."""

    def setUp(self):
        self.int1 = PointShape.of("int", 1)
        self.int2 = PointShape.of("int", 2)

    def _scan(self, text: str, shape: PointShape):
        with self.assertLogs("pointscan", level="DEBUG") as logs:
            result = scan_stream(text, shape, filename="input.txt")
        return result, logs

    def test_maximum_on_one_line(self):
        result, _ = self._scan("( 1 2 ) ( -5 9 ) ( 3 3 )", self.int2)
        self.assertIs(result.status, ScanStatus.COMPLETED)
        self.assertTrue(result.ok)
        self.assertEqual(result.maximum, self.int2.make([-5, 9]))
        self.assertEqual(result.points_read, 3)
        self.assertFalse(result.has_errors())

    def test_single_record(self):
        result, _ = self._scan("( 7 )\n", self.int1)
        self.assertEqual(result.maximum, self.int1.make([7]))

    def test_invalid_record_is_skipped(self):
        result, logs = self._scan("( 1 )\n( x )\n( 4 )", self.int1)
        self.assertIs(result.status, ScanStatus.COMPLETED)
        self.assertEqual(result.maximum, self.int1.make([4]))
        self.assertEqual(result.points_read, 2)

        self.assertEqual(len(result.diagnostics), 1)
        diagnostic = result.diagnostics[0]
        self.assertEqual(diagnostic.category, INVALID_ELEMENT)
        self.assertEqual(diagnostic.message, "unable to read value")
        self.assertIs(diagnostic.failure.kind, FailureKind.INVALID_SYMBOL)
        self.assertEqual(diagnostic.source, "input.txt")
        self.assertEqual(diagnostic.position, 8)

        errors = [record for record in logs.records if record.levelname == "ERROR"]
        self.assertEqual(len(errors), 1)
        self.assertIn("ignoring invalid element (unable to read value)", errors[0].getMessage())
        self.assertIn("reading from: input.txt", errors[0].getMessage())
        self.assertIn("at position: 8", errors[0].getMessage())

    def test_report_names_the_scanning_call_site(self):
        _, logs = self._scan("( 1 )\n( x )\n", self.int1)
        error = [record for record in logs.records if record.levelname == "ERROR"][0]
        self.assertEqual(error.funcName, "scan")

    def test_resync_skips_rest_of_line(self):
        """After an invalid record, parsing resumes at the next line."""
        text = "( 1 )\n( 2 ] ( 50 )\n( 3 )\n"
        result, _ = self._scan(text, self.int1)
        self.assertEqual(result.maximum, self.int1.make([3]))
        self.assertEqual(result.points_read, 2)
        self.assertEqual(len(result.diagnostics), 1)

    def test_resync_after_record_split_across_lines(self):
        """A failure detected on the next line discards that line too."""
        text = "( 1 2 )\n( 3\n( 90 90 )\n( 4 4 )"
        result, _ = self._scan(text, self.int2)
        self.assertEqual(result.maximum, self.int2.make([4, 4]))
        self.assertEqual(len(result.diagnostics), 1)

    def test_several_invalid_records(self):
        text = "( 1 1 )\n[ 2 2 ]\n( a b )\n( 5 5 5 )\n( 2 2 )\n"
        result, _ = self._scan(text, self.int2)
        self.assertIs(result.status, ScanStatus.COMPLETED)
        self.assertEqual(result.maximum, self.int2.make([2, 2]))
        self.assertEqual(len(result.diagnostics), 3)
        self.assertTrue(all(d.category == INVALID_ELEMENT for d in result.diagnostics))

    def test_overlong_component_is_invalid(self):
        """A huge digit run is one invalid record; later records still count."""
        text = "( 1 )\n( " + "7" * 5000 + " )\n( 4 )\n"
        result, logs = self._scan(text, self.int1)
        self.assertIs(result.status, ScanStatus.COMPLETED)
        self.assertEqual(result.maximum, self.int1.make([4]))
        self.assertEqual(result.points_read, 2)
        self.assertEqual([d.category for d in result.diagnostics], [INVALID_ELEMENT])
        self.assertEqual(result.diagnostics[0].message, "unable to read value")
        self.assertEqual(result.diagnostics[0].position, 5008)

    def test_invalid_last_record_without_newline(self):
        result, _ = self._scan("( 1 )\n( 2", self.int1)
        self.assertIs(result.status, ScanStatus.COMPLETED)
        self.assertEqual(result.maximum, self.int1.make([1]))
        self.assertEqual(len(result.diagnostics), 1)

    def test_ties_keep_first_maximum(self):
        result, _ = self._scan("( 3 4 )\n( 4 3 )\n( -5 0 )", self.int2)
        self.assertEqual(result.maximum, self.int2.make([3, 4]))

    def test_empty_input(self):
        """Empty input has no first element and no result."""
        result, logs = self._scan("", self.int1)
        self.assertIs(result.status, ScanStatus.NO_FIRST_ELEMENT)
        self.assertIsNone(result.maximum)
        self.assertEqual(len(result.diagnostics), 1)
        self.assertEqual(result.diagnostics[0].category, FIRST_ELEMENT)
        self.assertIs(result.diagnostics[0].failure.kind, FailureKind.EMPTY_STREAM)
        self.assertIn("unable to read first element (empty stream)", logs.output[0])

    def test_invalid_first_element_ends_scan(self):
        result, _ = self._scan("( x )\n( 4 )", self.int1)
        self.assertIs(result.status, ScanStatus.NO_FIRST_ELEMENT)
        self.assertIsNone(result.maximum)
        self.assertEqual(result.points_read, 0)

    def test_unterminated_first_element(self):
        result, _ = self._scan("( ", self.int1)
        self.assertIs(result.status, ScanStatus.NO_FIRST_ELEMENT)
        failure = result.diagnostics[0].failure
        self.assertIs(failure.kind, FailureKind.INVALID_SYMBOL)
        self.assertEqual(failure.message, "unable to read value")

    def test_read_error_aborts_scan(self):
        """An I/O fault mid-scan is unclassified and ends this scan."""
        source = FlakyFile("( 1 )\n( 2 )\n", OSError("disk went away"))
        with self.assertLogs("pointscan", level="ERROR"):
            result = Scanner(self.int1).scan(CharStream(source, filename="flaky.txt"))
        self.assertIs(result.status, ScanStatus.ABORTED)
        self.assertIsNone(result.maximum)
        self.assertEqual(result.points_read, 2)
        diagnostic = result.diagnostics[-1]
        self.assertEqual(diagnostic.category, UNRECOVERABLE)
        self.assertIs(diagnostic.failure.kind, FailureKind.UNCLASSIFIED)
        self.assertIn("disk went away", diagnostic.message)

    def test_decode_error_aborts_scan(self):
        error = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        source = FlakyFile("( 1 )\n", error)
        with self.assertLogs("pointscan", level="ERROR"):
            result = Scanner(self.int1).scan(CharStream(source, filename="binary.txt"))
        self.assertIs(result.status, ScanStatus.ABORTED)
        self.assertIs(result.diagnostics[-1].failure.kind, FailureKind.UNCLASSIFIED)

    def test_read_error_during_resync(self):
        source = FlakyFile("( 1 )\n( x", OSError("gone"))
        with self.assertLogs("pointscan", level="ERROR"):
            result = Scanner(self.int1).scan(CharStream(source, filename="flaky.txt"))
        self.assertIs(result.status, ScanStatus.ABORTED)
        self.assertEqual([d.category for d in result.diagnostics],
                         [INVALID_ELEMENT, UNRECOVERABLE])

    def test_double_points(self):
        shape = PointShape.of("double", 3)
        text = "( 0.5 0.5 0.5 )\n( -1.5e0 2.25 0 )\n( 1 1 1 )\n"
        result, _ = self._scan(text, shape)
        self.assertEqual(result.maximum, shape.make([-1.5, 2.25, 0.0]))
        self.assertEqual(str(result.maximum), "( -1.5 2.25 0.0 )")


class TestScanFile(unittest.TestCase):
    """Test cases for scanning files on disk."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.shape = PointShape.of("int", 2)

    def tearDown(self):
        self.tmpdir.cleanup()

    def _write(self, name: str, text: str) -> str:
        path = os.path.join(self.tmpdir.name, name)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
        return path

    def test_scan_file(self):
        path = self._write("points.txt", "( 1 2 )\n( -5 9 )\n( bad )\n( 3 3 )\n")
        with self.assertLogs("pointscan", level="ERROR"):
            result = scan_file(path, self.shape)
        self.assertIs(result.status, ScanStatus.COMPLETED)
        self.assertEqual(result.source, path)
        self.assertEqual(result.maximum, self.shape.make([-5, 9]))
        self.assertEqual(len(result.diagnostics), 1)

    def test_missing_file(self):
        """A file that cannot be opened is reported, not raised."""
        path = os.path.join(self.tmpdir.name, "missing.txt")
        with self.assertLogs("pointscan", level="ERROR") as logs:
            result = scan_file(path, self.shape)
        self.assertIs(result.status, ScanStatus.ABORTED)
        self.assertEqual(result.diagnostics[0].category, UNOPENABLE)
        self.assertIs(result.diagnostics[0].failure.kind, FailureKind.UNCLASSIFIED)
        self.assertIn("unable to open input", logs.output[0])

    def _scan_tracking_files(self, path: str, opener=open):
        """Scan ``path`` and return the result with every file it opened."""
        opened = []

        def tracking_open(*args, **kwargs):
            infile = opener(*args, **kwargs)
            opened.append(infile)
            return infile

        with mock.patch("pointscan.scanner.scanner.open", tracking_open, create=True):
            with self.assertLogs("pointscan", level="DEBUG"):
                result = scan_file(path, self.shape)
        self.assertEqual(len(opened), 1)
        return result, opened[0]

    def test_file_closed_after_completed_scan(self):
        path = self._write("points.txt", "( 1 2 )\n( 3 4 )\n")
        result, infile = self._scan_tracking_files(path)
        self.assertIs(result.status, ScanStatus.COMPLETED)
        self.assertTrue(infile.closed)

    def test_file_closed_without_first_element(self):
        path = self._write("empty.txt", "")
        result, infile = self._scan_tracking_files(path)
        self.assertIs(result.status, ScanStatus.NO_FIRST_ELEMENT)
        self.assertTrue(infile.closed)

    def test_file_closed_after_aborted_scan(self):
        """A read fault mid-file still releases the file."""
        path = self._write("flaky.txt", "")
        result, infile = self._scan_tracking_files(
            path, opener=lambda *args, **kwargs: FlakyFile("( 1 2 )\n", OSError("gone")))
        self.assertIs(result.status, ScanStatus.ABORTED)
        self.assertEqual(result.diagnostics[-1].category, UNRECOVERABLE)
        self.assertTrue(infile.closed)


if __name__ == '__main__':
    unittest.main()
