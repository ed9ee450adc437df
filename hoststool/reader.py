"""
Line-stream reading for the hosts toolkit.

This module splits a text or byte source into physical lines and
classifies each one, lazily and in a single pass. It accepts:

- str or bytes holding the whole file
- an open file object in text or binary mode
- any iterable of str or bytes chunks

Lines end in LF, CRLF or a bare CR; a final line without a terminator is
still a line. A CRLF split across two chunks counts as one terminator.

Per-line failures (undecodable bytes, parse errors) are yielded as
ErrorLine values so the caller decides whether to stop. Failures of the
source itself raise LineReadError, since nothing after them can be read.
"""

import logging
import re
from typing import IO, AnyStr, Iterable, Iterator, Union

from hoststool.exceptions import LineParseError, LineReadError
from hoststool.models import ErrorLine, Line
from hoststool.parser import classify_line

# Set up module logger
logger = logging.getLogger(__name__)

ENCODING = "utf-8"
CHUNK_SIZE = 64 * 1024
BOM = "\ufeff"

_TEXT_BREAK = re.compile(r"\r\n|\r|\n")
_BYTES_BREAK = re.compile(rb"\r\n|\r|\n")

Source = Union[str, bytes, IO[str], IO[bytes], Iterable[str], Iterable[bytes]]


def _as_chunk(chunk):
    # bytearray and memoryview chunks are split as bytes
    if isinstance(chunk, (bytearray, memoryview)):
        return bytes(chunk)
    return chunk


def iter_chunks(source: Source, chunk_size: int = CHUNK_SIZE) -> Iterator[AnyStr]:
    """
    Yield the raw chunks of a source.

    Args:
        source: Whole-file str/bytes, a file object, or an iterable of chunks
        chunk_size: Read size used for file objects

    Yields:
        Non-empty str or bytes chunks, in order

    Raises:
        LineReadError: If reading the source fails
    """
    if isinstance(source, (str, bytes, bytearray, memoryview)):
        if source:
            yield _as_chunk(source)
        return

    read = getattr(source, "read", None)
    try:
        if read is not None:
            while True:
                chunk = read(chunk_size)
                if not chunk:
                    break
                yield _as_chunk(chunk)
        else:
            for chunk in source:
                if chunk:
                    yield _as_chunk(chunk)
    except (OSError, UnicodeDecodeError) as e:
        raise LineReadError(f"Error reading hosts data: {e}", cause=e) from e


def split_lines(chunks: Iterable[AnyStr]) -> Iterator[AnyStr]:
    """
    Split a stream of chunks into lines with their terminators removed.

    Args:
        chunks: str or bytes chunks; all chunks must be of the same type

    Yields:
        One str or bytes per line

    Raises:
        LineReadError: If text and binary chunks are mixed

    Examples:
        >>> list(split_lines(["a\\r", "\\nb\\rc\\n", "d"]))
        ['a', 'b', 'c', 'd']
    """
    pending = None
    carriage_return = None
    pattern = None

    for chunk in chunks:
        if pending is None:
            is_bytes = isinstance(chunk, bytes)
            pending = chunk[:0]
            carriage_return = b"\r" if is_bytes else "\r"
            pattern = _BYTES_BREAK if is_bytes else _TEXT_BREAK
        elif type(chunk) is not type(pending):
            raise LineReadError("Cannot mix text and binary chunks in one source")

        buffer = pending + chunk
        start = 0
        for match in pattern.finditer(buffer):
            # A CR ending the buffer may be the first half of a CRLF
            if match.end() == len(buffer) and match.group() == carriage_return:
                break
            yield buffer[start:match.start()]
            start = match.end()
        pending = buffer[start:]

    if pending:
        if pending.endswith(carriage_return):
            pending = pending[:-1]
        yield pending


class LineReader:
    """
    Lazy, forward-only iterator over the classified lines of a source.

    Each call to next() reads only as much of the source as is needed for
    the next line. The reader cannot be rewound; iterate a fresh source to
    start over. Once exhausted it keeps raising StopIteration.

    Attributes:
        lines_read: Number of physical lines produced so far

    Examples:
        >>> reader = LineReader("127.0.0.1 localhost\\n# done\\n")
        >>> [line.kind.value for line in reader]
        ['data', 'comment']
        >>> reader.exhausted
        True
    """

    def __init__(self, source: Source, chunk_size: int = CHUNK_SIZE) -> None:
        self._lines = self._classify(split_lines(iter_chunks(source, chunk_size)))
        self._exhausted = False
        self.lines_read = 0

    @property
    def exhausted(self) -> bool:
        """True once the source has been fully consumed or failed."""
        return self._exhausted

    def __iter__(self) -> "LineReader":
        return self

    def __next__(self) -> Line:
        if self._exhausted:
            raise StopIteration
        try:
            return next(self._lines)
        except StopIteration:
            self._exhausted = True
            logger.debug(f"Finished reading {self.lines_read} lines")
            raise
        except LineReadError:
            self._exhausted = True
            raise

    def _classify(self, raw_lines: Iterable[AnyStr]) -> Iterator[Line]:
        for number, raw in enumerate(raw_lines, start=1):
            self.lines_read = number

            if isinstance(raw, bytes):
                try:
                    text = raw.decode(ENCODING)
                except UnicodeDecodeError as e:
                    error = LineReadError(
                        f"line is not valid {ENCODING} ({e.reason} at byte {e.start})",
                        cause=e,
                        line_number=number,
                    )
                    logger.debug(f"Undecodable line {number}: {error}")
                    yield ErrorLine(raw.decode(ENCODING, errors="replace"), error, number)
                    continue
            else:
                text = raw

            if number == 1 and text.startswith(BOM):
                text = text[len(BOM):]

            try:
                line = classify_line(text, number)
            except LineParseError as e:
                logger.debug(f"Malformed line {number}: {e}")
                line = ErrorLine(text, e, number)
            yield line


def read_lines(source: Source, chunk_size: int = CHUNK_SIZE) -> LineReader:
    """
    Start reading classified lines from a source.

    Args:
        source: Whole-file str/bytes, a file object, or an iterable of chunks
        chunk_size: Read size used for file objects

    Returns:
        A LineReader yielding BlankLine, CommentLine, HostLine or ErrorLine
    """
    return LineReader(source, chunk_size)
