"""
Hosts file model for the hosts toolkit.

This module provides HostFile, the parsed, immutable form of a whole hosts
file. A HostFile keeps every line in file order and answers the common
questions asked of a hosts file:

- which hostnames does an address map to?
- which addresses does a hostname map to?
- what does the file look like without comments and duplicate entries?

Hostname lookups are case-insensitive, since hostnames are resolved
without regard to case. The hostnames themselves keep their original
spelling.
"""

import logging
import os
from collections import OrderedDict
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Union, overload

from hoststool.exceptions import LineReadError
from hoststool.models import (
    Address,
    BlankLine,
    CommentLine,
    DataLine,
    ErrorLine,
    Hostname,
    HostLine,
    Line,
    Pair,
    host_lines,
    line_to_dict,
    parse_address,
)
from hoststool.reader import Source, read_lines

# Set up module logger
logger = logging.getLogger(__name__)

DEFAULT_HOSTS_PATH = "/etc/hosts"


class HostFile:
    """
    An ordered, immutable sequence of hosts file lines.

    Build one with HostFile.parse() from text or bytes, HostFile.load() from
    a path, or HostFile.from_lines() from existing line values. To edit a
    file, build a new HostFile from a modified list of lines.

    Examples:
        >>> hosts = HostFile.parse("127.0.0.1 localhost lh\\n# end\\n")
        >>> len(hosts)
        2
        >>> [str(h) for h in hosts.hostnames_for("127.0.0.1")]
        ['localhost', 'lh']
    """

    def __init__(self, lines: Iterable[Line] = ()) -> None:
        self._lines = tuple(lines)
        for line in self._lines:
            if not isinstance(line, (BlankLine, CommentLine, HostLine, ErrorLine)):
                raise TypeError(f"Not a hosts file line: {line!r}")

    @classmethod
    def parse(cls, source: Source, strict: bool = True) -> "HostFile":
        """
        Parse a complete hosts file.

        In strict mode the first malformed or undecodable line aborts the
        parse. In tolerant mode such lines are kept as ErrorLine values in
        their original position and the rest of the file is still usable.

        Args:
            source: Whole-file str/bytes, a file object, or an iterable of chunks
            strict: Raise on the first bad line instead of keeping an ErrorLine

        Returns:
            A new HostFile

        Raises:
            LineParseError: In strict mode, for the first malformed line
            LineReadError: For undecodable lines in strict mode, and for
                source read failures in either mode
        """
        lines: List[Line] = []
        for line in read_lines(source):
            if isinstance(line, ErrorLine):
                if strict:
                    raise line.error
                logger.warning(f"Keeping malformed hosts line {line.line_number} as an error entry: {line.error}")
            lines.append(line)

        host_file = cls(lines)
        logger.debug(
            f"Parsed {len(host_file)} lines "
            f"({sum(1 for _ in host_file.data_lines())} entries, {len(host_file.errors())} errors)"
        )
        return host_file

    @classmethod
    def load(cls, path: Optional[Union[str, "os.PathLike[str]"]] = None, strict: bool = True) -> "HostFile":
        """
        Read and parse a hosts file from disk.

        Args:
            path: File to read; defaults to /etc/hosts
            strict: See parse()

        Returns:
            A new HostFile

        Raises:
            FileNotFoundError: If the file doesn't exist
            PermissionError: If the file can't be opened
            LineParseError, LineReadError: See parse()
        """
        path = path or DEFAULT_HOSTS_PATH
        logger.debug(f"Loading hosts file {path}")
        with open(path, "rb") as f:
            return cls.parse(f, strict=strict)

    @classmethod
    def from_lines(cls, lines: Iterable[Line]) -> "HostFile":
        return cls(lines)

    @classmethod
    def from_data(cls, entries: Iterable[DataLine]) -> "HostFile":
        """Build a comment-free HostFile from data records."""
        return cls(HostLine(entry) for entry in entries)

    @property
    def lines(self) -> Sequence[Line]:
        return self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self._lines)

    @overload
    def __getitem__(self, index: int) -> Line: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Line]: ...

    def __getitem__(self, index):
        return self._lines[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HostFile):
            return NotImplemented
        return self._lines == other._lines

    def __hash__(self) -> int:
        return hash(self._lines)

    def __repr__(self) -> str:
        return f"HostFile({len(self._lines)} lines)"

    def data_lines(self) -> Iterator[DataLine]:
        """Iterate over the data records, in file order."""
        for line in host_lines(self._lines):
            yield line.data

    def errors(self) -> List[ErrorLine]:
        """Return the error placeholders kept by a tolerant parse."""
        return [line for line in self._lines if isinstance(line, ErrorLine)]

    @property
    def has_errors(self) -> bool:
        return any(isinstance(line, ErrorLine) for line in self._lines)

    def hostnames_for(self, address: Union[Address, str]) -> List[Hostname]:
        """
        Find every hostname mapped to an address.

        Args:
            address: An IP address object or its text form

        Returns:
            Hostnames from all lines with that address, in file order

        Raises:
            ValueError: If address is a string that isn't an IP address
        """
        if isinstance(address, str):
            address = parse_address(address)
        return [
            host
            for data in self.data_lines()
            if data.address == address
            for host in data.hostnames
        ]

    def addresses_for(self, hostname: Union[Hostname, str]) -> List[Address]:
        """
        Find every address a hostname is mapped to.

        Matching ignores case, so "LocalHost" finds "localhost".

        Args:
            hostname: A Hostname or plain string

        Returns:
            Addresses in file order, one per matching line
        """
        return [data.address for data in self.data_lines() if data.has_hostname(hostname)]

    def resolves(self, hostname: Union[Hostname, str]) -> bool:
        """Return True if any line maps the hostname."""
        return any(data.has_hostname(hostname) for data in self.data_lines())

    def pairs(self) -> Iterator[Pair]:
        """
        Iterate over every (address, hostname) pair, in file order.

        Yields:
            Pair(address, hostname), one per hostname per data line
        """
        for data in self.data_lines():
            yield from data.pairs()

    def minify(self, minimal: bool = False) -> "HostFile":
        """
        Build a copy with only the data entries.

        Comments, blank lines, error placeholders and trailing comments are
        dropped. With minimal=True, lines sharing an address are merged into
        the position of the first one; their hostnames are unioned in the
        order first seen and duplicates (compared ignoring case) dropped.

        The original HostFile is not modified.

        Args:
            minimal: Also merge lines that share an address

        Returns:
            A new HostFile containing only HostLine values

        Examples:
            >>> hosts = HostFile.parse("10.0.0.1 a\\n# x\\n10.0.0.1 b\\n")
            >>> hosts.minify(minimal=True).render()
            '10.0.0.1 a b\\n'
        """
        if not minimal:
            return HostFile.from_data(self.data_lines())

        merged: "OrderedDict[Address, Dict[str, Hostname]]" = OrderedDict()
        for data in self.data_lines():
            seen = merged.setdefault(data.address, OrderedDict())
            for host in data.hostnames:
                seen.setdefault(host.folded, host)

        return HostFile.from_data(
            DataLine(address, tuple(hosts.values())) for address, hosts in merged.items()
        )

    def render(self) -> str:
        """
        Reconstruct the file as text.

        The output is normalised rather than byte-identical. Data lines are
        written with single spaces between fields, comment lines lose any
        indentation before the '#' and blank lines are written empty. Error
        placeholders keep their original text. Each line is LF-terminated.
        """
        return "".join(f"{line}\n" for line in self._lines)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the host file to a JSON-serializable dictionary.

        Returns:
            A dictionary with 'lines' (one dict per line) and 'errors' count
        """
        return {
            "lines": [line_to_dict(line) for line in self._lines],
            "errors": len(self.errors()),
        }


def parse_hosts(source: Source, strict: bool = True) -> HostFile:
    """Shorthand for HostFile.parse()."""
    return HostFile.parse(source, strict=strict)


def load_hosts(path: Optional[str] = None, strict: bool = True) -> HostFile:
    """
    Shorthand for HostFile.load() that reports read failures with the path.

    Raises:
        LineReadError: With the path added to the message if the file can't
            be read or decoded in strict mode
    """
    try:
        return HostFile.load(path, strict=strict)
    except LineReadError as e:
        raise LineReadError(f"{path or DEFAULT_HOSTS_PATH}: {e.message}", cause=e.cause, line_number=e.line_number) from e
