"""
Data models for the hosts toolkit.

This module provides the value types produced by the hosts file parser:
validated hostnames, data records (one address plus its hostnames), and
the closed set of line variants a hosts file is made of.

Every model is immutable once constructed. Hostname and DataLine validate
themselves on construction, so an instance is always well formed.
"""

import ipaddress
import re
import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, NamedTuple, Optional, Tuple, Union

from hoststool.exceptions import HostnameRule, InvalidHostname, NoHosts

Address = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

MAX_HOSTNAME_LENGTH = 253
MAX_LABEL_LENGTH = 63

_LABEL_CHARS = re.compile(r"[A-Za-z0-9-]+")
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _looks_like_ipv4(candidate: str) -> bool:
    try:
        ipaddress.IPv4Address(candidate)
    except ValueError:
        return False
    return True


def validate_hostname(candidate: str) -> None:
    """
    Check a candidate string against hostname syntax.

    The checks run in a fixed order and the first violation wins:
    1. The string is not empty
    2. The whole string is at most 253 characters
    3. It is not a dotted-quad IPv4 address
    4. Every dot-separated label is non-empty and at most 63 characters
    5. Labels only contain ASCII letters, digits and hyphens
    6. No label starts or ends with a hyphen

    Single-label names such as "localhost" are valid. Whitespace is never
    part of a hostname and is reported as an illegal character.

    Args:
        candidate: The string to validate

    Raises:
        InvalidHostname: Naming the violated rule

    Examples:
        >>> validate_hostname("localhost.localdomain")
        >>> validate_hostname("-bad")
        Traceback (most recent call last):
          ...
        hoststool.exceptions.InvalidHostname: Invalid hostname '-bad': label '-bad' starts or ends with a hyphen
    """
    if not candidate:
        raise InvalidHostname(candidate, HostnameRule.EMPTY, "hostname is empty")

    if len(candidate) > MAX_HOSTNAME_LENGTH:
        raise InvalidHostname(
            candidate,
            HostnameRule.TOO_LONG,
            f"hostname is {len(candidate)} characters (max {MAX_HOSTNAME_LENGTH})",
        )

    if _looks_like_ipv4(candidate):
        raise InvalidHostname(
            candidate,
            HostnameRule.ADDRESS_AS_HOSTNAME,
            "an IP address was given where a hostname should have been",
        )

    for label in candidate.split("."):
        if not label:
            raise InvalidHostname(candidate, HostnameRule.EMPTY_LABEL, "hostname contains an empty label")
        if len(label) > MAX_LABEL_LENGTH:
            raise InvalidHostname(
                candidate,
                HostnameRule.LABEL_TOO_LONG,
                f"label {label[:16]!r}... is {len(label)} characters (max {MAX_LABEL_LENGTH})",
            )
        if not _LABEL_CHARS.fullmatch(label):
            bad = next(ch for ch in label if not (ch.isascii() and (ch.isalnum() or ch == "-")))
            raise InvalidHostname(
                candidate,
                HostnameRule.ILLEGAL_CHARACTER,
                f"contains illegal character {bad!r}",
            )
        if label.startswith("-") or label.endswith("-"):
            raise InvalidHostname(
                candidate,
                HostnameRule.HYPHEN_PLACEMENT,
                f"label {label!r} starts or ends with a hyphen",
            )


@dataclass(frozen=True)
class Hostname:
    """
    A syntactically valid hostname.

    The name keeps the case it was written in. Use matches() for the
    case-insensitive comparison that lookups rely on; == compares the exact
    spelling.

    Attributes:
        name: The hostname, exactly as written

    Examples:
        >>> Hostname("LocalHost").matches("localhost")
        True
        >>> Hostname("bad host")
        Traceback (most recent call last):
          ...
        hoststool.exceptions.InvalidHostname: Invalid hostname 'bad host': contains illegal character ' '
    """
    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise InvalidHostname(repr(self.name), HostnameRule.EMPTY, "hostname must be a string")
        validate_hostname(self.name)

    @classmethod
    def is_valid(cls, candidate: str) -> bool:
        """Return True if candidate would construct a Hostname."""
        try:
            validate_hostname(candidate)
        except InvalidHostname:
            return False
        return True

    @property
    def folded(self) -> str:
        """The ASCII-lowercase form used for case-insensitive comparison."""
        return self.name.translate(_ASCII_LOWER)

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(self.name.split("."))

    def matches(self, other: Union["Hostname", str]) -> bool:
        """
        Compare against another hostname ignoring case.

        Args:
            other: A Hostname or plain string

        Returns:
            True if both spell the same name up to ASCII case
        """
        other_name = other.name if isinstance(other, Hostname) else other
        # ASCII case only: "\u212a" (KELVIN SIGN) must not match "k"
        return self.folded == other_name.translate(_ASCII_LOWER)

    def __str__(self) -> str:
        return self.name


def parse_address(token: str) -> Address:
    """Parse an IPv4 or IPv6 address token; raises ValueError on failure."""
    return ipaddress.ip_address(token)


class Pair(NamedTuple):
    """A flattened (address, hostname) association from one data line."""
    address: Address
    hostname: Hostname


@dataclass(frozen=True)
class DataLine:
    """
    One hosts file record: an address and the hostnames mapped to it.

    The hostnames keep their file order; the first one is conventionally the
    canonical name. A DataLine always has at least one hostname.

    Attributes:
        address: The parsed IPv4 or IPv6 address
        hostnames: The hostnames in the order they were written

    Raises:
        NoHosts: If constructed without any hostname
        TypeError: If hostnames is a single string rather than a sequence
        InvalidHostname: If a hostname given as a string is invalid
        ValueError: If the address given as a string is not an IP address

    Examples:
        >>> line = DataLine("127.0.0.1", ["localhost", "lh"])
        >>> str(line)
        '127.0.0.1 localhost lh'
    """
    address: Address
    hostnames: Tuple[Hostname, ...]

    def __post_init__(self) -> None:
        # Frozen dataclass: coerce through object.__setattr__
        if isinstance(self.address, str):
            object.__setattr__(self, "address", parse_address(self.address))
        if isinstance(self.hostnames, str):
            raise TypeError("hostnames must be a sequence of hostnames, not a single string")
        hostnames = tuple(
            host if isinstance(host, Hostname) else Hostname(host)
            for host in self.hostnames
        )
        if not hostnames:
            raise NoHosts(str(self.address))
        object.__setattr__(self, "hostnames", hostnames)

    @property
    def canonical(self) -> Hostname:
        """The first hostname on the line."""
        return self.hostnames[0]

    def pairs(self) -> Iterator[Pair]:
        """Iterate over (address, hostname) pairs in hostname order."""
        for host in self.hostnames:
            yield Pair(self.address, host)

    def has_hostname(self, hostname: Union[Hostname, str]) -> bool:
        return any(host.matches(hostname) for host in self.hostnames)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the data line to a JSON-serializable dictionary.

        Returns:
            A dictionary with 'address' and 'hostnames' keys
        """
        return {
            "address": str(self.address),
            "hostnames": [host.name for host in self.hostnames],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DataLine":
        """
        Create a DataLine from a dictionary produced by to_dict().

        Raises:
            ValueError: If the address is missing or invalid
            NoHosts: If the hostname list is missing or empty
        """
        if "address" not in data:
            raise ValueError("DataLine dictionary is missing 'address'")
        return cls(data["address"], tuple(data.get("hostnames", ())))

    @classmethod
    def from_str(cls, text: str) -> "DataLine":
        """Parse a comment-free data line such as '10.0.0.1 a b'."""
        # Imported here to avoid a models <-> parser import cycle
        from hoststool.parser import parse_data_line
        return parse_data_line(text.strip())

    def __str__(self) -> str:
        return " ".join([str(self.address)] + [host.name for host in self.hostnames])


class LineKind(str, Enum):
    """Classification outcome for one physical line."""
    BLANK = "blank"
    COMMENT = "comment"
    DATA = "data"
    ERROR = "error"


@dataclass(frozen=True)
class BlankLine:
    """An empty or whitespace-only line."""
    line_number: Optional[int] = field(default=None, compare=False)

    @property
    def kind(self) -> LineKind:
        return LineKind.BLANK

    def __str__(self) -> str:
        return ""


@dataclass(frozen=True)
class CommentLine:
    """
    A line with no data and a comment.

    Attributes:
        comment: Everything after the first '#', verbatim
    """
    comment: str
    line_number: Optional[int] = field(default=None, compare=False)

    @property
    def kind(self) -> LineKind:
        return LineKind.COMMENT

    def __str__(self) -> str:
        return f"#{self.comment}"


@dataclass(frozen=True)
class HostLine:
    """
    A line carrying a data record, with an optional trailing comment.

    Attributes:
        data: The parsed record
        comment: Text after '#' on the same line, or None
    """
    data: DataLine
    comment: Optional[str] = None
    line_number: Optional[int] = field(default=None, compare=False)

    @property
    def kind(self) -> LineKind:
        return LineKind.DATA

    @property
    def address(self) -> Address:
        return self.data.address

    @property
    def hostnames(self) -> Tuple[Hostname, ...]:
        return self.data.hostnames

    def __str__(self) -> str:
        if self.comment is None:
            return str(self.data)
        return f"{self.data}  #{self.comment}"


@dataclass(frozen=True)
class ErrorLine:
    """
    Placeholder for a line that could not be read or parsed.

    Only produced by the reader and kept by tolerant HostFile construction.

    Attributes:
        raw: The original line text (empty if it could not be decoded)
        error: The LineParseError or LineReadError describing the failure
    """
    raw: str
    error: Exception = field(compare=False)
    line_number: Optional[int] = field(default=None, compare=False)

    @property
    def kind(self) -> LineKind:
        return LineKind.ERROR

    def __str__(self) -> str:
        return self.raw


Line = Union[BlankLine, CommentLine, HostLine, ErrorLine]


def line_to_dict(line: Line) -> Dict[str, Any]:
    """
    Convert any line variant to a JSON-serializable dictionary.

    Args:
        line: The line to convert

    Returns:
        A dictionary with at least 'kind' and 'line_number' keys

    Raises:
        TypeError: If line is not one of the known variants
    """
    if isinstance(line, HostLine):
        extra = dict(line.data.to_dict(), comment=line.comment)
    elif isinstance(line, CommentLine):
        extra = {"comment": line.comment}
    elif isinstance(line, ErrorLine):
        extra = {"raw": line.raw, "error": str(line.error)}
    elif isinstance(line, BlankLine):
        extra = {}
    else:
        raise TypeError(f"Not a hosts file line: {line!r}")
    result: Dict[str, Any] = {"kind": line.kind.value, "line_number": line.line_number}
    result.update(extra)
    return result


def host_lines(lines: Iterable[Line]) -> Iterator[HostLine]:
    """Yield only the data-carrying lines."""
    for line in lines:
        if isinstance(line, HostLine):
            yield line

