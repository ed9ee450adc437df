"""
Exception types for the hosts toolkit.

Every error raised while validating hostnames, parsing data lines or
reading a hosts file derives from HostsFileError. Errors that describe a
malformed line keep an owned copy of the offending text so they can be
reported after the source has been closed.
"""

from enum import Enum
from typing import Optional


class HostnameRule(str, Enum):
    """
    Hostname syntax rules that a candidate token can violate.

    Attributes:
        EMPTY: The hostname is empty
        EMPTY_LABEL: A label between dots is empty (e.g. "a..b", ".a", "a.")
        LABEL_TOO_LONG: A label is longer than 63 characters
        ILLEGAL_CHARACTER: A character other than ASCII letters, digits or '-'
        HYPHEN_PLACEMENT: A label starts or ends with a hyphen
        TOO_LONG: The whole hostname is longer than 253 characters
        ADDRESS_AS_HOSTNAME: The token is an IPv4 address, not a hostname
    """
    EMPTY = "empty"
    EMPTY_LABEL = "empty_label"
    LABEL_TOO_LONG = "label_too_long"
    ILLEGAL_CHARACTER = "illegal_character"
    HYPHEN_PLACEMENT = "hyphen_placement"
    TOO_LONG = "too_long"
    ADDRESS_AS_HOSTNAME = "address_as_hostname"


class HostsFileError(Exception):
    """Base class for all hosts toolkit errors."""


class InvalidHostname(HostsFileError, ValueError):
    """
    A token failed hostname syntax validation.

    Attributes:
        token: The rejected token, verbatim
        rule: The HostnameRule that was violated
        detail: Human readable description of the violation
    """

    def __init__(self, token: str, rule: HostnameRule, detail: str) -> None:
        self.token = token
        self.rule = rule
        self.detail = detail
        super().__init__(f"Invalid hostname {token!r}: {detail}")


class LineParseError(HostsFileError, ValueError):
    """
    A data line could not be parsed.

    Attributes:
        line: Full text of the offending line
        line_number: 1-based position in the source, when known
    """

    def __init__(self, line: str, line_number: Optional[int] = None) -> None:
        self.line = line
        self.line_number = line_number
        super().__init__(line)

    def describe(self) -> str:
        """Describe the failure without the location prefix."""
        return "malformed line"

    def __str__(self) -> str:
        location = f"line {self.line_number}: " if self.line_number is not None else ""
        return f"{location}{self.describe()}: {self.line!r}"


class BadAddress(LineParseError):
    """The first token of a data line is not an IPv4 or IPv6 address."""

    def __init__(self, line: str, token: str, line_number: Optional[int] = None) -> None:
        self.token = token
        super().__init__(line, line_number)

    def describe(self) -> str:
        return f"could not parse {self.token!r} as an IP address"


class BadHost(LineParseError):
    """
    A hostname token on an otherwise address-valid line failed validation.

    Attributes:
        token: The offending hostname token
        cause: The InvalidHostname raised by the validator
    """

    def __init__(
        self,
        line: str,
        token: str,
        cause: InvalidHostname,
        line_number: Optional[int] = None,
    ) -> None:
        self.token = token
        self.cause = cause
        super().__init__(line, line_number)

    def describe(self) -> str:
        return f"invalid host {self.token!r} ({self.cause.detail})"


class NoHosts(LineParseError):
    """An address is present but no hostnames follow it."""

    def describe(self) -> str:
        return "address has no hostnames"


class LineReadError(HostsFileError):
    """
    The source could not be split into lines.

    Raised for undecodable bytes and for I/O failures while reading.

    Attributes:
        cause: The low-level exception (UnicodeDecodeError, OSError, ...)
        line_number: 1-based position of the failing line, when known
    """

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        line_number: Optional[int] = None,
    ) -> None:
        self.message = message
        self.cause = cause
        self.line_number = line_number
        super().__init__(message)

    def __str__(self) -> str:
        location = f"line {self.line_number}: " if self.line_number is not None else ""
        return f"{location}{self.message}"
