"""
Line parsing for the hosts toolkit.

This module turns single lines of hosts file text into line models.
It has two layers:

- parse_data_line() parses the data portion of a line, i.e. an address
  followed by whitespace-separated hostnames.
- classify_line() takes one raw physical line, splits off the comment and
  decides whether the line is blank, a comment or data.

Both raise the LineParseError subclasses from hoststool.exceptions; turning
those errors into ErrorLine placeholders is the reader's job.
"""

from typing import List, Optional, Tuple

from hoststool.exceptions import BadAddress, BadHost, InvalidHostname, NoHosts
from hoststool.models import BlankLine, CommentLine, DataLine, Hostname, HostLine, Line, parse_address

COMMENT_CHAR = "#"


def parse_data_line(
    text: str,
    raw_line: Optional[str] = None,
    line_number: Optional[int] = None,
) -> DataLine:
    """
    Parse the data portion of a hosts file line.

    The text is split on runs of whitespace. The first token must be an IPv4
    or IPv6 address and every following token must be a valid hostname.

    Args:
        text: Trimmed, comment-free line content, e.g. "127.0.0.1 localhost"
        raw_line: Full original line to report in errors (defaults to text)
        line_number: 1-based line position to report in errors

    Returns:
        DataLine with the address and hostnames in token order

    Raises:
        BadAddress: If the first token is not an IP address
        NoHosts: If no hostname follows the address
        BadHost: If any hostname token is invalid

    Examples:
        >>> str(parse_data_line("::1   localhost\\tlh"))
        '::1 localhost lh'
    """
    line = text if raw_line is None else raw_line
    tokens = text.split()
    if not tokens:
        raise NoHosts(line, line_number)

    address_token, host_tokens = tokens[0], tokens[1:]
    try:
        address = parse_address(address_token)
    except ValueError:
        raise BadAddress(line, address_token, line_number) from None

    if not host_tokens:
        raise NoHosts(line, line_number)

    hostnames: List[Hostname] = []
    for token in host_tokens:
        try:
            hostnames.append(Hostname(token))
        except InvalidHostname as e:
            raise BadHost(line, token, e, line_number) from e

    return DataLine(address, tuple(hostnames))


def split_comment(raw_line: str) -> Tuple[str, Optional[str]]:
    """
    Split a line at its first '#'.

    There is no escape for a literal '#'.

    Returns:
        (content, comment) where comment is None if the line has no '#'
    """
    index = raw_line.find(COMMENT_CHAR)
    if index < 0:
        return raw_line, None
    return raw_line[:index], raw_line[index + 1:]


def classify_line(raw_line: str, line_number: Optional[int] = None) -> Line:
    """
    Classify one physical line of a hosts file.

    Everything after the first '#' is comment text. If the remaining content
    is empty after trimming, the line is a CommentLine (when a '#' was
    present) or a BlankLine. Otherwise the trimmed content is parsed as data
    and the line becomes a HostLine that keeps any trailing comment.

    Args:
        raw_line: The line without its line terminator
        line_number: Optional 1-based position, stored on the result

    Returns:
        BlankLine, CommentLine or HostLine

    Raises:
        LineParseError: BadAddress, BadHost or NoHosts, reporting raw_line
            in full

    Examples:
        >>> classify_line("   ")
        BlankLine(line_number=None)
        >>> classify_line("  # comment only")
        CommentLine(comment=' comment only', line_number=None)
    """
    content, comment = split_comment(raw_line)
    content = content.strip()

    if not content:
        if comment is None:
            return BlankLine(line_number=line_number)
        return CommentLine(comment, line_number=line_number)

    data = parse_data_line(content, raw_line=raw_line, line_number=line_number)
    return HostLine(data, comment, line_number=line_number)
