"""Hosts Toolkit - Parse, query and minify /etc/hosts files."""

__version__ = "0.1.0"

# Public API exports
from hoststool.exceptions import (
    BadAddress,
    BadHost,
    HostnameRule,
    HostsFileError,
    InvalidHostname,
    LineParseError,
    LineReadError,
    NoHosts,
)
from hoststool.models import (
    BlankLine,
    CommentLine,
    DataLine,
    ErrorLine,
    Hostname,
    HostLine,
    Line,
    LineKind,
    Pair,
    validate_hostname,
)
from hoststool.parser import classify_line, parse_data_line
from hoststool.reader import LineReader, read_lines
from hoststool.hostfile import HostFile, load_hosts, parse_hosts
from hoststool.formatter import OutputFormat, format_host_file
from hoststool.utils import configure_logging
from hoststool.cli import cli, main
