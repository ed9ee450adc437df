"""
Output formatting module for the hosts toolkit.

This module renders a parsed HostFile for display or export. It provides
a consistent interface for all formatters and a factory function to
create formatters based on the requested format type.

The module includes:
- Output format definitions (table, JSON, text)
- Formatter base class and format-specific implementations
- Factory functions for creating formatters
- Console summaries for the check command
"""

import io
import json
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List, Union

from rich.console import Console
from rich.table import Table
from rich.text import Text

from hoststool.hostfile import HostFile
from hoststool.models import BlankLine, CommentLine, ErrorLine, HostLine, Line


class OutputFormat(str, Enum):
    """
    Output format types supported by the formatter.

    Attributes:
        TABLE: Human readable table of entries
        JSON: JSON format for machine readability
        TEXT: Hosts file text, as written back by HostFile.render()
    """
    TABLE = "table"
    JSON = "json"
    TEXT = "text"


class BaseFormatter(ABC):
    """
    Base class for all formatters.

    Specific formatters inherit from this class and override the format
    method with their implementation.
    """

    @abstractmethod
    def format(self, host_file: HostFile, **kwargs) -> str:
        """
        Format the host file into a string representation.

        Args:
            host_file: The parsed hosts file to format
            **kwargs: Additional format-specific options

        Returns:
            String representation in the formatter's output format
        """
        pass


class JSONFormatter(BaseFormatter):
    """Formatter for JSON output."""

    def format(self, host_file: HostFile, **kwargs) -> str:
        """
        Format the host file as JSON.

        Args:
            host_file: The parsed hosts file to format
            **kwargs: Additional options including:
                - indent: JSON indentation level
                - data_only: Only include data lines

        Returns:
            JSON string with a 'lines' list and summary counts
        """
        indent = kwargs.get('indent', 2)
        data_only = kwargs.get('data_only', False)

        result = host_file.to_dict()
        if data_only:
            result["lines"] = [line for line in result["lines"] if line["kind"] == "data"]
        result["total_lines"] = len(host_file)
        result["entries"] = sum(1 for _ in host_file.data_lines())

        return json.dumps(result, indent=indent)


class TextFormatter(BaseFormatter):
    """
    Formatter for hosts file text.

    Writes the file back in hosts format. Comments and blank lines are kept
    unless data_only is set.
    """

    def format(self, host_file: HostFile, **kwargs) -> str:
        data_only = kwargs.get('data_only', False)
        if data_only:
            host_file = host_file.minify()
        return host_file.render()


class TableFormatter(BaseFormatter):
    """
    Formatter for a table of entries, rendered with rich.

    One row per data line (and per error line, when the file was parsed in
    tolerant mode). Comments and blank lines are not shown.
    """

    def format(self, host_file: HostFile, **kwargs) -> str:
        """
        Format the host file as a plain-text table.

        Args:
            host_file: The parsed hosts file to format
            **kwargs: Additional options including:
                - width: Table width in characters (default 100)
                - title: Table title

        Returns:
            The rendered table, without color codes
        """
        width = kwargs.get('width', 100)
        title = kwargs.get('title', "Hosts entries")

        table = Table(title=title)
        table.add_column("Line", justify="right")
        table.add_column("Address")
        table.add_column("Hostnames")
        table.add_column("Comment")

        for line in host_file:
            if isinstance(line, HostLine):
                table.add_row(
                    Text(_line_number(line)),
                    Text(str(line.address)),
                    Text(" ".join(host.name for host in line.hostnames)),
                    Text((line.comment or "").strip()),
                )
            elif isinstance(line, ErrorLine):
                table.add_row(
                    Text(_line_number(line)),
                    Text("INVALID"),
                    Text(line.raw.strip()),
                    Text(str(line.error)),
                )

        buffer = io.StringIO()
        console = Console(file=buffer, width=width, color_system=None, force_terminal=False)
        console.print(table)
        return buffer.getvalue()


def _line_number(line: Line) -> str:
    return "" if line.line_number is None else str(line.line_number)


def normalize_format_type(format_type: Union[str, OutputFormat]) -> OutputFormat:
    """
    Normalize format type to an OutputFormat enum value.

    Args:
        format_type: The format type as string or enum

    Returns:
        The corresponding OutputFormat enum value

    Raises:
        ValueError: If format_type is not a supported format

    Examples:
        >>> normalize_format_type("json")
        <OutputFormat.JSON: 'json'>
        >>> normalize_format_type(OutputFormat.TEXT)
        <OutputFormat.TEXT: 'text'>
    """
    if isinstance(format_type, OutputFormat):
        return format_type

    if isinstance(format_type, str):
        format_str = format_type.lower()
        for fmt in OutputFormat:
            if fmt.value == format_str:
                return fmt

    valid_formats = ", ".join([f.value for f in OutputFormat])
    raise ValueError(
        f"Unsupported format type: {format_type}. "
        f"Valid formats are: {valid_formats}"
    )


def get_formatter(format_type: Union[str, OutputFormat]) -> BaseFormatter:
    """
    Return the appropriate formatter for the given format type.

    Args:
        format_type: The type of formatter to create (table, json, text)

    Returns:
        A formatter instance

    Raises:
        ValueError: If format_type is not a supported format
    """
    normalized_format = normalize_format_type(format_type)

    formatters = {
        OutputFormat.TABLE: TableFormatter(),
        OutputFormat.JSON: JSONFormatter(),
        OutputFormat.TEXT: TextFormatter(),
    }

    return formatters[normalized_format]


def format_host_file(
    host_file: HostFile,
    format_type: Union[str, OutputFormat] = OutputFormat.TABLE,
    **options: Any
) -> str:
    """
    Format a host file using the appropriate formatter.

    Args:
        host_file: The parsed hosts file to format
        format_type: Output format type (table, json, text)
        **options: Additional format-specific options

    Returns:
        Formatted string in the requested format

    Raises:
        ValueError: If format_type is not supported
    """
    formatter = get_formatter(format_type)
    return formatter.format(host_file, **options)


def format_check_summary(host_file: HostFile, path: str) -> str:
    """
    Summarize a parsed hosts file for the check command.

    Args:
        host_file: The parsed hosts file
        path: Path shown in the header

    Returns:
        Multi-line summary: line counts per kind, then one line per error
    """
    counts = {"data": 0, "comment": 0, "blank": 0, "error": 0}
    for line in host_file:
        if isinstance(line, HostLine):
            counts["data"] += 1
        elif isinstance(line, CommentLine):
            counts["comment"] += 1
        elif isinstance(line, BlankLine):
            counts["blank"] += 1
        elif isinstance(line, ErrorLine):
            counts["error"] += 1
        else:
            raise TypeError(f"Not a hosts file line: {line!r}")

    lines: List[str] = [
        f"{path}: {len(host_file)} lines",
        f"  Entries: {counts['data']}",
        f"  Comments: {counts['comment']}",
        f"  Blank: {counts['blank']}",
        f"  Errors: {counts['error']}",
    ]
    for error_line in host_file.errors():
        lines.append(f"  ! {error_line.error}")

    return "\n".join(lines)
