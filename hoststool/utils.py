"""
Utility functions for the hosts toolkit.

This module provides helper functions used by the command-line layer,
including logging setup, environment-based configuration and file I/O.
The parsing core does not depend on anything in here.
"""

import logging
import logging.handlers
import os
import sys
from typing import List, Optional, Union

from hoststool.hostfile import DEFAULT_HOSTS_PATH

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)8s] %(message)s (%(name)s:%(lineno)s)"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

LOG_LEVEL_ENV_VAR = "HOSTSTOOL_LOG_LEVEL"
HOSTS_FILE_ENV_VAR = "HOSTSTOOL_HOSTS_FILE"

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def parse_log_level(level: Optional[Union[str, int]] = None, env_var: str = LOG_LEVEL_ENV_VAR) -> int:
    """
    Resolve the level the toolkit logs at.

    An integer level is used as is. A level name is looked up in LOG_LEVELS
    (ignoring case); when it is missing or unknown, the HOSTSTOOL_LOG_LEVEL
    variable is tried the same way, and INFO is the last resort.

    Args:
        level: Level name or logging constant, or None
        env_var: Environment variable holding a level name

    Returns:
        A logging level constant

    Examples:
        >>> parse_log_level("debug")
        10
        >>> parse_log_level(None, "NONEXISTENT_VAR")
        20
    """
    if isinstance(level, int):
        return level

    # An unknown level name falls back to the environment, then INFO
    for name in (level, os.environ.get(env_var)):
        if isinstance(name, str) and name.lower() in LOG_LEVELS:
            return LOG_LEVELS[name.lower()]

    return logging.INFO


def configure_logging(
    level: Optional[Union[str, int]] = None,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
    console: bool = True,
) -> None:
    """
    Configure the logging system for the application.

    Sets up the root logger with a console handler and, when log_file is
    given, a rotating file handler. Existing root handlers are replaced.

    Args:
        level: Log level (debug, info, warning, error, critical) or logging
            constant; None falls back to HOSTSTOOL_LOG_LEVEL, then INFO
        log_file: Optional path to log file
        log_format: Optional custom log format
        date_format: Optional custom date format
        console: Whether to log to the console (stderr)
    """
    log_level = parse_log_level(level)

    handlers: List[logging.Handler] = []
    if console:
        # stdout is reserved for command output
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file:
        ensure_directory_exists(log_file)
        handlers.append(logging.handlers.RotatingFileHandler(
            filename=log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding='utf-8'
        ))

    formatter = logging.Formatter(
        fmt=log_format or DEFAULT_LOG_FORMAT,
        datefmt=date_format or DEFAULT_DATE_FORMAT
    )

    root_logger = logging.getLogger()
    for old_handler in list(root_logger.handlers):
        root_logger.removeHandler(old_handler)
    root_logger.setLevel(log_level)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        root_logger.addHandler(handler)

    logger.debug(
        f"Logging configured: level={logging.getLevelName(log_level)}"
        + (f", file={log_file}" if log_file else "")
    )


def get_hosts_path(path: Optional[str] = None, env_var: str = HOSTS_FILE_ENV_VAR) -> str:
    """
    Resolve which hosts file to read.

    Priority order:
    1. Explicit path parameter
    2. Environment variable
    3. /etc/hosts

    Args:
        path: Explicit hosts file path
        env_var: Name of environment variable to check

    Returns:
        The hosts file path
    """
    if path:
        return path
    return os.environ.get(env_var) or DEFAULT_HOSTS_PATH


def is_valid_file_path(file_path: str) -> bool:
    """
    Check if a file path is writable.

    The file itself doesn't need to exist, but its directory must
    exist (or be the current directory) and be writable.

    Args:
        file_path: Path to check

    Returns:
        True if the file can be written, False otherwise
    """
    if not file_path:
        return False
    if os.path.isdir(file_path):
        return False
    directory = os.path.dirname(os.path.abspath(file_path))
    if not os.path.isdir(directory):
        return False
    if os.path.exists(file_path):
        return os.access(file_path, os.W_OK)
    return os.access(directory, os.W_OK)


def ensure_directory_exists(file_path: str) -> None:
    """
    Create the parent directory of file_path if it does not exist.

    Args:
        file_path: Path to a file whose directory should exist
    """
    directory = os.path.dirname(file_path)
    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)


def write_text_file(
    lines: List[str],
    file_path: str,
    add_newlines: bool = True,
    encoding: str = 'utf-8'
) -> None:
    """
    Write a list of lines to a text file.

    Lines are written with LF terminators regardless of platform.

    Args:
        lines: List of lines to write
        file_path: Path where the file should be written
        add_newlines: Whether to add a newline after each entry (if not already present)
        encoding: File encoding (default: utf-8)

    Raises:
        IOError: If there's an error writing to the file
    """
    ensure_directory_exists(file_path)

    try:
        with open(file_path, 'w', encoding=encoding, newline='\n') as f:
            for line in lines:
                if add_newlines and not line.endswith('\n'):
                    f.write(line + '\n')
                else:
                    f.write(line)
    except (IOError, OSError) as e:
        raise IOError(f"Error writing text file {file_path}: {str(e)}")
