"""
Global pytest configuration and shared fixtures.

This file provides configuration settings and fixtures for all test modules.
"""
import logging

import pytest


PRETTY_HOSTS = """\
# basic ones
127.0.0.1  localhost localhost.localdomain
0.0.0.0  allzeros  # nonstandard

# others
8.8.8.8  gdns  # this is the more common one
8.8.4.4  gdns2  # this is the less common one

# comment by itself
"""

PLAIN_HOSTS = """\
127.0.0.1 localhost localhost.localdomain
0.0.0.0 allzeros
8.8.8.8 gdns
8.8.4.4 gdns2
"""

BIG_HOSTS = """\
127.0.0.1  localhost
::1  localhost.localdomain
::1  lh
127.0.0.1  lh
0.0.0.0  allzeros
8.8.8.8  gdns
0.0.0.0  lotsazeros
8.8.4.4  gdns2
8.8.8.8  google-dns
"""

SMALL_HOSTS = """\
127.0.0.1 localhost lh
::1 localhost.localdomain lh
0.0.0.0 allzeros lotsazeros
8.8.8.8 gdns google-dns
8.8.4.4 gdns2
"""


@pytest.fixture
def pretty_hosts() -> str:
    """Return a commented hosts file."""
    return PRETTY_HOSTS


@pytest.fixture
def plain_hosts() -> str:
    """Return PRETTY_HOSTS with comments and blank lines removed."""
    return PLAIN_HOSTS


@pytest.fixture
def big_hosts() -> str:
    """Return a hosts file with repeated addresses."""
    return BIG_HOSTS


@pytest.fixture
def small_hosts() -> str:
    """Return BIG_HOSTS merged by address, in first-seen order."""
    return SMALL_HOSTS


@pytest.fixture
def hosts_path(tmp_path):
    """Write PRETTY_HOSTS to a temporary file and return its path."""
    path = tmp_path / "hosts"
    path.write_text(PRETTY_HOSTS)
    return path


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Drop handlers the CLI installs so later tests don't log to closed streams."""
    yield
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
