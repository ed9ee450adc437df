"""
Fixtures for integration tests.

This module provides fixtures specifically for integration testing,
including CLI runners and hosts files written to a temporary directory.
"""

import tempfile
from pathlib import Path

import pytest
from click.testing import CliRunner

# CRLF terminators, a BOM, a trailing comment and no final newline
MESSY_HOSTS = (
    "\ufeff# generated by a provisioning tool\r\n"
    "127.0.0.1\tlocalhost   LOCALHOST.localdomain\r\n"
    "\r\n"
    "10.1.0.5 build01 build01.corp.example.com # ci runner\r\n"
    "10.1.0.5 Build01 artifacts\r\n"
    "::1 ip6-localhost ip6-loopback"
)


@pytest.fixture
def cli_runner():
    """Provide a Click CLI runner for testing CLI commands."""
    return CliRunner()


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def messy_hosts_file(temp_dir):
    """Write a hosts file in Windows line-ending style with a BOM."""
    path = temp_dir / "hosts"
    path.write_bytes(MESSY_HOSTS.encode("utf-8"))
    return path
