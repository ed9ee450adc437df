"""
Command-line interface for the hosts toolkit.

This module provides the CLI for the hosts toolkit, using Click to create
a command structure for checking, querying and minifying hosts files.
"""

import ipaddress
import logging
import sys
from importlib.metadata import version
from typing import NoReturn, Optional

import click
from dotenv import load_dotenv

from hoststool.exceptions import HostsFileError
from hoststool.formatter import OutputFormat, format_check_summary, format_host_file
from hoststool.hostfile import HostFile, load_hosts
from hoststool.utils import configure_logging, get_hosts_path, is_valid_file_path, write_text_file

# Set up shared context for CLI commands
CONTEXT_SETTINGS = {
    'help_option_names': ['-h', '--help'],
    'auto_envvar_prefix': 'HOSTSTOOL',
}

logger = logging.getLogger(__name__)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="hosts-toolkit")
@click.option("--debug", is_flag=True, help="Enable debug mode with verbose output")
@click.option("--quiet", is_flag=True, help="Suppress all console output except errors")
@click.option("--log-file", help="Save logs to specified file")
@click.option("--hosts-file", help="Hosts file to read (default: /etc/hosts)")
@click.option("--tolerant", is_flag=True, help="Keep going past malformed lines instead of failing")
@click.pass_context
def cli(
    ctx: click.Context,
    debug: bool,
    quiet: bool,
    log_file: Optional[str],
    hosts_file: Optional[str],
    tolerant: bool,
) -> None:
    """
    Command-line utilities for /etc/hosts files.

    Check hosts files for malformed entries, look up hostnames and
    addresses, and write minified copies without comments.
    """
    ctx.ensure_object(dict)

    # Load environment variables from .env file
    load_dotenv()

    ctx.obj['DEBUG'] = debug
    ctx.obj['QUIET'] = quiet
    ctx.obj['HOSTS_FILE'] = get_hosts_path(hosts_file)
    ctx.obj['TOLERANT'] = tolerant

    # Without --debug or --quiet, HOSTSTOOL_LOG_LEVEL (or INFO) applies
    log_level: Optional[str] = None
    if debug:
        log_level = "debug"
    elif quiet:
        log_level = "error"
    configure_logging(level=log_level, log_file=log_file, console=True)


def _fail(ctx: click.Context, message: str, error: Optional[BaseException] = None) -> NoReturn:
    """Log and print an error, then exit 1 (or re-raise in debug mode)."""
    logger.error(message)
    if error is not None and ctx.obj.get('DEBUG', False):
        raise error
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _load(ctx: click.Context, strict: Optional[bool] = None) -> HostFile:
    """Load the hosts file selected by the group options."""
    path = ctx.obj['HOSTS_FILE']
    if strict is None:
        strict = not ctx.obj.get('TOLERANT', False)
    try:
        logger.info(f"Reading hosts file {path}")
        return load_hosts(path, strict=strict)
    except (FileNotFoundError, PermissionError, IsADirectoryError) as e:
        _fail(ctx, f"File access problem: {str(e)}", e)
    except HostsFileError as e:
        _fail(ctx, f"Malformed hosts file {path}: {str(e)}", e)


@cli.command("check")
@click.pass_context
def check(ctx: click.Context) -> None:
    """
    Check a hosts file for malformed lines.

    Every line is parsed; each malformed line is reported with its line
    number. Exits with status 1 if any line is malformed.

    \b
    Examples:
        hoststool check
        hoststool --hosts-file ./hosts check
    """
    host_file = _load(ctx, strict=False)
    path = ctx.obj['HOSTS_FILE']

    if not ctx.obj.get('QUIET', False) or host_file.has_errors:
        click.echo(format_check_summary(host_file, path))

    if host_file.has_errors:
        logger.error(f"{len(host_file.errors())} malformed lines in {path}")
        sys.exit(1)


@cli.command("lookup")
@click.argument("name")
@click.pass_context
def lookup(ctx: click.Context, name: str) -> None:
    """
    Look up a hostname or an address.

    Given an address, prints every hostname mapped to it. Given a hostname,
    prints every address it is mapped to (matching ignores case). Exits
    with status 1 if nothing matches.

    \b
    Examples:
        hoststool lookup localhost
        hoststool lookup 127.0.0.1
    """
    host_file = _load(ctx)

    try:
        address = ipaddress.ip_address(name)
    except ValueError:
        results = [str(addr) for addr in host_file.addresses_for(name)]
    else:
        results = [host.name for host in host_file.hostnames_for(address)]

    if not results:
        click.echo(f"No entries found for {name}", err=True)
        sys.exit(1)

    for result in results:
        click.echo(result)


@cli.command("minify")
@click.option("--minimal", is_flag=True, help="Merge entries that share an address")
@click.option("--output", help="Write the result to a file instead of stdout")
@click.pass_context
def minify(ctx: click.Context, minimal: bool, output: Optional[str]) -> None:
    """
    Print the hosts file without comments or blank lines.

    With --minimal, entries for the same address are merged into one line
    and duplicate hostnames are dropped.

    \b
    Examples:
        hoststool minify
        hoststool minify --minimal --output hosts.min
    """
    if output and not is_valid_file_path(output):
        _fail(ctx, f"Cannot write to output file path: {output}")

    host_file = _load(ctx)
    minified = host_file.minify(minimal=minimal)

    if output:
        try:
            write_text_file([str(line) for line in minified], output)
        except IOError as e:
            _fail(ctx, str(e), e)
        logger.info(f"Minified hosts file saved to {output}")
        if not ctx.obj.get('QUIET', False):
            click.echo(f"Wrote {len(minified)} entries to {output}")
    else:
        click.echo(minified.render(), nl=False)


@cli.command("show")
@click.option(
    "--format",
    "format_type",
    type=click.Choice([fmt.value for fmt in OutputFormat]),
    default=OutputFormat.TABLE.value,
    help="Output format",
)
@click.pass_context
def show(ctx: click.Context, format_type: str) -> None:
    """
    Display the entries of a hosts file.

    \b
    Examples:
        hoststool show
        hoststool --tolerant show --format json
    """
    host_file = _load(ctx)
    output = format_host_file(host_file, format_type, title=ctx.obj['HOSTS_FILE'])
    click.echo(output, nl=not output.endswith("\n"))


@cli.command("version")
def version_cmd() -> None:
    """Display detailed version information."""
    click.echo(f"Hosts-toolkit version: {version('hosts-toolkit')}")
    click.echo(f"Python version: {sys.version.split()[0]}")
    click.echo(f"Click version: {version('click')}")
    click.echo(f"Rich version: {version('rich')}")


def main() -> None:
    """Entry point for the CLI."""
    cli()
