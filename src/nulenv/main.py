"""
nulenv CLI - Pretty-print NUL-separated NAME=VALUE dumps

Main entry point for the nulenv command-line tool.
"""

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .core.config import ENV_PREFIX, ColorMode, Settings
from .core.errors import NulenvError
from .core.formatter import StyledWriter, detect_color_system
from .core.patterns import PatternSet
from .core.pipeline import print_env
from .core.source import read_input, resolve_path


console = Console(stderr=True)
logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    """Send the package's log records to stderr through rich."""
    package_logger = logging.getLogger("nulenv")
    package_logger.handlers.clear()
    handler = RichHandler(console=console, show_path=False, show_time=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False


def run(settings: Settings, file: str | None, pid: bool) -> int:
    """
    Compile patterns, read the input and print it.

    Patterns are compiled first so a bad pattern fails before any input
    is read.

    Returns:
        Number of records printed
    """
    patterns = PatternSet.build(
        settings.patterns,
        glob=settings.use_glob,
        case_sensitive=settings.case_sensitive,
    )

    path = resolve_path(file, pid)
    logger.debug("reading from %s", path if path is not None else "stdin")
    data = read_input(path, click.get_binary_stream("stdin"))

    color_system = detect_color_system(settings.color, click.get_text_stream("stdout"))
    logger.debug("colour system: %s", color_system.name if color_system else "none")
    writer = StyledWriter(click.get_binary_stream("stdout"), color_system)

    return print_env(data, writer, patterns, sort=settings.sort)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option('-p', '--pid', is_flag=True,
              help="FILE is a process' PID instead of a file path (reads /proc/<pid>/environ)")
@click.option('-g', '--glob', 'use_glob', is_flag=True, help='PATTERN is a glob instead of regex')
@click.option('-s', '--case-sensitive', is_flag=True, help='PATTERN is case-sensitive')
@click.option('--sort', is_flag=True, help='Sort variables by name')
@click.option('--color', type=click.Choice([mode.value for mode in ColorMode]),
              default=ColorMode.AUTO.value, show_default=True, help='When to colour output')
@click.option('-v', '--verbose', is_flag=True, help='Log debug information to stderr')
@click.version_option(__version__, prog_name="nulenv")
@click.argument('file', required=False)
@click.argument('patterns', nargs=-1)
def cli(pid, use_glob, case_sensitive, sort, color, verbose, file, patterns):
    """
    Pretty-print files of the format <name>=<value>\\0

    FILE is a path; omit it or pass '-' to read stdin. With --pid it is a
    process ID.

    PATTERNS filter the variable names: a variable is shown if it matches
    any of them. Patterns are case-insensitive regexes unless -g/--glob or
    -s/--case-sensitive say otherwise.
    """
    if pid and file is None:
        raise click.UsageError("--pid requires FILE")
    if use_glob and not patterns:
        raise click.UsageError("--glob requires PATTERN")
    if case_sensitive and not patterns:
        raise click.UsageError("--case-sensitive requires PATTERN")

    settings = Settings(
        patterns=list(patterns),
        use_glob=use_glob,
        case_sensitive=case_sensitive,
        sort=sort,
        color=ColorMode(color),
        verbose=verbose,
    )

    configure_logging(settings.verbose)

    # BrokenPipeError is left to click, which exits 1 without a message
    try:
        run(settings, file, pid)
    except NulenvError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}", soft_wrap=True, highlight=False)
        sys.exit(1)


def main():
    """Main entry point."""
    cli(auto_envvar_prefix=ENV_PREFIX)


if __name__ == '__main__':
    main()
