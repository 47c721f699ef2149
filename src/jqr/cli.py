"""Command-line interface for jqr."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .jqr import JQR
from .types import Format, OutputMode, JQRError


def _configure_logging(verbose: bool, profile: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif profile:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr,
                        format="%(levelname)s %(name)s: %(message)s")


def _stdin_is_terminal() -> bool:
    return sys.stdin.isatty()


def _read_input(input_file: Optional[str]) -> bytes:
    if input_file is None or input_file == "-":
        return sys.stdin.buffer.read()
    try:
        return Path(input_file).read_bytes()
    except OSError as e:
        raise click.FileError(input_file, hint=e.strerror or str(e))


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument('input_file', required=False, metavar='[FILE]')
@click.argument('query', required=False)
@click.option('--to-yaml', is_flag=True, help='Render the document (or the query matches) as YAML')
@click.option('--to-json', is_flag=True, help='Render the document (or the query matches) as compact JSON')
@click.option('--from', 'input_format', type=click.Choice([f.value for f in Format]),
              default=Format.AUTO.value, show_default=True, help='Input format')
@click.option('--indent', default=2, show_default=True, type=click.IntRange(0, 16),
              help='Indentation width for pretty output (2-9 with --to-yaml)')
@click.option('--compact', '-c', is_flag=True, help='Print each result on one line')
@click.option('--raw-output', '-r', is_flag=True, help='Print string results without quotes')
@click.option('--paths', 'show_paths', is_flag=True, help='Prefix each match with its location')
@click.option('--profile', is_flag=True, help='Log timing and memory for each stage')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: click.Context, input_file: Optional[str], query: Optional[str],
         to_yaml: bool, to_json: bool, input_format: str, indent: int,
         compact: bool, raw_output: bool, show_paths: bool, profile: bool, verbose: bool):
    """Pretty-print and query JSON or YAML data.

    FILE is read from standard input when omitted or '-'. QUERY is a path
    expression such as '$.user.name'. A lone argument that starts with '$'
    and is not an existing file is taken as the query.

    With --to-json the input is read as YAML and with --to-yaml as JSON,
    unless --from names a format.
    """
    _configure_logging(verbose, profile)

    if to_yaml and to_json:
        raise click.UsageError("--to-yaml and --to-json are mutually exclusive")
    if to_yaml and not 2 <= indent <= 9:
        raise click.BadParameter("YAML output supports an indent of 2 to 9", param_hint="'--indent'")

    if input_file is None and query is None and _stdin_is_terminal():
        click.echo(ctx.get_help())
        return

    if (query is None and input_file is not None and input_file.startswith('$')
            and not Path(input_file).exists()):
        input_file, query = None, input_file

    requested = Format(input_format)
    if to_yaml:
        output = OutputMode.YAML
        if requested is Format.AUTO:
            requested = Format.JSON
    elif to_json:
        output = OutputMode.JSON
        if requested is Format.AUTO:
            requested = Format.YAML
    else:
        output = OutputMode.DISPLAY

    data = _read_input(input_file)

    transformer = JQR(
        indent=indent,
        compact=compact,
        raw_output=raw_output,
        show_paths=show_paths,
        enable_profiling=profile
    )

    try:
        result = transformer.run(data, query=query, input_format=requested, output=output)
    except JQRError as e:
        response = transformer.error_handler.handle_error(e)
        click.secho(response.diagnostic, fg='red', err=True)
        sys.exit(response.exit_code)

    if not result.matched:
        click.echo("No results found", err=True)
        return

    click.echo(result.output, nl=False)


if __name__ == '__main__':
    main()
