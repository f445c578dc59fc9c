"""Console script for txdecode."""
import logging
import sys

import click

from . import decoder, exceptions

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@click.command()
# fmt: off
@click.argument("raw_hex", metavar="HEX", required=False)
@click.option("-f", "--file", "hex_file", type=click.File("r"), default="-", help="Read transaction hex from a file (default: stdin), used when HEX is not given")
@click.option("-i", "--indent", type=int, default=2, envvar="TXDECODE_INDENT", show_default=True, help="JSON indentation")
@click.option("-s", "--strict", is_flag=True, help="Reject data after the locktime")
@click.option("-v", "--verbose", is_flag=True, help="Log parsing steps to stderr")
# fmt: on
def main(raw_hex, hex_file, indent, strict, verbose):
    """Decode a raw Bitcoin transaction into annotated JSON.

    Provide the transaction hex on the command line, point to a file with -f,
    or pipe it to standard input.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)

    if raw_hex is None:
        raw_hex = hex_file.read()
    try:
        click.echo(decoder.decode(raw_hex, strict=strict, indent=indent))
    except exceptions.DecodeError as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    sys.exit(main())  # pragma: no cover; pylint: disable=E1120
