#!/usr/bin/env python3
"""
RFRAW command line tools - encode raw timings, decode RFRAW strings.
"""

import logging
import sys

import click
import numpy as np

from . import TOLERANCE
from .decoder import RFRAWDecoder
from .encoder import RFRAWEncoder


def _setup_logging(verbose: bool):
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        )


def load_timings(path: str) -> list[int]:
    """Load signed timings from a text file (whitespace or comma separated)."""
    with open(path, encoding="utf-8") as f:
        text = f.read().replace(",", " ")
    return np.array(text.split(), dtype=np.int64).tolist()


@click.command()
@click.argument("timings", nargs=-1, type=int)
@click.option(
    "-i", "--input",
    type=click.Path(exists=True),
    help="Read timings from a text file instead of arguments",
)
@click.option(
    "-t", "--tolerance",
    type=float,
    default=TOLERANCE,
    help="Relative width tolerance (default: 0.2)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
def encode_main(timings: tuple[int, ...], input: str | None, tolerance: float, verbose: bool):
    """
    Encode raw signed timings (microseconds) as RFRAW.

    Examples:

        rfraw-encode -- 500 -1000 500 -1000 500 -9000

        rfraw-encode -i capture.txt
    """
    _setup_logging(verbose)

    if input:
        try:
            timings = load_timings(input)
        except (OSError, ValueError) as e:
            click.echo(f"Error reading timings: {e}", err=True)
            sys.exit(1)

    try:
        encoder = RFRAWEncoder(tolerance=tolerance)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    result = encoder.encode(list(timings))
    if result is None:
        click.echo("Nothing to encode or signal too complex.", err=True)
        sys.exit(1)

    click.echo(result)
    if encoder.dropped_samples:
        click.echo(f"Warning: {encoder.dropped_samples} raw samples dropped", err=True)


@click.command()
@click.argument("data", nargs=-1, required=True)
@click.option(
    "-r", "--repeat",
    is_flag=True,
    help="Expand B0 repeat counts",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Show per-line details",
)
def decode_main(data: tuple[str, ...], repeat: bool, verbose: bool):
    """
    Decode an RFRAW string to signed timings.

    Examples:

        rfraw-decode AAB10201F403E8818155

        rfraw-decode "AA B1 02 01F4 03E8 80 55"
    """
    _setup_logging(verbose)

    decoder = RFRAWDecoder()
    timings = decoder.decode(" ".join(data), expand_repeats=repeat)

    if verbose:
        for line in decoder.lines:
            click.echo(f"  {line}")

    if timings is None:
        click.echo("Invalid RFRAW data.", err=True)
        sys.exit(1)

    click.echo(" ".join(str(t) for t in timings))
