#!/usr/bin/env python3
"""
cli.py

Command-line interface for exploring a pprof profile as an aggregated call tree.
"""
import logging

import click
from rich import print
from rich.console import Console
from rich.logging import RichHandler

from diago.errors import ProfileError
from diago.pprof import read_profile
from diago.profile import Profile
from diago.render import render_tree
from diago.types import MeasurementMode

MODES = [mode.value for mode in MeasurementMode]


@click.command()
@click.argument("file", type=click.Path(dir_okay=False))
@click.option(
    "--mode", type=click.Choice(MODES), default=MeasurementMode.DEFAULT.value,
    envvar="DIAGO_MODE", show_default=True,
    help="Measurement to show: cpu time, heap allocated or heap in use",
)
@click.option(
    "--by-line", is_flag=True, default=False,
    help="Aggregate per line of code instead of per function",
)
@click.option(
    "--filter", "search", default="", envvar="DIAGO_FILTER",
    help="Only show calls whose function or file contains this text",
)
@click.option("--verbose", "-v", is_flag=True, help="Log data anomalies found in the profile")
def main(file, mode, by_line, search, verbose):
    """
    Print the call tree of a pprof CPU or heap profile.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )

    try:
        decoded = read_profile(file)
        profile = Profile.from_pprof(decoded, MeasurementMode(mode))
    except ProfileError as exc:
        click.echo(f"error ({exc.kind}): {exc}", err=True)
        raise SystemExit(1)

    tree = profile.build_tree(file, aggregate_by_function=not by_line, search=search)
    if search and not tree.root.visible:
        click.echo(f"No calls matching {search!r}.", err=True)
    print(render_tree(profile, tree))


if __name__ == "__main__":
    main()
