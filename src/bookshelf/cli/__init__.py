# ABOUTME: CLI package for Bookshelf, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click

from bookshelf.cli.commands import (
    add_cmd,
    info_cmd,
    ls_cmd,
    progress_cmd,
    search_cmd,
    set_cmd,
    stats_cmd,
)


@click.group()
@click.version_option(package_name="bookshelf-notes")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """Bookshelf - track reading progress in markdown book notes."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


cli.add_command(search_cmd.search)
cli.add_command(add_cmd.add)
cli.add_command(add_cmd.new)
cli.add_command(progress_cmd.progress)
cli.add_command(set_cmd.set_fields)
cli.add_command(info_cmd.info)
cli.add_command(ls_cmd.ls)
cli.add_command(stats_cmd.stats)
