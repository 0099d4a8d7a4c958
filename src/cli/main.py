"""Entry point for the ``grab-rig`` command."""

import click

from cli.commands.rig import rig
from cli.utils.config import CLIConfig, set_config
from grab_rig.config import cfg, configure_logging


@click.group()
@click.option(
    "--format", "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default=None,
    help="Output format (defaults to GRAB_RIG_FORMAT or text)."
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show debug logs."
)
def cli(output_format, verbose):
    """grab-rig - reconcile grab interaction rigs on template hierarchies."""
    set_config(CLIConfig(format=output_format or cfg.output_format, verbose=verbose))
    configure_logging("DEBUG" if verbose else None)


cli.add_command(rig)


def main():
    cli()


if __name__ == "__main__":
    main()
