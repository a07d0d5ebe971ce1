"""formrules CLI entry point."""

import logging

import click


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool):
    """formrules: declarative form validation CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
from formrules.cli.form_cmd import check, lint, rules  # noqa: E402

cli.add_command(check)
cli.add_command(lint)
cli.add_command(rules)
