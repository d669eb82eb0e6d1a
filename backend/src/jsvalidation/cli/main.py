"""jsvalidation CLI entry point."""

import logging
import os

import click


@click.group()
@click.option(
    "--log-level",
    default=lambda: os.environ.get("JSVALIDATION_LOG_LEVEL", "WARNING"),
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (default: $JSVALIDATION_LOG_LEVEL or WARNING).",
)
def cli(log_level: str):
    """jsvalidation: translate server validation rules for the browser."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
from jsvalidation.cli.rules_cmd import messages, rules, translate  # noqa: E402

cli.add_command(rules)
cli.add_command(translate)
cli.add_command(messages)
