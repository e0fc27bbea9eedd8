import logging

import click

from geocheckout.infrastructure.cli.checkout_commands import pay
from geocheckout.infrastructure.cli.localization_commands import locate, quote
from geocheckout.infrastructure.cli.security_commands import guard


@click.group()
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity.",
)
def cli(log_level: str) -> None:
    """Geo-localized checkout"""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
cli.add_command(locate)
cli.add_command(quote)
cli.add_command(pay)
cli.add_command(guard)
