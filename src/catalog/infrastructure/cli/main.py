import click
import uvicorn

from catalog.config import get_settings
from catalog.infrastructure.api.app import create_app
from catalog.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from catalog.infrastructure.logging import setup_logging


@click.group()
def cli() -> None:
    """Product catalog service"""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (default from settings).")
@click.option("--port", default=None, type=int, help="Bind port (default from settings).")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)


def main() -> None:
    setup_logging()
    cli()
