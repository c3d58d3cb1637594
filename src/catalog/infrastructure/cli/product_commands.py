"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from catalog.application.validation import validate_new_product
from catalog.domain.exceptions import DomainException
from catalog.domain.model.product import Product, format_timestamp
from catalog.infrastructure.bootstrap import product_store


def _format_price(price: float | None) -> str:
    return "-" if price is None else f"{price:.2f}"


def _display_product(product: Product) -> None:
    click.echo(f"Product #{product.id}  {product.name}")
    click.echo(f"  Description: {product.description}")
    click.echo(f"  Price:       {_format_price(product.price)}")
    click.echo(f"  Category:    {product.category}")
    click.echo(f"  Stock:       {product.stock}")
    click.echo(f"  Created:     {format_timestamp(product.created_at)}")
    click.echo(f"  Updated:     {format_timestamp(product.updated_at)}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    products = product_store().list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Category':<14} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 60)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<20} {p.category:<14} {_format_price(p.price):>10} {p.stock:>6}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show one product."""
    product = product_store().get(product_id)
    if product is None:
        raise click.ClickException(f"Product #{product_id} not found")
    _display_product(product)


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--description", default=None, help="Free-text description.")
@click.option("--category", default=None, help="Category (defaults to the configured one).")
@click.option("--stock", default=None, type=int, help="Units in stock (default 0).")
def product_add(
    name: str,
    price: str,
    description: str | None,
    category: str | None,
    stock: int | None,
) -> None:
    """Add a new product to the catalog."""
    fields = {
        "name": name,
        "price": price,
        "description": description,
        "category": category,
        "stock": stock,
    }
    try:
        product = product_store().create(validate_new_product(fields))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {_format_price(product.price)}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--description", default=None, help="New description.")
@click.option("--price", default=None, help="New price.")
@click.option("--category", default=None, help="New category.")
@click.option("--stock", default=None, type=int, help="New stock level.")
def product_update(product_id: str, **options: str | int | None) -> None:
    """Update a product. Only the options given are changed."""
    changes = {key: value for key, value in options.items() if value is not None}

    try:
        product = product_store().update(product_id, changes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if product is None:
        raise click.ClickException(f"Product #{product_id} not found")
    click.echo(f"Product #{product.id} updated")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Remove a product from the catalog."""
    product = product_store().delete(product_id)
    if product is None:
        raise click.ClickException(f"Product #{product_id} not found")
    click.echo(f"Product #{product.id} '{product.name}' deleted")
