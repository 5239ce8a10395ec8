"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository
from storefront.infrastructure.cli.context import CliContext, pass_cli_context


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", default=0, type=click.IntRange(min=0), help="Units in stock.")
@click.option("--description", default="", help="Product description.")
@click.option("--image", "image_url", default=None, help="Image URL or storage path.")
@pass_cli_context
def product_add(
    obj: CliContext,
    name: str,
    price: str,
    stock: int,
    description: str,
    image_url: str | None,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository(obj.settings))

    try:
        product = handler.handle(
            name=name,
            price=price,
            stock=stock,
            description=description,
            image_url=image_url,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.price} "
        f"(stock {product.stock})"
    )


@click.command("list")
@pass_cli_context
def product_list(obj: CliContext) -> None:
    """List all products in the catalog."""
    try:
        products = product_repository(obj.settings).list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 46)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<20} {str(p.price):>10} {p.stock:>7}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--description", default=None, help="New description.")
@pass_cli_context
def product_update(
    obj: CliContext,
    product_id: str,
    name: str | None,
    price: str | None,
    description: str | None,
) -> None:
    """Edit a product's name, price or description."""
    handler = UpdateProductHandler(product_repo=product_repository(obj.settings))

    try:
        product = handler.handle(
            product_id=product_id, name=name, price=price, description=description
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} updated: '{product.name}' at {product.price}")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@pass_cli_context
def product_delete(obj: CliContext, product_id: str) -> None:
    """Remove a product from the catalog (carts keep an orphaned line)."""
    try:
        product_repository(obj.settings).delete(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted.")
