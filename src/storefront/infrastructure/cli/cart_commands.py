"""CLI commands for the signed-in user's cart."""

from __future__ import annotations

import click

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.dto import CartDTO
from storefront.application.remove_cart_item import RemoveCartItemHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    cart_locks,
    cart_repository,
    product_repository,
)
from storefront.infrastructure.cli.context import CliContext, pass_cli_context


@click.command("add")
@click.option("--product", "product_id", required=True, help="Product ID.")
@pass_cli_context
def cart_add(obj: CliContext, product_id: str) -> None:
    """Add one unit of a product to the cart."""
    user_id = obj.require_user_id()
    handler = AddToCartHandler(
        cart_repo=cart_repository(obj.settings),
        product_repo=product_repository(obj.settings),
        locks=cart_locks(obj.settings),
    )

    try:
        line = handler.handle(user_id, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"'{line.product_name}' in cart (qty {line.quantity}, item #{line.item_id})")


@click.command("set")
@click.option("--item", "item_id", required=True, type=int, help="Cart item ID.")
@click.option("--quantity", type=int, default=None, help="New quantity (>= 1).")
@click.option("--delta", type=int, default=None, help="Change quantity by this amount.")
@pass_cli_context
def cart_set(
    obj: CliContext, item_id: int, quantity: int | None, delta: int | None
) -> None:
    """Change the quantity of a cart item."""
    if (quantity is None) == (delta is None):
        raise click.UsageError("Pass exactly one of --quantity or --delta")

    user_id = obj.require_user_id()
    handler = UpdateCartItemHandler(cart_repo=cart_repository(obj.settings))

    try:
        if quantity is not None:
            new_quantity = handler.handle(user_id, item_id, quantity)
        else:
            new_quantity = handler.increment(user_id, item_id, delta)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart item #{item_id} quantity is now {new_quantity}")


@click.command("remove")
@click.option("--item", "item_id", required=True, type=int, help="Cart item ID.")
@pass_cli_context
def cart_remove(obj: CliContext, item_id: int) -> None:
    """Remove an item from the cart."""
    user_id = obj.require_user_id()
    handler = RemoveCartItemHandler(cart_repo=cart_repository(obj.settings))

    try:
        removed = handler.handle(user_id, item_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if removed:
        click.echo(f"Cart item #{item_id} removed.")
    else:
        click.echo(f"Cart item #{item_id} was not in your cart.")


def _display_cart(cart: CartDTO) -> None:
    if cart.is_empty:
        click.echo("Your cart is empty.")
        return

    click.echo(f"  {'Item':<6} {'Product':<20} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*54}")
    for line in cart.lines:
        name = line.product_name or "(unavailable)"
        click.echo(
            f"  {line.item_id:<6} {name:<20} {line.quantity:>5} "
            f"{line.unit_price or '-':>10} {line.subtotal or '-':>10}"
        )
    click.echo(f"  {'-'*54}")
    click.echo(f"  {'Total':<33} {cart.total:>21}")


@click.command("show")
@pass_cli_context
def cart_show(obj: CliContext) -> None:
    """Show the cart at current prices."""
    user_id = obj.require_user_id()
    handler = ShowCartHandler(
        cart_repo=cart_repository(obj.settings),
        product_repo=product_repository(obj.settings),
    )

    try:
        cart = handler.handle(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(cart)
