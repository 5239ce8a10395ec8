"""CLI commands for checkout and order history."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.sales_summary import SalesSummaryHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    cart_repository,
    image_resolver,
    inventory_ledger,
    order_repository,
    product_repository,
    profile_repository,
)
from storefront.infrastructure.cli.context import CliContext, pass_cli_context


def _display_order(dto: OrderDTO, show_images: bool = False) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Ship to:  {dto.name} <{dto.email}>, {dto.address}")
    click.echo(f"Payment:  {dto.payment_method}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
        if show_images and item.image_url:
            click.echo(f"    image: {item.image_url}")
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("place")
@click.option("--payment", "payment_method", default="cod", show_default=True,
              help="Payment method label.")
@click.option("--address", default=None, help="Ship to this address instead of the profile's.")
@pass_cli_context
def order_place(obj: CliContext, payment_method: str, address: str | None) -> None:
    """Place an order for everything in the cart."""
    user_id = obj.require_user_id()
    settings = obj.settings
    handler = PlaceOrderHandler(
        order_repo=order_repository(settings),
        cart_repo=cart_repository(settings),
        product_repo=product_repository(settings),
        profile_repo=profile_repository(settings),
        ledger=inventory_ledger(settings),
        policy=settings.reservation_policy,
    )

    try:
        result = handler.handle(user_id, payment_method=payment_method, shipping_address=address)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Thank you for your order!")
    _display_order(result.order)
    if result.skipped_products:
        click.echo()
        click.echo(
            "Note: stock could not be reserved for: " + ", ".join(result.skipped_products)
        )


@click.command("history")
@click.option("--status", "status_filter", default="All", show_default=True,
              help="All, Unpaid, To ship, Shipped, Delivered or Pending.")
@pass_cli_context
def order_history(obj: CliContext, status_filter: str) -> None:
    """List your orders, newest first."""
    user_id = obj.require_user_id()
    handler = ListOrdersHandler(
        order_repo=order_repository(obj.settings),
        product_repo=product_repository(obj.settings),
        images=image_resolver(obj.settings),
    )

    try:
        orders = handler.handle(user_id, status_filter)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    for i, dto in enumerate(orders):
        if i:
            click.echo()
        _display_order(dto, show_images=True)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@pass_cli_context
def order_show(obj: CliContext, order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository(obj.settings))

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--to", "status", required=True, help="New status (e.g. 'To ship').")
@pass_cli_context
def order_status(obj: CliContext, order_id: int, status: str) -> None:
    """Move an order to its next fulfillment status."""
    handler = UpdateOrderStatusHandler(order_repo=order_repository(obj.settings))

    try:
        dto = handler.handle(order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} is now {dto.status}.")


@click.command("summary")
@pass_cli_context
def order_summary(obj: CliContext) -> None:
    """Show order count and total sales."""
    handler = SalesSummaryHandler(order_repo=order_repository(obj.settings))

    try:
        summary = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Orders:      {summary.order_count}")
    click.echo(f"Total sales: {summary.total_sales}")
    for status, count in summary.by_status.items():
        click.echo(f"  {status:<10} {count:>5}")
