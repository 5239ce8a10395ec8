import click

from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_remove,
    cart_set,
    cart_show,
)
from storefront.infrastructure.cli.context import CliContext
from storefront.infrastructure.cli.order_commands import (
    order_history,
    order_place,
    order_show,
    order_status,
    order_summary,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_update,
)
from storefront.infrastructure.cli.profile_commands import profile_set
from storefront.infrastructure.config import Settings
from storefront.infrastructure.logging import configure_logging


@click.group()
@click.option("--user", "user_id", envvar="STOREFRONT_USER", default=None,
              help="ID of the signed-in user.")
@click.pass_context
def cli(ctx: click.Context, user_id: str | None) -> None:
    """Storefront — cart, checkout and order history"""
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        raise click.ClickException(str(exc))

    configure_logging(settings.log_level)
    ctx.obj = CliContext(settings=settings, user_id=user_id)


@cli.group()
def cart() -> None:
    """Manage your cart."""


@cli.group()
def order() -> None:
    """Check out and browse orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def profile() -> None:
    """Manage your profile."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_remove)
cart.add_command(cart_set)
cart.add_command(cart_show)
order.add_command(order_history)
order.add_command(order_place)
order.add_command(order_show)
order.add_command(order_status)
order.add_command(order_summary)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_update)
profile.add_command(profile_set)
