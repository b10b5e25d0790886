import logging

import click

from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from storefront.infrastructure.cli.catalog_commands import catalog_list, catalog_show
from storefront.infrastructure.cli.checkout_commands import checkout
from storefront.infrastructure.cli.favorites_commands import (
    favorites_add,
    favorites_clear,
    favorites_list,
    favorites_remove,
    favorites_toggle,
)
from storefront.infrastructure.cli.order_commands import (
    order_cancel,
    order_clear,
    order_list,
    order_remove,
    order_show,
    order_status,
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log store and checkout activity.")
def cli(verbose: bool) -> None:
    """Electro Cycles storefront"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def catalog() -> None:
    """Browse products."""


@cli.group()
def cart() -> None:
    """Manage the cart."""


@cli.group()
def favorites() -> None:
    """Manage favorites."""


@cli.group()
def order() -> None:
    """Manage order history."""


# Register subcommands
catalog.add_command(catalog_list)
catalog.add_command(catalog_show)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
favorites.add_command(favorites_add)
favorites.add_command(favorites_clear)
favorites.add_command(favorites_list)
favorites.add_command(favorites_remove)
favorites.add_command(favorites_toggle)
order.add_command(order_cancel)
order.add_command(order_clear)
order.add_command(order_list)
order.add_command(order_remove)
order.add_command(order_show)
order.add_command(order_status)
cli.add_command(checkout)
