"""CLI commands for the shopping cart."""

from __future__ import annotations

import click

from storefront.application.dto import cart_to_dto
from storefront.infrastructure.bootstrap import AppContext
from storefront.infrastructure.cli.runtime import echo_lines, resolve_product, run_in_context


@click.command("add")
@click.option("--product", "product_ref", required=True, help="Product name or ID.")
@click.option("--quantity", default=1, show_default=True, type=click.IntRange(min=1), help="Units to add.")
def cart_add(product_ref: str, quantity: int) -> None:
    """Add a product to the cart."""

    async def action(context: AppContext):
        product = resolve_product(context.catalog, product_ref)
        context.cart.add(product, quantity)
        return product, context.cart.quantity(product.id)

    product, in_cart = run_in_context(action)
    click.echo(f"{quantity} x {product.name} added to your cart ({in_cart} in cart).")


@click.command("remove")
@click.option("--product", "product_ref", required=True, help="Product name or ID.")
def cart_remove(product_ref: str) -> None:
    """Remove a product from the cart."""

    async def action(context: AppContext):
        product = resolve_product(context.catalog, product_ref)
        context.cart.remove(product.id)
        return product

    product = run_in_context(action)
    click.echo(f"{product.name} removed from your cart.")


@click.command("update")
@click.option("--product", "product_ref", required=True, help="Product name or ID.")
@click.option("--quantity", required=True, type=int, help="New quantity; 0 removes the line.")
def cart_update(product_ref: str, quantity: int) -> None:
    """Set the quantity of a product already in the cart."""

    async def action(context: AppContext):
        product = resolve_product(context.catalog, product_ref)
        context.cart.update_quantity(product.id, quantity)
        return product, context.cart.quantity(product.id)

    product, in_cart = run_in_context(action)
    click.echo(f"{product.name}: {in_cart} in cart.")


@click.command("show")
def cart_show() -> None:
    """Show the cart contents and total."""

    async def action(context: AppContext):
        return cart_to_dto(context.cart.lines, context.cart.total_price)

    dto = run_in_context(action)

    if not dto.lines:
        click.echo("Your cart is empty.")
        return

    click.echo(f"Cart ({dto.item_count} items)")
    click.echo()
    echo_lines(dto.lines, dto.total, "Cart Total")


@click.command("clear")
def cart_clear() -> None:
    """Empty the cart."""

    async def action(context: AppContext):
        context.cart.clear()

    run_in_context(action)
    click.echo("Cart cleared.")
