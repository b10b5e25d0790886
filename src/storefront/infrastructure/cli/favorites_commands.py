"""CLI commands for favorites."""

from __future__ import annotations

import click

from storefront.application.dto import product_to_dto
from storefront.infrastructure.bootstrap import AppContext
from storefront.infrastructure.cli.runtime import resolve_product, run_in_context


@click.command("add")
@click.option("--product", "product_ref", required=True, help="Product name or ID.")
def favorites_add(product_ref: str) -> None:
    """Mark a product as a favorite."""

    async def action(context: AppContext):
        product = resolve_product(context.catalog, product_ref)
        context.favorites.add(product)
        return product

    product = run_in_context(action)
    click.echo(f"{product.name} added to favorites.")


@click.command("remove")
@click.option("--product", "product_ref", required=True, help="Product name or ID.")
def favorites_remove(product_ref: str) -> None:
    """Remove a product from favorites."""

    async def action(context: AppContext):
        product = resolve_product(context.catalog, product_ref)
        context.favorites.remove(product)
        return product

    product = run_in_context(action)
    click.echo(f"{product.name} removed from favorites.")


@click.command("toggle")
@click.option("--product", "product_ref", required=True, help="Product name or ID.")
def favorites_toggle(product_ref: str) -> None:
    """Flip a product's favorite state."""

    async def action(context: AppContext):
        product = resolve_product(context.catalog, product_ref)
        return product, context.favorites.toggle(product)

    product, now_favorite = run_in_context(action)
    state = "added to" if now_favorite else "removed from"
    click.echo(f"{product.name} {state} favorites.")


@click.command("list")
def favorites_list() -> None:
    """List favorite products."""

    async def action(context: AppContext):
        return [product_to_dto(p, is_favorite=True) for p in context.favorites.favorite_products]

    products = run_in_context(action)

    if not products:
        click.echo("No favorites yet.")
        return

    click.echo(f"{'Name':<20} {'Price':>12}")
    click.echo("-" * 33)
    for p in products:
        click.echo(f"{p.name:<20} {p.price:>12}")


@click.command("clear")
def favorites_clear() -> None:
    """Remove every favorite."""

    async def action(context: AppContext):
        context.favorites.clear()

    run_in_context(action)
    click.echo("Favorites cleared.")
