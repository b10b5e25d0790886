"""CLI commands for browsing the catalog."""

from __future__ import annotations

import click

from storefront.application.dto import product_to_dto
from storefront.infrastructure.bootstrap import AppContext
from storefront.infrastructure.cli.runtime import resolve_product, run_in_context


@click.command("list")
def catalog_list() -> None:
    """List all products in the catalog."""

    async def action(context: AppContext):
        return [
            product_to_dto(
                p,
                is_favorite=context.favorites.is_favorite(p.id),
                in_cart=context.cart.quantity(p.id),
            )
            for p in context.catalog.products()
        ]

    products = run_in_context(action)

    click.echo(f"{'':<2}{'Name':<20} {'Price':>12} {'In cart':>8}")
    click.echo("-" * 44)
    for p in products:
        mark = "*" if p.is_favorite else " "
        click.echo(f"{mark:<2}{p.name:<20} {p.price:>12} {p.in_cart:>8}")


@click.command("show")
@click.option("--product", "product_ref", required=True, help="Product name or ID.")
def catalog_show(product_ref: str) -> None:
    """Show details of one product."""

    async def action(context: AppContext):
        product = resolve_product(context.catalog, product_ref)
        return product_to_dto(
            product,
            is_favorite=context.favorites.is_favorite(product.id),
            in_cart=context.cart.quantity(product.id),
        )

    dto = run_in_context(action)

    click.echo(f"{dto.name}  {dto.price}")
    click.echo(dto.description)
    click.echo(f"ID:        {dto.id}")
    click.echo(f"Favorite:  {'yes' if dto.is_favorite else 'no'}")
    click.echo(f"In cart:   {dto.in_cart}")
