"""Helpers shared by the CLI commands."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar
from uuid import UUID

import click

from storefront.application.orders_store import OrdersStore
from storefront.domain.exceptions import DomainException, EntityNotFoundError
from storefront.domain.gateway.payment_sink import PaymentSink
from storefront.domain.model.catalog import Catalog
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.infrastructure.bootstrap import AppContext, open_context

T = TypeVar("T")


def run_in_context(
    action: Callable[[AppContext], Awaitable[T]],
    payment_sink: PaymentSink | None = None,
) -> T:
    """Open the app context, run *action* on its event loop, flush, close."""

    async def _main() -> T:
        async with open_context(payment_sink=payment_sink) as context:
            return await action(context)

    try:
        return asyncio.run(_main())
    except DomainException as exc:
        raise click.ClickException(str(exc))


def resolve_product(catalog: Catalog, ref: str) -> Product:
    """Find a product by exact id or case-insensitive name."""
    try:
        product = catalog.get_by_id(UUID(ref))
    except ValueError:
        product = catalog.get_by_name(ref)
    if product is None:
        raise EntityNotFoundError(f"Product not found: '{ref}'")
    return product


def resolve_order(orders: OrdersStore, ref: str) -> Order:
    """Find an order by full id or by the 8-character short id."""
    wanted = ref.strip().upper()
    for order in orders.orders:
        if str(order.id).upper() == wanted or order.short_id == wanted:
            return order
    raise EntityNotFoundError(f"Order #{ref} not found")


def echo_lines(lines, total: str, total_label: str = "Total") -> None:
    """Shared table layout for cart and order lines."""
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*51}")
    for line in lines:
        click.echo(
            f"  {line.product_name:<20} {line.quantity:>5} {line.unit_price:>12} {line.line_total:>12}"
        )
    click.echo(f"  {'-'*51}")
    click.echo(f"  {total_label:<27} {total:>24}")
