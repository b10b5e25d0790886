"""CLI commands for order history."""

from __future__ import annotations

import click

from storefront.application.dto import order_to_dto
from storefront.domain.model.order import OrderStatus
from storefront.infrastructure.bootstrap import AppContext
from storefront.infrastructure.cli.runtime import echo_lines, resolve_order, run_in_context

_STATUS_CHOICES = [status.value for status in OrderStatus]


def _display_order(dto) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.short_id}  (status={dto.status})")
    click.echo(f"Placed:   {dto.order_date}")
    click.echo()
    echo_lines(dto.lines, dto.total, "Order Total")


@click.command("list")
def order_list() -> None:
    """List orders, newest first."""

    async def action(context: AppContext):
        return [order_to_dto(o) for o in context.orders.recent_orders]

    orders = run_in_context(action)

    if not orders:
        click.echo("No orders yet.")
        return

    click.echo(f"{'Order':<10} {'Placed':<22} {'Items':>6} {'Total':>12} {'Status':>12}")
    click.echo("-" * 66)
    for o in orders:
        click.echo(
            f"{o.short_id:<10} {o.order_date:<22} {o.item_count:>6} {o.total:>12} {o.status:>12}"
        )


@click.command("show")
@click.option("--id", "order_ref", required=True, help="Order ID (full or short).")
def order_show(order_ref: str) -> None:
    """Show details of an existing order."""

    async def action(context: AppContext):
        return order_to_dto(resolve_order(context.orders, order_ref))

    _display_order(run_in_context(action))


@click.command("status")
@click.option("--id", "order_ref", required=True, help="Order ID (full or short).")
@click.option("--to", "status", required=True, type=click.Choice(_STATUS_CHOICES), help="New status.")
def order_status(order_ref: str, status: str) -> None:
    """Change an order's status."""

    async def action(context: AppContext):
        order = resolve_order(context.orders, order_ref)
        context.orders.update_status(order.id, OrderStatus(status))
        return order.short_id

    short_id = run_in_context(action)
    click.echo(f"Order #{short_id} is now {status}.")


@click.command("cancel")
@click.option("--id", "order_ref", required=True, help="Order ID (full or short).")
def order_cancel(order_ref: str) -> None:
    """Cancel an order."""

    async def action(context: AppContext):
        order = resolve_order(context.orders, order_ref)
        context.orders.cancel(order.id)
        return order.short_id

    short_id = run_in_context(action)
    click.echo(f"Order #{short_id} cancelled.")


@click.command("remove")
@click.option("--id", "order_ref", required=True, help="Order ID (full or short).")
def order_remove(order_ref: str) -> None:
    """Delete an order from history."""

    async def action(context: AppContext):
        order = resolve_order(context.orders, order_ref)
        context.orders.remove(order.id)
        return order.short_id

    short_id = run_in_context(action)
    click.echo(f"Order #{short_id} removed.")


@click.command("clear")
@click.confirmation_option(prompt="Delete all order history?")
def order_clear() -> None:
    """Delete all order history."""

    async def action(context: AppContext):
        context.orders.clear()

    run_in_context(action)
    click.echo("Order history cleared.")
