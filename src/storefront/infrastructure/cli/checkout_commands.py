"""CLI checkout: a console stand-in for the payment sheet."""

from __future__ import annotations

import click

from storefront.domain.gateway.payment_sink import ShippingMethodHandler
from storefront.domain.model.payment import (
    Authorized,
    CheckoutCancelled,
    CheckoutFailed,
    CheckoutSucceeded,
    PaymentRequest,
    PaymentSummaryItem,
    PresentationResult,
    UserCancelled,
)
from storefront.domain.service.payment_request_builder import SHIPPING_METHODS
from storefront.infrastructure.bootstrap import AppContext, charge_delay
from storefront.infrastructure.cli.runtime import run_in_context
from storefront.infrastructure.payment.simulated_payment_sink import (
    Presenter,
    SimulatedPaymentSink,
    new_token,
)


def _echo_summary(items: tuple[PaymentSummaryItem, ...]) -> None:
    for item in items:
        if item.is_final:
            click.echo(f"  {'-'*41}")
            click.echo(f"  {'Pay ' + item.label:<27} {str(item.amount):>14}")
        else:
            click.echo(f"  {item.label:<27} {str(item.amount):>14}")


def console_presenter(shipping: str, assume_yes: bool) -> Presenter:
    """Build a presenter that shows the summary and asks for authorization."""

    async def present(
        request: PaymentRequest,
        on_shipping_method_selected: ShippingMethodHandler,
    ) -> PresentationResult:
        click.echo(f"Pay {request.merchant_identifier} ({request.currency_code})")
        _echo_summary(request.summary_items)

        if shipping != request.shipping_methods[0].identifier:
            items = on_shipping_method_selected(shipping)
            method = next(m for m in request.shipping_methods if m.identifier == shipping)
            click.echo()
            click.echo(f"Shipping changed to {method.label} ({method.detail})")
            click.echo(f"  {'New total':<27} {str(items[-1].amount):>14}")

        if not assume_yes and not click.confirm("Authorize payment?", default=True):
            return UserCancelled()
        return Authorized(new_token())

    return present


@click.command("checkout")
@click.option(
    "--shipping",
    default=SHIPPING_METHODS[0].identifier,
    show_default=True,
    type=click.Choice([m.identifier for m in SHIPPING_METHODS]),
    help="Shipping method.",
)
@click.option("--yes", "assume_yes", is_flag=True, default=False, help="Authorize without prompting.")
@click.option("--decline", is_flag=True, default=False, help="Simulate a declined charge.")
def checkout(shipping: str, assume_yes: bool, decline: bool) -> None:
    """Pay for the cart and place an order."""
    sink = SimulatedPaymentSink(
        presenter=console_presenter(shipping, assume_yes),
        charge_delay=charge_delay(),
        approve=not decline,
    )

    async def action(context: AppContext):
        return await context.checkout.start_payment_from_cart()

    result = run_in_context(action, payment_sink=sink)

    if isinstance(result, CheckoutSucceeded):
        order = result.order
        click.echo(f"Order #{order.short_id} placed  (total={order.total_price})")
    elif isinstance(result, CheckoutCancelled):
        click.echo("Payment cancelled; your cart is unchanged.")
    elif isinstance(result, CheckoutFailed):
        raise click.ClickException(f"Payment failed: {result.reason}")
