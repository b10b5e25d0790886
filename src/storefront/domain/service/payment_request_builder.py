"""Domain service: Payment Request construction.

Turns a set of cart lines into the summary a payment sheet displays,
and reprices that summary when the customer picks another shipping
method.  Pricing rules (tax rate, shipping tiers) live here so the
coordinator and any presenter agree on them.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.payment import (
    PaymentRequest,
    PaymentSummaryItem,
    ShippingMethod,
)
from storefront.domain.model.value_objects import Money

TAX_RATE = Decimal("0.08")
SHIPPING_LABEL = "Shipping"
TAX_LABEL = "Estimated Tax"

SHIPPING_METHODS: tuple[ShippingMethod, ...] = (
    ShippingMethod("standard", "Standard Delivery", Money.of("0"), "Delivery in 5-7 business days"),
    ShippingMethod("express", "Express Delivery", Money.of("49.99"), "Delivery in 2-3 business days"),
    ShippingMethod("premium", "Premium Delivery", Money.of("99.99"), "Next business day delivery"),
)


@dataclass(frozen=True)
class PaymentConfiguration:
    merchant_identifier: str = "merchant.com.electrocycles.app"
    merchant_display_name: str = "Electro Cycles"
    country_code: str = "US"
    currency_code: str = "USD"
    supported_networks: tuple[str, ...] = ("visa", "masterCard", "amex", "discover")
    required_shipping_fields: tuple[str, ...] = ("name", "postalAddress", "emailAddress", "phoneNumber")
    required_billing_fields: tuple[str, ...] = ("name", "postalAddress")


def line_label(line: CartLine) -> str:
    qty = line.quantity.value
    return f"{line.product.name} x{qty}" if qty > 1 else line.product.name


def subtotal(lines: Sequence[CartLine], currency: str = "USD") -> Money:
    result = Money.zero(currency)
    for line in lines:
        result = result + line.line_total
    return result


class PaymentRequestBuilder:

    def __init__(
        self,
        config: PaymentConfiguration | None = None,
        shipping_methods: Sequence[ShippingMethod] = SHIPPING_METHODS,
        tax_rate: Decimal = TAX_RATE,
    ) -> None:
        if not shipping_methods:
            raise ValidationError("At least one shipping method is required")
        self._config = config or PaymentConfiguration()
        self._shipping_methods = tuple(shipping_methods)
        self._tax_rate = tax_rate

    @property
    def default_shipping_method(self) -> ShippingMethod:
        return self._shipping_methods[0]

    def shipping_method(self, identifier: str) -> ShippingMethod:
        for method in self._shipping_methods:
            if method.identifier == identifier:
                return method
        raise ValidationError(f"Unknown shipping method '{identifier}'")

    def build(self, lines: Sequence[CartLine]) -> PaymentRequest:
        """Build the full request for *lines* at the default shipping tier."""
        return PaymentRequest(
            merchant_identifier=self._config.merchant_identifier,
            country_code=self._config.country_code,
            currency_code=self._config.currency_code,
            supported_networks=self._config.supported_networks,
            summary_items=self.summary_items(lines, self.default_shipping_method),
            shipping_methods=self._shipping_methods,
            required_shipping_fields=self._config.required_shipping_fields,
            required_billing_fields=self._config.required_billing_fields,
        )

    def summary_items(
        self,
        lines: Sequence[CartLine],
        shipping: ShippingMethod,
    ) -> tuple[PaymentSummaryItem, ...]:
        """Per-line items, then shipping, tax and the final total."""
        currency = self._config.currency_code
        items = [PaymentSummaryItem(line_label(line), line.line_total) for line in lines]

        sub = subtotal(lines, currency)
        tax = sub.apply_rate(self._tax_rate)
        items.append(PaymentSummaryItem(SHIPPING_LABEL, shipping.amount))
        items.append(PaymentSummaryItem(TAX_LABEL, tax))
        items.append(self._total_item(sub + shipping.amount + tax))
        return tuple(items)

    def reprice_for_shipping(
        self,
        displayed: Sequence[PaymentSummaryItem],
        lines: Sequence[CartLine],
        identifier: str,
    ) -> tuple[PaymentSummaryItem, ...]:
        """Replace only the final total of *displayed* for a new shipping tier.

        Every other item the customer has already seen is kept as-is.
        """
        if not displayed:
            raise ValidationError("No payment summary to reprice")
        shipping = self.shipping_method(identifier)
        sub = subtotal(lines, self._config.currency_code)
        tax = sub.apply_rate(self._tax_rate)
        return tuple(displayed[:-1]) + (self._total_item(sub + shipping.amount + tax),)

    def _total_item(self, amount: Money) -> PaymentSummaryItem:
        return PaymentSummaryItem(self._config.merchant_display_name, amount, is_final=True)
