"""Payment value types exchanged with the payment sink.

The request mirrors what a wallet payment sheet displays: one summary
item per cart line, shipping, tax and a final total.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.model.order import Order
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class PaymentSummaryItem:
    label: str
    amount: Money
    is_final: bool = False


@dataclass(frozen=True)
class ShippingMethod:
    identifier: str
    label: str
    amount: Money
    detail: str = ""


@dataclass(frozen=True)
class PaymentRequest:
    merchant_identifier: str
    country_code: str
    currency_code: str
    supported_networks: tuple[str, ...]
    summary_items: tuple[PaymentSummaryItem, ...]
    shipping_methods: tuple[ShippingMethod, ...] = ()
    required_shipping_fields: tuple[str, ...] = ()
    required_billing_fields: tuple[str, ...] = ()

    @property
    def total(self) -> PaymentSummaryItem:
        return self.summary_items[-1]


@dataclass(frozen=True)
class PaymentToken:
    """Opaque authorization handed back by the payment sheet."""

    data: str
    transaction_id: str = ""


# --- Presentation outcomes ----------------------------------------------------


class PresentationResult:
    """Outcome of showing the payment sheet to the user."""


@dataclass(frozen=True)
class Authorized(PresentationResult):
    token: PaymentToken


@dataclass(frozen=True)
class UserCancelled(PresentationResult):
    pass


@dataclass(frozen=True)
class PresentationFailed(PresentationResult):
    error: str


# --- Charge outcomes ----------------------------------------------------------


class ChargeResult:
    """Outcome of sending an authorized token to the processor."""


@dataclass(frozen=True)
class ChargeSucceeded(ChargeResult):
    pass


@dataclass(frozen=True)
class ChargeFailed(ChargeResult):
    reason: str


# --- Checkout results ---------------------------------------------------------


class CheckoutResult:
    """What a completed checkout flow reports to its caller."""


@dataclass(frozen=True)
class CheckoutSucceeded(CheckoutResult):
    order: Order


@dataclass(frozen=True)
class CheckoutCancelled(CheckoutResult):
    pass


@dataclass(frozen=True)
class CheckoutFailed(CheckoutResult):
    reason: str = field(default="Transaction could not be completed")
