"""Order aggregate: a frozen record of a completed checkout.

Orders are created once from cart lines and never change afterwards,
except for their status.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable
from uuid import UUID, uuid4

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    CONFIRMED = "Confirmed"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


@dataclass(frozen=True)
class OrderLine:
    """Snapshot of a cart line at checkout time.

    Holds a full copy of the product, so later catalog changes never
    alter the name or price shown in order history.
    """

    product: Product
    quantity: Quantity
    id: UUID = field(default_factory=uuid4)

    @property
    def line_total(self) -> Money:
        return self.product.price * self.quantity.value


@dataclass(frozen=True)
class Order:
    """Aggregate root for placed orders.

    Use ``Order.from_cart()`` for new orders. The plain constructor is
    what the codec uses to reconstitute persisted orders, so it does not
    recompute ``total_price``.
    """

    lines: tuple[OrderLine, ...]
    total_price: Money
    order_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    status: OrderStatus = OrderStatus.CONFIRMED
    id: UUID = field(default_factory=uuid4)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def from_cart(
        cart_lines: Iterable[CartLine],
        order_date: datetime | None = None,
    ) -> Order:
        """Snapshot *cart_lines* into a new confirmed order."""
        cart_lines = list(cart_lines)
        if not cart_lines:
            raise ValidationError("Order must contain at least one line")

        lines = tuple(
            OrderLine(product=line.product, quantity=line.quantity)
            for line in cart_lines
        )
        total = Money.zero(cart_lines[0].product.price.currency)
        for line in lines:
            total = total + line.line_total

        return Order(
            lines=lines,
            total_price=total,
            order_date=order_date or datetime.now(timezone.utc),
        )

    # --- State transitions ----------------------------------------------------

    def with_status(self, status: OrderStatus) -> Order:
        return replace(self, status=status)

    # --- Computed properties --------------------------------------------------

    @property
    def item_count(self) -> int:
        return sum(line.quantity.value for line in self.lines)

    @property
    def short_id(self) -> str:
        return self.id.hex[:8].upper()
