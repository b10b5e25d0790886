"""CartLine value: one product and how many of it the customer wants."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from uuid import UUID, uuid4

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class CartLine:
    """A single cart entry.

    ``id`` identifies the line itself and is distinct from the product id.
    Quantity changes produce a new line with the same ``id``.
    """

    product: Product
    quantity: Quantity
    id: UUID = field(default_factory=uuid4)

    @property
    def product_id(self) -> UUID:
        return self.product.id

    @property
    def line_total(self) -> Money:
        return self.product.price * self.quantity.value

    def with_quantity(self, quantity: int) -> CartLine:
        return replace(self, quantity=Quantity(quantity))

    @staticmethod
    def of(product: Product, quantity: int = 1) -> CartLine:
        return CartLine(product=product, quantity=Quantity(quantity))
