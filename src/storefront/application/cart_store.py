"""Cart store: the customer's shopping cart.

Holds at most one line per product; adding a product already in the
cart increases that line's quantity.
"""

from __future__ import annotations

import logging
from uuid import UUID

from storefront.application.persistent_store import PersistentStore
from storefront.domain.model.cart import CartLine
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.codec import Codec
from storefront.domain.repository.key_value_storage import KeyValueStorage

logger = logging.getLogger(__name__)


class CartStore(PersistentStore[tuple[CartLine, ...]]):

    storage_key = "cart.store.items"
    event_name = "cart.store.changed"

    def __init__(
        self,
        storage: KeyValueStorage,
        codec: Codec[tuple[CartLine, ...]],
    ) -> None:
        super().__init__(storage, codec)
        self._lines: list[CartLine] = []

    # --- Queries --------------------------------------------------------------

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return tuple(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def item_count(self) -> int:
        return sum(line.quantity.value for line in self._lines)

    @property
    def total_price(self) -> Money:
        total = Money.zero()
        for line in self._lines:
            total = total + line.line_total
        return total

    def quantity(self, product_id: UUID) -> int:
        index = self._index_of(product_id)
        return 0 if index is None else self._lines[index].quantity.value

    # --- Mutations ------------------------------------------------------------

    def add(self, product: Product, quantity: int = 1) -> None:
        if quantity <= 0:
            logger.debug("Ignoring add of %s with quantity %d", product.name, quantity)
            return

        self._require_owner_loop()
        index = self._index_of(product.id)
        if index is None:
            self._lines.append(CartLine.of(product, quantity))
        else:
            line = self._lines[index]
            self._lines[index] = line.with_quantity(line.quantity.value + quantity)
        logger.debug("Cart: added %d x %s", quantity, product.name)
        self._schedule_save()

    def remove(self, product_id: UUID) -> None:
        self._require_owner_loop()
        self._lines = [line for line in self._lines if line.product_id != product_id]
        self._schedule_save()

    def update_quantity(self, product_id: UUID, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove(product_id)
            return

        index = self._index_of(product_id)
        if index is None:
            return
        self._require_owner_loop()
        self._lines[index] = self._lines[index].with_quantity(quantity)
        self._schedule_save()

    def clear(self) -> None:
        self._require_owner_loop()
        self._lines = []
        self._schedule_save()

    # --- PersistentStore hooks ------------------------------------------------

    def _empty(self) -> tuple[CartLine, ...]:
        return ()

    def _snapshot(self) -> tuple[CartLine, ...]:
        return tuple(self._lines)

    def _restore(self, value: tuple[CartLine, ...]) -> None:
        self._lines = list(value)

    # --- Internal helpers -----------------------------------------------------

    def _index_of(self, product_id: UUID) -> int | None:
        for i, line in enumerate(self._lines):
            if line.product_id == product_id:
                return i
        return None
