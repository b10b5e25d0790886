"""Orders store: the customer's order history."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Iterable
from uuid import UUID

from storefront.application.persistent_store import PersistentStore
from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.repository.codec import Codec
from storefront.domain.repository.key_value_storage import KeyValueStorage

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OrdersStore(PersistentStore[tuple[Order, ...]]):

    storage_key = "orders.store.items"
    event_name = "orders.store.changed"

    def __init__(
        self,
        storage: KeyValueStorage,
        codec: Codec[tuple[Order, ...]],
        clock: Clock = utc_now,
    ) -> None:
        super().__init__(storage, codec)
        self._clock = clock
        self._orders: list[Order] = []

    # --- Queries --------------------------------------------------------------

    @property
    def orders(self) -> tuple[Order, ...]:
        """All orders in the order they were placed."""
        return tuple(self._orders)

    @property
    def recent_orders(self) -> list[Order]:
        """Newest first; orders with equal dates keep insertion order."""
        return sorted(self._orders, key=lambda o: o.order_date, reverse=True)

    @property
    def count(self) -> int:
        return len(self._orders)

    @property
    def is_empty(self) -> bool:
        return not self._orders

    def get_by_id(self, order_id: UUID) -> Order | None:
        for order in self._orders:
            if order.id == order_id:
                return order
        return None

    # --- Mutations ------------------------------------------------------------

    def place_order(self, lines: Iterable[CartLine]) -> Order:
        """Snapshot *lines* into a new confirmed order and record it."""
        order = Order.from_cart(lines, order_date=self._clock())
        self._require_owner_loop()
        self._orders.append(order)
        logger.info("Placed order %s for %s", order.short_id, order.total_price)
        self._schedule_save()
        return order

    def add(self, order: Order) -> None:
        self._require_owner_loop()
        self._orders.append(order)
        self._schedule_save()

    def update_status(self, order_id: UUID, status: OrderStatus) -> None:
        for i, order in enumerate(self._orders):
            if order.id == order_id:
                self._require_owner_loop()
                self._orders[i] = order.with_status(status)
                logger.debug("Order %s is now %s", order.short_id, status.value)
                self._schedule_save()
                return

    def cancel(self, order_id: UUID) -> None:
        self.update_status(order_id, OrderStatus.CANCELLED)

    def remove(self, order_id: UUID) -> None:
        self._require_owner_loop()
        self._orders = [o for o in self._orders if o.id != order_id]
        self._schedule_save()

    def clear(self) -> None:
        self._require_owner_loop()
        self._orders = []
        self._schedule_save()

    # --- PersistentStore hooks ------------------------------------------------

    def _empty(self) -> tuple[Order, ...]:
        return ()

    def _snapshot(self) -> tuple[Order, ...]:
        return tuple(self._orders)

    def _restore(self, value: tuple[Order, ...]) -> None:
        self._orders = list(value)
