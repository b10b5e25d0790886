"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Each store is built
exactly once per context, so a process that opens one context has one
instance of each.
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator

from storefront.application.cart_store import CartStore
from storefront.application.checkout_coordinator import (
    DEFAULT_CHARGE_TIMEOUT,
    CheckoutCoordinator,
)
from storefront.application.favorites_store import FavoritesStore
from storefront.application.orders_store import OrdersStore
from storefront.domain.gateway.payment_sink import PaymentSink
from storefront.domain.model.catalog import Catalog
from storefront.domain.repository.key_value_storage import KeyValueStorage
from storefront.domain.service.payment_request_builder import (
    PaymentConfiguration,
    PaymentRequestBuilder,
)
from storefront.infrastructure.payment.simulated_payment_sink import (
    DEFAULT_CHARGE_DELAY,
    SimulatedPaymentSink,
    auto_authorize,
)
from storefront.infrastructure.persistence.json_codecs import (
    CartCodec,
    FavoritesCodec,
    OrdersCodec,
)
from storefront.infrastructure.persistence.json_key_value_storage import (
    JsonFileKeyValueStorage,
)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def data_dir() -> Path:
    override = os.environ.get("STOREFRONT_DATA_DIR")
    return Path(override) if override else _DEFAULT_DATA_DIR


def charge_delay() -> float:
    return float(os.environ.get("STOREFRONT_CHARGE_DELAY", DEFAULT_CHARGE_DELAY))


def default_payment_sink() -> SimulatedPaymentSink:
    return SimulatedPaymentSink(presenter=auto_authorize, charge_delay=charge_delay())


@dataclass
class AppContext:
    catalog: Catalog
    cart: CartStore
    favorites: FavoritesStore
    orders: OrdersStore
    checkout: CheckoutCoordinator

    @property
    def stores(self) -> tuple[CartStore, FavoritesStore, OrdersStore]:
        return (self.cart, self.favorites, self.orders)

    async def load(self) -> None:
        for store in self.stores:
            await store.load()

    async def flush(self) -> None:
        for store in self.stores:
            await store.flush()

    def close(self) -> None:
        for store in self.stores:
            store.close()


def build_context(
    storage: KeyValueStorage | None = None,
    payment_sink: PaymentSink | None = None,
    catalog: Catalog | None = None,
    charge_timeout: float | None = DEFAULT_CHARGE_TIMEOUT,
) -> AppContext:
    storage = storage or JsonFileKeyValueStorage(data_dir())
    catalog = catalog or Catalog()
    cart = CartStore(storage, CartCodec())
    favorites = FavoritesStore(storage, FavoritesCodec(), catalog)
    orders = OrdersStore(storage, OrdersCodec())
    checkout = CheckoutCoordinator(
        cart_store=cart,
        orders_store=orders,
        payment_sink=payment_sink or default_payment_sink(),
        request_builder=PaymentRequestBuilder(PaymentConfiguration()),
        charge_timeout=charge_timeout,
    )
    return AppContext(
        catalog=catalog,
        cart=cart,
        favorites=favorites,
        orders=orders,
        checkout=checkout,
    )


@asynccontextmanager
async def open_context(
    storage: KeyValueStorage | None = None,
    payment_sink: PaymentSink | None = None,
) -> AsyncIterator[AppContext]:
    """Build and load the stores; flush pending writes on exit."""
    context = build_context(storage=storage, payment_sink=payment_sink)
    await context.load()
    try:
        yield context
    finally:
        await context.flush()
        context.close()
