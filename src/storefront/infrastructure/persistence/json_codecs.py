"""JSON codecs for the three persisted store collections.

Decimals are written as strings and dates as ISO-8601 so the blobs stay
human-readable and lossless.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from uuid import UUID

from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import Order, OrderLine, OrderStatus
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.codec import Codec


def _dumps(raw: object) -> str:
    return json.dumps(raw, indent=2) + "\n"


def _loads_list(text: str) -> list:
    raw = json.loads(text)
    if not isinstance(raw, list):
        raise ValueError(f"Expected a JSON list, got {type(raw).__name__}")
    return raw


# --- Shared product snapshot --------------------------------------------------


def product_to_raw(product: Product) -> dict:
    return {
        "id": str(product.id),
        "name": product.name,
        "description": product.description,
        "price": str(product.price.amount),
        "currency": product.price.currency,
        "image_ref": product.image_ref,
        "asset_image_ref": product.asset_image_ref,
    }


def product_to_domain(raw: dict) -> Product:
    return Product(
        id=UUID(raw["id"]),
        name=raw["name"],
        description=raw.get("description", ""),
        price=Money.of(raw["price"], raw.get("currency", "USD")),
        image_ref=raw.get("image_ref", ""),
        asset_image_ref=raw.get("asset_image_ref"),
    )


# --- Codecs -------------------------------------------------------------------


class CartCodec(Codec[tuple[CartLine, ...]]):

    def encode(self, value: tuple[CartLine, ...]) -> str:
        return _dumps([self._to_raw(line) for line in value])

    def decode(self, text: str) -> tuple[CartLine, ...]:
        return tuple(self._to_domain(raw) for raw in _loads_list(text))

    @staticmethod
    def _to_raw(line: CartLine) -> dict:
        return {
            "id": str(line.id),
            "product": product_to_raw(line.product),
            "quantity": line.quantity.value,
        }

    @staticmethod
    def _to_domain(raw: dict) -> CartLine:
        return CartLine(
            id=UUID(raw["id"]),
            product=product_to_domain(raw["product"]),
            quantity=Quantity(raw["quantity"]),
        )


class FavoritesCodec(Codec[frozenset[UUID]]):

    def encode(self, value: frozenset[UUID]) -> str:
        return _dumps(sorted(str(product_id) for product_id in value))

    def decode(self, text: str) -> frozenset[UUID]:
        return frozenset(UUID(raw) for raw in _loads_list(text))


class OrdersCodec(Codec[tuple[Order, ...]]):

    def encode(self, value: tuple[Order, ...]) -> str:
        return _dumps([self._to_raw(order) for order in value])

    def decode(self, text: str) -> tuple[Order, ...]:
        return tuple(self._to_domain(raw) for raw in _loads_list(text))

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": str(order.id),
            "status": order.status.value,
            "order_date": order.order_date.isoformat(),
            "total_price": str(order.total_price.amount),
            "currency": order.total_price.currency,
            "lines": [
                {
                    "id": str(line.id),
                    "product": product_to_raw(line.product),
                    "quantity": line.quantity.value,
                }
                for line in order.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        order_date = datetime.fromisoformat(raw["order_date"])
        if order_date.tzinfo is None:
            order_date = order_date.replace(tzinfo=timezone.utc)
        return Order(
            id=UUID(raw["id"]),
            lines=tuple(
                OrderLine(
                    id=UUID(line["id"]),
                    product=product_to_domain(line["product"]),
                    quantity=Quantity(line["quantity"]),
                )
                for line in raw["lines"]
            ),
            total_price=Money.of(raw["total_price"], raw.get("currency", "USD")),
            order_date=order_date,
            status=OrderStatus(raw["status"]),
        )
