"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry display-ready data from the stores to the CLI without
exposing domain internals.  Money is pre-formatted, e.g. "$1,999.00".
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money

DATE_FORMAT = "%Y-%m-%d %H:%M UTC"


def format_date(value: datetime) -> str:
    return value.strftime(DATE_FORMAT)


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    description: str
    price: str
    is_favorite: bool = False
    in_cart: int = 0


@dataclass(frozen=True)
class LineDTO:
    """A cart or order line as displayed to the user."""

    product_name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    lines: list[LineDTO]
    item_count: int
    total: str


@dataclass(frozen=True)
class OrderDTO:
    id: str
    short_id: str
    status: str
    lines: list[LineDTO]
    item_count: int
    total: str
    order_date: str


# --- Mapping ------------------------------------------------------------------


def product_to_dto(product: Product, is_favorite: bool = False, in_cart: int = 0) -> ProductDTO:
    return ProductDTO(
        id=str(product.id),
        name=product.name,
        description=product.description,
        price=str(product.price),
        is_favorite=is_favorite,
        in_cart=in_cart,
    )


def cart_to_dto(lines: tuple[CartLine, ...], total: Money) -> CartDTO:
    return CartDTO(
        lines=[
            LineDTO(
                product_name=line.product.name,
                quantity=line.quantity.value,
                unit_price=str(line.product.price),
                line_total=str(line.line_total),
            )
            for line in lines
        ],
        item_count=sum(line.quantity.value for line in lines),
        total=str(total),
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=str(order.id),
        short_id=order.short_id,
        status=order.status.value,
        lines=[
            LineDTO(
                product_name=line.product.name,
                quantity=line.quantity.value,
                unit_price=str(line.product.price),
                line_total=str(line.line_total),
            )
            for line in order.lines
        ],
        item_count=order.item_count,
        total=str(order.total_price),
        order_date=format_date(order.order_date),
    )
