"""Unit tests for the Order aggregate and cart/order lines."""

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.model.value_objects import Money
from tests.fakes import make_product


class TestCartLine:

    def test_line_total(self):
        line = CartLine.of(make_product(price="15.00"), 3)
        assert line.line_total == Money.of("45.00")

    def test_line_id_differs_from_product_id(self):
        line = CartLine.of(make_product())
        assert line.id != line.product_id

    def test_with_quantity_keeps_line_id(self):
        line = CartLine.of(make_product(), 1)
        bumped = line.with_quantity(4)
        assert bumped.id == line.id
        assert bumped.quantity.value == 4
        assert line.quantity.value == 1

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError):
            CartLine.of(make_product(), 0)


class TestOrderFromCart:

    def test_total_is_sum_of_lines(self):
        lines = [
            CartLine.of(make_product("A", "10.00"), 2),
            CartLine.of(make_product("B", "5.00"), 1),
        ]
        order = Order.from_cart(lines)
        assert order.total_price == Money.of("25.00")
        assert order.item_count == 3

    def test_new_order_is_confirmed(self):
        order = Order.from_cart([CartLine.of(make_product())])
        assert order.status == OrderStatus.CONFIRMED

    def test_uses_given_order_date(self):
        when = datetime(2026, 1, 1, tzinfo=timezone.utc)
        order = Order.from_cart([CartLine.of(make_product())], order_date=when)
        assert order.order_date == when

    def test_lines_are_snapshots_of_products(self):
        product = make_product("Bike", "100.00")
        cart_line = CartLine.of(product, 2)
        order = Order.from_cart([cart_line])
        assert order.lines[0].product == product
        assert order.lines[0].quantity == cart_line.quantity
        assert order.lines[0].id != cart_line.id

    def test_empty_lines_rejected(self):
        with pytest.raises(ValidationError, match="at least one line"):
            Order.from_cart([])


class TestOrderImmutability:

    def test_total_is_frozen(self):
        order = Order.from_cart([CartLine.of(make_product())])
        with pytest.raises(FrozenInstanceError):
            order.total_price = Money.of("1")

    def test_with_status_returns_copy(self):
        order = Order.from_cart([CartLine.of(make_product())])
        shipped = order.with_status(OrderStatus.SHIPPED)
        assert shipped.status == OrderStatus.SHIPPED
        assert order.status == OrderStatus.CONFIRMED
        assert shipped.id == order.id
        assert shipped.total_price == order.total_price

    def test_short_id(self):
        order = Order.from_cart([CartLine.of(make_product())])
        assert len(order.short_id) == 8
        assert order.short_id == str(order.id).replace("-", "")[:8].upper()
