"""Tests for the OrdersStore."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeClock, InMemoryKeyValueStorage, build_orders, make_product, run


async def _settle(store):
    await store.flush()
    store.close()


def _lines(price: str = "10.00", qty: int = 1) -> list[CartLine]:
    return [CartLine.of(make_product(price=price), qty)]


class TestPlaceOrder:

    def test_returns_and_records_order(self):
        async def scenario():
            orders = build_orders()
            order = orders.place_order(_lines("10.00", 2))
            await _settle(orders)
            return orders, order

        orders, order = run(scenario())
        assert orders.orders == (order,)
        assert order.total_price == Money.of("20.00")
        assert order.status == OrderStatus.CONFIRMED

    def test_order_date_comes_from_clock(self):
        clock = FakeClock(datetime(2026, 2, 4, 9, 30, tzinfo=timezone.utc))

        async def scenario():
            orders = build_orders(clock=clock)
            order = orders.place_order(_lines())
            await _settle(orders)
            return order

        assert run(scenario()).order_date == datetime(2026, 2, 4, 9, 30, tzinfo=timezone.utc)

    def test_price_snapshot_survives_catalog_change(self):
        async def scenario():
            orders = build_orders()
            product = make_product("Bike", "100.00")
            order = orders.place_order([CartLine.of(product)])
            await _settle(orders)
            return order

        order = run(scenario())
        # A repriced catalog product is a different value; the order keeps its own copy.
        assert order.lines[0].product.price == Money.of("100.00")
        assert order.total_price == Money.of("100.00")

    def test_empty_lines_rejected(self):
        orders = build_orders()
        with pytest.raises(ValidationError):
            orders.place_order([])
        assert orders.is_empty
        orders.close()


class TestStatusUpdates:

    def test_update_status(self):
        async def scenario():
            orders = build_orders()
            order = orders.place_order(_lines())
            orders.update_status(order.id, OrderStatus.SHIPPED)
            await _settle(orders)
            return orders.get_by_id(order.id)

        assert run(scenario()).status == OrderStatus.SHIPPED

    def test_cancel_is_status_update(self):
        async def scenario():
            orders = build_orders()
            order = orders.place_order(_lines())
            orders.cancel(order.id)
            await _settle(orders)
            return orders.get_by_id(order.id)

        cancelled = run(scenario())
        assert cancelled.status == OrderStatus.CANCELLED
        assert cancelled.total_price == Money.of("10.00")

    def test_unknown_order_is_a_no_op(self):
        async def scenario():
            storage = InMemoryKeyValueStorage()
            orders = build_orders(storage)
            orders.place_order(_lines())
            await orders.flush()
            writes = storage.write_count
            orders.update_status(uuid4(), OrderStatus.DELIVERED)
            await _settle(orders)
            return orders, storage.write_count - writes

        orders, extra_writes = run(scenario())
        assert orders.orders[0].status == OrderStatus.CONFIRMED
        assert extra_writes == 0


class TestRemoveAndClear:

    def test_remove(self):
        async def scenario():
            orders = build_orders()
            keep = orders.place_order(_lines())
            drop = orders.place_order(_lines())
            orders.remove(drop.id)
            await _settle(orders)
            return orders, keep

        orders, keep = run(scenario())
        assert orders.orders == (keep,)
        assert orders.count == 1

    def test_clear(self):
        async def scenario():
            orders = build_orders()
            orders.place_order(_lines())
            orders.place_order(_lines())
            orders.clear()
            await _settle(orders)
            return orders

        assert run(scenario()).is_empty

    def test_add_existing_order(self):
        async def scenario():
            orders = build_orders()
            order = Order.from_cart(_lines())
            orders.add(order)
            await _settle(orders)
            return orders, order

        orders, order = run(scenario())
        assert orders.get_by_id(order.id) == order


class TestRecentOrders:

    def test_newest_first(self):
        async def scenario():
            orders = build_orders(clock=FakeClock())
            first = orders.place_order(_lines())
            second = orders.place_order(_lines())
            third = orders.place_order(_lines())
            await _settle(orders)
            return orders, [third, second, first]

        orders, expected = run(scenario())
        assert orders.recent_orders == expected

    def test_sorted_even_when_inserted_out_of_order(self):
        def _at(hour: int) -> Order:
            return Order.from_cart(_lines(), order_date=datetime(2026, 1, 1, hour, tzinfo=timezone.utc))

        async def scenario():
            orders = build_orders()
            for order in (_at(10), _at(8), _at(12)):
                orders.add(order)
            await _settle(orders)
            return orders

        orders = run(scenario())
        assert [o.order_date.hour for o in orders.recent_orders] == [12, 10, 8]

    def test_ties_keep_insertion_order_and_repeat_stably(self):
        same_time = datetime(2026, 1, 1, tzinfo=timezone.utc)

        async def scenario():
            orders = build_orders(clock=lambda: same_time)
            placed = [orders.place_order(_lines()) for _ in range(3)]
            await _settle(orders)
            return orders, placed

        orders, placed = run(scenario())
        assert orders.recent_orders == placed
        assert orders.recent_orders == orders.recent_orders
