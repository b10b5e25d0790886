"""Round-trip and format tests for the JSON store codecs."""

import json
from datetime import datetime, timezone
from uuid import UUID

import pytest

from storefront.domain.model.cart import CartLine
from storefront.domain.model.catalog import Catalog
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.repository.codec import DECODE_ERRORS
from storefront.infrastructure.persistence.json_codecs import (
    CartCodec,
    FavoritesCodec,
    OrdersCodec,
)
from tests.fakes import make_product

ATOM, BOLT, _, _ = Catalog().products()


class TestCartCodec:

    def test_round_trip(self):
        lines = (CartLine.of(ATOM, 2), CartLine.of(make_product("Custom", "12.34"), 1))
        codec = CartCodec()
        assert codec.decode(codec.encode(lines)) == lines

    def test_format_is_field_tagged_json(self):
        raw = json.loads(CartCodec().encode((CartLine.of(ATOM, 2),)))
        assert raw[0]["quantity"] == 2
        assert raw[0]["product"]["id"] == str(ATOM.id)
        assert raw[0]["product"]["price"] == "1999"
        assert raw[0]["product"]["asset_image_ref"] == "evoque_atom"

    def test_empty_cart(self):
        codec = CartCodec()
        assert codec.decode(codec.encode(())) == ()

    def test_zero_quantity_is_malformed(self):
        blob = CartCodec().encode((CartLine.of(ATOM, 1),)).replace('"quantity": 1', '"quantity": 0')
        with pytest.raises(DECODE_ERRORS):
            CartCodec().decode(blob)


class TestFavoritesCodec:

    def test_round_trip(self):
        ids = frozenset({ATOM.id, BOLT.id})
        codec = FavoritesCodec()
        assert codec.decode(codec.encode(ids)) == ids

    def test_ids_are_sorted_strings(self):
        raw = json.loads(FavoritesCodec().encode(frozenset({BOLT.id, ATOM.id})))
        assert raw == sorted([str(ATOM.id), str(BOLT.id)])

    def test_bad_uuid_is_malformed(self):
        with pytest.raises(DECODE_ERRORS):
            FavoritesCodec().decode('["not-a-uuid"]')


class TestOrdersCodec:

    def _order(self) -> Order:
        return Order.from_cart(
            [CartLine.of(ATOM, 1), CartLine.of(BOLT, 2)],
            order_date=datetime(2026, 2, 4, 15, 30, 12, 123456, tzinfo=timezone.utc),
        ).with_status(OrderStatus.SHIPPED)

    def test_round_trip_with_nested_snapshots(self):
        orders = (self._order(), Order.from_cart([CartLine.of(make_product("Old", "1.50"))]))
        codec = OrdersCodec()
        decoded = codec.decode(codec.encode(orders))
        assert decoded == orders
        assert decoded[0].lines[1].product == BOLT

    def test_status_uses_display_value(self):
        raw = json.loads(OrdersCodec().encode((self._order(),)))
        assert raw[0]["status"] == "Shipped"
        assert raw[0]["total_price"] == "5197"

    def test_naive_dates_are_read_as_utc(self):
        raw = json.loads(OrdersCodec().encode((self._order(),)))
        raw[0]["order_date"] = "2026-02-04T15:30:00"
        (order,) = OrdersCodec().decode(json.dumps(raw))
        assert order.order_date == datetime(2026, 2, 4, 15, 30, tzinfo=timezone.utc)

    def test_unknown_status_is_malformed(self):
        raw = json.loads(OrdersCodec().encode((self._order(),)))
        raw[0]["status"] = "Lost"
        with pytest.raises(DECODE_ERRORS):
            OrdersCodec().decode(json.dumps(raw))

    def test_bad_price_is_malformed(self):
        raw = json.loads(OrdersCodec().encode((self._order(),)))
        raw[0]["total_price"] = "lots"
        with pytest.raises(DECODE_ERRORS):
            OrdersCodec().decode(json.dumps(raw))

    def test_ids_survive(self):
        order = self._order()
        (decoded,) = OrdersCodec().decode(OrdersCodec().encode((order,)))
        assert isinstance(decoded.id, UUID)
        assert decoded.id == order.id
        assert [line.id for line in decoded.lines] == [line.id for line in order.lines]
