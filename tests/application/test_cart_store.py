"""Tests for the CartStore.

Uses the in-memory storage fake; every scenario runs on its own event
loop because stores schedule their writes on the running loop.
"""

from uuid import uuid4

from storefront.domain.model.value_objects import Money
from tests.fakes import InMemoryKeyValueStorage, build_cart, make_product, run


async def _settle(store):
    await store.flush()
    store.close()


class TestCartAdd:

    def test_adding_same_product_twice_merges_lines(self):
        async def scenario():
            cart = build_cart()
            bike = make_product("Bike", "100.00")
            cart.add(bike, 2)
            cart.add(bike, 3)
            await _settle(cart)
            return cart

        cart = run(scenario())
        assert len(cart.lines) == 1
        assert cart.lines[0].quantity.value == 5

    def test_merge_keeps_line_id(self):
        async def scenario():
            cart = build_cart()
            bike = make_product()
            cart.add(bike)
            first_id = cart.lines[0].id
            cart.add(bike)
            await _settle(cart)
            return first_id, cart.lines[0].id

        first_id, merged_id = run(scenario())
        assert first_id == merged_id

    def test_default_quantity_is_one(self):
        async def scenario():
            cart = build_cart()
            bike = make_product()
            cart.add(bike)
            await _settle(cart)
            return cart.quantity(bike.id)

        assert run(scenario()) == 1

    def test_non_positive_quantity_is_ignored(self):
        async def scenario():
            storage = InMemoryKeyValueStorage()
            cart = build_cart(storage)
            cart.add(make_product(), 0)
            cart.add(make_product(), -2)
            await _settle(cart)
            return cart, storage

        cart, storage = run(scenario())
        assert cart.is_empty
        assert storage.write_count == 0

    def test_lines_keep_insertion_order(self):
        async def scenario():
            cart = build_cart()
            a, b = make_product("A"), make_product("B")
            cart.add(a)
            cart.add(b)
            cart.add(a)
            await _settle(cart)
            return [line.product.name for line in cart.lines]

        assert run(scenario()) == ["A", "B"]


class TestCartTotals:

    def test_total_price_is_sum_of_lines(self):
        async def scenario():
            cart = build_cart()
            a = make_product("A", "10")
            b = make_product("B", "5")
            cart.add(a, 2)
            cart.add(b, 1)
            total_before = cart.total_price
            cart.remove(a.id)
            total_after = cart.total_price
            await _settle(cart)
            return total_before, total_after

        before, after = run(scenario())
        assert before == Money.of("25")
        assert after == Money.of("5")

    def test_empty_cart_totals_zero(self):
        cart = build_cart()
        assert cart.total_price == Money.zero()
        assert cart.item_count == 0
        assert cart.is_empty
        cart.close()

    def test_item_count_sums_quantities(self):
        async def scenario():
            cart = build_cart()
            cart.add(make_product("A"), 2)
            cart.add(make_product("B"), 3)
            await _settle(cart)
            return cart.item_count

        assert run(scenario()) == 5


class TestCartUpdateQuantity:

    def test_sets_quantity(self):
        async def scenario():
            cart = build_cart()
            bike = make_product()
            cart.add(bike, 1)
            cart.update_quantity(bike.id, 7)
            await _settle(cart)
            return cart.quantity(bike.id)

        assert run(scenario()) == 7

    def test_zero_removes_line(self):
        async def scenario():
            cart = build_cart()
            bike = make_product()
            cart.add(bike, 3)
            cart.update_quantity(bike.id, 0)
            await _settle(cart)
            return cart

        assert run(scenario()).is_empty

    def test_negative_removes_line(self):
        async def scenario():
            cart = build_cart()
            bike = make_product()
            cart.add(bike, 3)
            cart.update_quantity(bike.id, -1)
            await _settle(cart)
            return cart

        assert run(scenario()).is_empty

    def test_unknown_product_is_a_no_op(self):
        async def scenario():
            storage = InMemoryKeyValueStorage()
            cart = build_cart(storage)
            bike = make_product()
            cart.add(bike, 2)
            await cart.flush()
            writes = storage.write_count
            cart.update_quantity(uuid4(), 5)
            await _settle(cart)
            return cart, bike, storage.write_count - writes

        cart, bike, extra_writes = run(scenario())
        assert cart.quantity(bike.id) == 2
        assert len(cart.lines) == 1
        assert extra_writes == 0


class TestCartRemoveAndClear:

    def test_quantity_of_absent_product_is_zero(self):
        cart = build_cart()
        assert cart.quantity(uuid4()) == 0
        cart.close()

    def test_remove_unknown_product_leaves_cart_unchanged(self):
        async def scenario():
            cart = build_cart()
            bike = make_product()
            cart.add(bike)
            cart.remove(uuid4())
            await _settle(cart)
            return cart.quantity(bike.id)

        assert run(scenario()) == 1

    def test_clear_empties_cart(self):
        async def scenario():
            cart = build_cart()
            cart.add(make_product("A"))
            cart.add(make_product("B"))
            cart.clear()
            await _settle(cart)
            return cart

        cart = run(scenario())
        assert cart.is_empty
        assert cart.total_price == Money.zero()

    def test_lines_snapshot_does_not_track_later_changes(self):
        async def scenario():
            cart = build_cart()
            bike = make_product()
            cart.add(bike)
            snapshot = cart.lines
            cart.add(bike)
            await _settle(cart)
            return snapshot

        snapshot = run(scenario())
        assert snapshot[0].quantity.value == 1
