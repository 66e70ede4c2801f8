"""
Tests for cart models and reducers
"""

import pytest
from dataclasses import FrozenInstanceError

from storefront.cart import CartItem, CartState, compute_total
from storefront.cart import reducers


class TestCartItem:
    """Tests for CartItem dataclass."""

    def test_to_dict(self):
        item = CartItem(id=1, product_id=10, quantity=2)

        assert item.to_dict() == {"id": 1, "productId": 10, "quantity": 2}

    def test_merge_keeps_id(self):
        """Merging ignores id and unknown keys."""
        item = CartItem(id=1, product_id=10, quantity=2)

        merged = item.merge({"id": 99, "quantity": 4, "color": "red"})

        assert merged == CartItem(id=1, product_id=10, quantity=4)
        assert item.quantity == 2

    def test_items_are_immutable(self):
        item = CartItem(id=1, product_id=10, quantity=2)

        with pytest.raises(FrozenInstanceError):
            item.quantity = 3


class TestCartState:
    """Tests for CartState snapshot."""

    def test_empty_state(self):
        state = CartState()

        assert state.items == ()
        assert state.total_count == 0
        assert state.loading is False
        assert state.error is None
        assert state.is_empty

    def test_total_count_is_derived(self, sample_items):
        state = CartState(items=tuple(sample_items))

        assert state.total_count == 3
        assert state.total_count == compute_total(state.items)

    def test_total_count_cannot_be_passed(self):
        with pytest.raises(TypeError):
            CartState(items=(), total_count=5)

    def test_find_item_and_product_quantity(self, sample_items):
        state = CartState(items=tuple(sample_items))

        assert state.find_item(2) == sample_items[1]
        assert state.find_item(42) is None
        assert state.quantity_for_product(101) == 2
        assert state.quantity_for_product(999) == 0


class TestReducers:
    """Tests for pure cart reducers."""

    def test_replace_items_drops_duplicate_ids(self):
        fetched = [
            CartItem(id=1, product_id=10, quantity=1),
            CartItem(id=1, product_id=10, quantity=9),
            CartItem(id=2, product_id=20, quantity=2),
        ]

        items = reducers.replace_items(fetched)

        assert [item.id for item in items] == [1, 2]
        assert compute_total(items) == 3

    def test_merge_added_item_inserts_new_line(self, sample_items):
        items = reducers.merge_added_item(tuple(sample_items), CartItem(id=3, product_id=103, quantity=4))

        assert [item.id for item in items] == [1, 2, 3]
        assert compute_total(items) == 7

    def test_merge_added_item_replaces_existing_line(self, sample_items):
        """Returned line already carries the merged quantity."""
        items = reducers.merge_added_item(tuple(sample_items), CartItem(id=1, product_id=101, quantity=3))

        assert [item.id for item in items] == [1, 2]
        assert items[0].quantity == 3
        assert compute_total(items) == 4

    def test_merge_updated_item_unknown_id_is_noop(self):
        items = reducers.merge_updated_item((), 7, {"id": 7, "quantity": 3})

        assert items == ()

    def test_merge_updated_item_without_fields_keeps_item(self, sample_items):
        items = reducers.merge_updated_item(tuple(sample_items), 1, None)

        assert items == tuple(sample_items)

    def test_merge_updated_item_zero_quantity_removes_line(self, sample_items):
        items = reducers.merge_updated_item(tuple(sample_items), 1, {"quantity": 0})

        assert [item.id for item in items] == [2]

    def test_remove_item(self, sample_items):
        assert reducers.remove_item(tuple(sample_items), 1) == (sample_items[1],)
        assert reducers.remove_item(tuple(sample_items), 42) == tuple(sample_items)

    def test_clear_items(self, sample_items):
        assert reducers.clear_items(tuple(sample_items)) == ()
