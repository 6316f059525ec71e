"""Tests for the Product aggregate and its stock counter."""

import pytest
from grocery.catalogue.events import PriceChanged, ProductAdded, StockDecremented, StockReplenished
from grocery.catalogue.product import Product
from grocery.errors import InsufficientStock, InvalidArgument
from protean.exceptions import ValidationError


def _make_product(**overrides):
    defaults = {"name": "Milk", "selling_price": 249, "cost_price": 150, "num_of_stock": 10}
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProductCreation:
    def test_create_product(self):
        product = _make_product()
        assert product.name == "Milk"
        assert product.selling_price == 249
        assert product.num_of_stock == 10
        assert product.created_at is not None

    def test_create_raises_event(self):
        product = _make_product()
        added = [e for e in product._events if isinstance(e, ProductAdded)]
        assert len(added) == 1
        assert added[0].product_id == str(product.id)
        assert added[0].num_of_stock == 10

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(selling_price=-1)

    def test_negative_opening_stock_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(num_of_stock=-1)


class TestDecrementStock:
    def test_decrement(self):
        product = _make_product(num_of_stock=10)
        product.decrement_stock(3)
        assert product.num_of_stock == 7

    def test_decrement_to_zero(self):
        product = _make_product(num_of_stock=4)
        product.decrement_stock(4)
        assert product.num_of_stock == 0

    def test_decrement_raises_event(self):
        product = _make_product(num_of_stock=10)
        product._events.clear()
        product.decrement_stock(3)
        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, StockDecremented)
        assert event.previous_stock == 10
        assert event.new_stock == 7

    def test_decrement_below_zero_refused(self):
        product = _make_product(name="Eggs", num_of_stock=5)
        with pytest.raises(InsufficientStock) as exc_info:
            product.decrement_stock(6)

        assert exc_info.value.available == 5
        assert exc_info.value.requested == 6
        assert exc_info.value.product_name == "Eggs"
        assert product.num_of_stock == 5

    def test_non_positive_quantity_refused(self):
        product = _make_product()
        with pytest.raises(InvalidArgument):
            product.decrement_stock(0)


class TestReplenish:
    def test_replenish(self):
        product = _make_product(num_of_stock=2)
        product.replenish(8)
        assert product.num_of_stock == 10
        assert isinstance(product._events[-1], StockReplenished)

    def test_replenish_requires_positive_quantity(self):
        product = _make_product()
        with pytest.raises(InvalidArgument):
            product.replenish(-3)


class TestChangePrice:
    def test_change_price(self):
        product = _make_product(selling_price=249)
        product.change_price(299)
        assert product.selling_price == 299
        event = product._events[-1]
        assert isinstance(event, PriceChanged)
        assert event.previous_price == 249
        assert event.new_price == 299

    def test_negative_price_refused(self):
        product = _make_product()
        with pytest.raises(InvalidArgument):
            product.change_price(-5)
