"""Application tests for catalogue management and product reads."""

import pytest
from grocery.catalogue.management import AddProduct, change_price
from grocery.catalogue.product import Product
from grocery.catalogue.reader import CatalogReader
from grocery.errors import InvalidArgument, NotFound
from grocery.stock.ledger import StockLedger
from protean import current_domain
from protean.exceptions import ValidationError


class TestAddProductCommand:
    def test_add_product_persists(self, add_product):
        product_id = add_product(name="Oat Milk", selling_price=299, num_of_stock=12)
        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "Oat Milk"
        assert product.selling_price == 299
        assert product.num_of_stock == 12

    def test_negative_opening_stock_rejected(self):
        with pytest.raises(ValidationError):
            AddProduct(name="Eggs", selling_price=100, cost_price=50, num_of_stock=-1)


class TestCatalogReader:
    def test_get(self, add_product):
        product_id = add_product(name="Eggs", selling_price=349)
        snapshot = CatalogReader().get(product_id)
        assert snapshot.id == product_id
        assert snapshot.selling_price == 349

    def test_get_unknown_product(self):
        with pytest.raises(NotFound) as exc_info:
            CatalogReader().get("no-such-product")
        assert exc_info.value.kind == "Product"

    def test_price_of(self, add_product):
        product_id = add_product(selling_price=79)
        assert CatalogReader().price_of(product_id) == 79

    def test_list_products_sorted_by_name(self, add_product):
        add_product(name="Yoghurt")
        add_product(name="Apples")
        add_product(name="Milk")
        assert [p.name for p in CatalogReader().list_products()] == ["Apples", "Milk", "Yoghurt"]


class TestChangePrice:
    def test_change_price_persists(self, add_product):
        product_id = add_product(selling_price=79)
        snapshot = change_price(product_id, 99)
        assert snapshot.selling_price == 99
        assert current_domain.repository_for(Product).get(product_id).selling_price == 99

    def test_negative_price_rejected(self, add_product):
        product_id = add_product(selling_price=79)
        with pytest.raises(InvalidArgument):
            change_price(product_id, -1)
        assert current_domain.repository_for(Product).get(product_id).selling_price == 79

    def test_unknown_product(self):
        with pytest.raises(NotFound):
            change_price("no-such-product", 10)


class TestRestock:
    def test_restock_adds_to_stock(self, add_product):
        product_id = add_product(num_of_stock=3)
        snapshot = StockLedger().restock(product_id, 7)
        assert snapshot.num_of_stock == 10
        assert current_domain.repository_for(Product).get(product_id).num_of_stock == 10

    @pytest.mark.parametrize("quantity", [0, -2])
    def test_non_positive_quantity_rejected(self, add_product, quantity):
        product_id = add_product(num_of_stock=3)
        with pytest.raises(InvalidArgument):
            StockLedger().restock(product_id, quantity)
        assert current_domain.repository_for(Product).get(product_id).num_of_stock == 3

    def test_unknown_product(self):
        with pytest.raises(NotFound):
            StockLedger().restock("no-such-product", 5)
