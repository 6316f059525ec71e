"""Tests for the transactional unit helper and its error translation."""

import pytest
from grocery.catalogue.product import Product
from grocery.errors import EmptyCart, Internal, InvalidArgument, NotFound, Unavailable
from grocery.utils.uow import atomic, load
from protean import current_domain
from protean.exceptions import ExpectedVersionError, ValidationError


class TestAtomic:
    def test_store_errors_pass_through(self):
        with pytest.raises(EmptyCart):
            with atomic("place_order", cart_id="cart-001"):
                raise EmptyCart("cart-001")

    def test_validation_error_becomes_invalid_argument(self):
        with pytest.raises(InvalidArgument) as exc_info:
            with atomic("add_item"):
                raise ValidationError({"quantity": ["must be positive"]})
        assert exc_info.value.messages == {"quantity": ["must be positive"]}

    def test_version_conflict_is_retryable(self):
        with pytest.raises(Unavailable) as exc_info:
            with atomic("place_order", cart_id="cart-001"):
                raise ExpectedVersionError("Wrong expected version: 0")
        assert exc_info.value.retryable is True
        assert exc_info.value.code == "unavailable"

    def test_unexpected_failure_becomes_internal(self):
        with pytest.raises(Internal) as exc_info:
            with atomic("restock", product_id="prod-001"):
                raise RuntimeError("disk full")
        assert exc_info.value.retryable is False

    def test_failed_unit_writes_nothing(self, add_product):
        product_id = add_product(num_of_stock=10)
        repo = current_domain.repository_for(Product)

        with pytest.raises(Internal):
            with atomic("restock", product_id=product_id):
                product = repo.get(product_id)
                product.replenish(5)
                repo.add(product)
                raise RuntimeError("connection reset")

        assert repo.get(product_id).num_of_stock == 10


class TestLoad:
    def test_unknown_id_is_not_found(self):
        with pytest.raises(NotFound) as exc_info:
            load(current_domain.repository_for(Product), "Product", "no-such-product")
        assert exc_info.value.details()["id"] == "no-such-product"
