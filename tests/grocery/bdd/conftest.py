"""Shared BDD fixtures and step definitions for the grocery store."""

import pytest
from grocery.cart.cart import Cart
from grocery.cart.store import CartStore
from grocery.catalogue.management import AddProduct
from grocery.errors import StoreError
from protean import current_domain
from pytest_bdd import given, parsers, then, when


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def products():
    """Product name -> product id."""
    return {}


@pytest.fixture()
def cart_state():
    return {"cart_id": None}


@pytest.fixture()
def error():
    """Container for capturing errors in When steps."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:d} with {stock:d} in stock'))
def a_product(products, name, price, stock):
    products[name] = current_domain.process(
        AddProduct(name=name, selling_price=price, cost_price=price // 2, num_of_stock=stock),
        asynchronous=False,
    )


@given(parsers.cfparse('the cart contains {qty:d} of "{name}"'))
def cart_contains(products, cart_state, name, qty):
    cart = CartStore().add_item(products[name], qty, cart_id=cart_state["cart_id"])
    cart_state["cart_id"] = str(cart.id)


@given(parsers.cfparse('"{name}" is removed from the cart'))
@when(parsers.cfparse('"{name}" is removed from the cart'))
def remove_from_cart(products, cart_state, name):
    CartStore().remove_item(cart_state["cart_id"], products[name])


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_lines(cart_state, count):
    cart = current_domain.repository_for(Cart).get(cart_state["cart_id"])
    assert len(cart.lines()) == count


@then("the request is rejected as invalid")
def rejected_as_invalid(error):
    assert isinstance(error["exc"], StoreError)
    assert error["exc"].code == "invalid_argument"
