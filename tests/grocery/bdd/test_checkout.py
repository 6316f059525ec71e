"""BDD tests for placing orders."""

import pytest
from grocery.cart.cart import Cart
from grocery.catalogue.management import change_price
from grocery.catalogue.product import Product
from grocery.errors import EmptyCart, InsufficientStock
from grocery.order.order import Order
from grocery.order.placement import OrderWorkflow
from protean import current_domain
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/checkout.feature")


@pytest.fixture()
def placed():
    return {"order_id": None}


def _checkout(cart_state, placed, error, fulfillment_type):
    try:
        order = OrderWorkflow().place_order(cart_state["cart_id"], "Ada", "12 Market Street", fulfillment_type)
        placed["order_id"] = str(order.id)
    except (EmptyCart, InsufficientStock) as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the customer checks out for delivery")
def checkout_for_delivery(cart_state, placed, error):
    _checkout(cart_state, placed, error, "DELIVERY")


@when("the customer checks out for pick up")
def checkout_for_pick_up(cart_state, placed, error):
    _checkout(cart_state, placed, error, "PICK_UP")


@when(parsers.cfparse('the price of "{name}" changes to {price:d}'))
def price_changes(products, name, price):
    change_price(products[name], price)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('an order is placed with status "{status}"'))
def order_placed(placed, status):
    order = current_domain.repository_for(Order).get(placed["order_id"])
    assert order.status == status


@then(parsers.cfparse('the order line for "{name}" has quantity {qty:d} at price {price:d}'))
def order_line(products, placed, name, qty, price):
    order = current_domain.repository_for(Order).get(placed["order_id"])
    item = next(i for i in order.items if str(i.product_id) == products[name])
    assert item.quantity == qty
    assert item.price_at_purchase == price


@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def product_stock(products, name, stock):
    assert current_domain.repository_for(Product).get(products[name]).num_of_stock == stock


@then("the cart is empty")
def cart_is_empty(cart_state):
    assert current_domain.repository_for(Cart).get(cart_state["cart_id"]).lines() == []


@then(parsers.cfparse("the cart still holds {count:d} lines"))
def cart_still_holds(cart_state, count):
    assert len(current_domain.repository_for(Cart).get(cart_state["cart_id"]).lines()) == count


@then(parsers.cfparse('the checkout is refused with "{message}"'))
def refused_with(error, message):
    assert isinstance(error["exc"], InsufficientStock)
    assert error["exc"].message == message


@then("the checkout is refused because the cart is empty")
def refused_empty(error):
    assert isinstance(error["exc"], EmptyCart)


@then("no order is placed")
def no_order(placed):
    assert placed["order_id"] is None
    assert current_domain.repository_for(Order)._dao.query.all().total == 0
