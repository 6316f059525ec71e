"""Domain events for the Cart aggregate."""

from protean.fields import DateTime, Identifier, Integer

from grocery.domain import grocery


@grocery.event(part_of="Cart")
class CartCreated:
    """A cart was opened, implicitly, by the first item added to it."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier()
    created_at = DateTime(required=True)


@grocery.event(part_of="Cart")
class CartItemAdded:
    """A product was added to the cart, or its line quantity increased."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@grocery.event(part_of="Cart")
class CartItemRemoved:
    """A product line was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@grocery.event(part_of="Cart")
class CartCleared:
    """All lines were removed from the cart because an order was placed from it."""

    __version__ = 1

    cart_id = Identifier(required=True)
    order_id = Identifier(required=True)
    lines_cleared = Integer(required=True)
    cleared_at = DateTime(required=True)
