"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer, String, Text

from grocery.domain import grocery


@grocery.event(part_of="Order")
class OrderPlaced:
    """A cart was checked out into a new order. ``items`` is the JSON list of priced lines."""

    __version__ = 1

    order_id = Identifier(required=True)
    cart_id = Identifier(required=True)
    customer_name = String(required=True)
    fulfillment_type = String(required=True)
    items = Text(required=True)
    total = Integer(required=True)
    placed_at = DateTime(required=True)


@grocery.event(part_of="Order")
class OrderStatusChanged:
    """An order moved to a new status."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)
