"""Order aggregate — a placed checkout with its priced line items.

Every line records ``price_at_purchase``, the product's selling price at the
moment the order was placed. Later catalogue price changes never touch it.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, HasMany, Identifier, Integer, String

from grocery.domain import grocery
from grocery.errors import InvalidArgument
from grocery.order.events import OrderPlaced, OrderStatusChanged


class FulfillmentType(Enum):
    PICK_UP = "PICK_UP"
    DELIVERY = "DELIVERY"


class OrderStatus(Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


@grocery.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price_at_purchase = Integer(required=True, min_value=0)

    def line_total(self):
        return self.quantity * self.price_at_purchase


@grocery.aggregate
class Order:
    customer_name = String(required=True, max_length=255)
    address = String(required=True, max_length=500)
    fulfillment_type = String(required=True, choices=FulfillmentType)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, customer_name, address, fulfillment_type):
        """Open a PENDING order header. Lines are added with ``add_item``."""
        now = datetime.now(UTC)
        return cls(
            customer_name=customer_name,
            address=address,
            fulfillment_type=fulfillment_type,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )

    def total(self):
        return sum(item.line_total() for item in self.items or [])

    def add_item(self, product_id, quantity, price_at_purchase):
        if OrderStatus(self.status) != OrderStatus.PENDING:
            raise InvalidArgument({"status": ["Items can only be added to a pending order"]})

        self.add_items(
            OrderItem(
                product_id=str(product_id),
                quantity=quantity,
                price_at_purchase=price_at_purchase,
            )
        )

    def mark_placed(self, cart_id):
        """Record that the order, with all its lines, was placed from ``cart_id``."""
        if not self.items:
            raise InvalidArgument({"items": ["An order needs at least one item"]})

        lines = [
            {
                "product_id": str(item.product_id),
                "quantity": item.quantity,
                "price_at_purchase": item.price_at_purchase,
            }
            for item in self.items
        ]
        self.raise_(
            OrderPlaced(
                order_id=str(self.id),
                cart_id=str(cart_id),
                customer_name=self.customer_name,
                fulfillment_type=self.fulfillment_type,
                items=json.dumps(lines),
                total=self.total(),
                placed_at=self.created_at,
            )
        )

    def change_status(self, new_status: OrderStatus):
        """Overwrite the status. Whether the move is allowed is the caller's policy decision."""
        previous = self.status
        now = datetime.now(UTC)
        self.status = new_status.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=new_status.value,
                changed_at=now,
            )
        )
