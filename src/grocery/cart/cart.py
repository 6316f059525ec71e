"""Cart aggregate — the pending selection of products before checkout.

A cart holds at most one line per product; adding a product that is already
present increases that line's quantity. Carts are never deleted: placing an
order clears the lines and keeps the cart row.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from grocery.cart.events import CartCleared, CartCreated, CartItemAdded, CartItemRemoved
from grocery.domain import grocery
from grocery.errors import InvalidArgument


@dataclass(frozen=True)
class CartLine:
    """Immutable copy of a cart line, taken when checkout starts."""

    product_id: str
    quantity: int


@grocery.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@grocery.aggregate
class Cart:
    customer_id = Identifier()
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_product(self):
        product_ids = [str(item.product_id) for item in self.items or []]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in a cart"]})

    @classmethod
    def create(cls, customer_id=None):
        now = datetime.now(UTC)
        cart = cls(customer_id=customer_id, created_at=now, updated_at=now)
        cart.raise_(
            CartCreated(
                cart_id=str(cart.id),
                customer_id=str(customer_id) if customer_id else None,
                created_at=now,
            )
        )
        return cart

    def line_for(self, product_id):
        return next((i for i in self.items or [] if str(i.product_id) == str(product_id)), None)

    def lines(self) -> list[CartLine]:
        return [CartLine(product_id=str(i.product_id), quantity=i.quantity) for i in self.items or []]

    def touch(self):
        self.updated_at = datetime.now(UTC)

    def add_item(self, product_id, quantity):
        """Add ``quantity`` of a product, merging into the existing line if there is one."""
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidArgument({"quantity": ["Quantity must be a positive integer"]})

        existing = self.line_for(product_id)
        if existing:
            existing.quantity += quantity
            line_quantity = existing.quantity
        else:
            self.add_items(
                CartItem(
                    product_id=str(product_id),
                    quantity=quantity,
                    added_at=datetime.now(UTC),
                )
            )
            line_quantity = quantity

        self.touch()

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product_id),
                quantity=quantity,
                line_quantity=line_quantity,
            )
        )

    def remove_item(self, product_id):
        """Drop the product's line. Returns False (and changes nothing but the timestamp) if absent."""
        existing = self.line_for(product_id)
        self.touch()
        if existing is None:
            return False

        self.remove_items(existing)
        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                product_id=str(product_id),
                quantity=existing.quantity,
            )
        )
        return True

    def clear(self, order_id):
        """Remove every line after ``order_id`` was placed from this cart."""
        items = list(self.items or [])
        for item in items:
            self.remove_items(item)
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                order_id=str(order_id),
                lines_cleared=len(items),
                cleared_at=now,
            )
        )
