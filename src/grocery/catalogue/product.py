"""Product aggregate — catalogue entry carrying price and the stock counter.

Prices are integers in the minor currency unit. ``num_of_stock`` is the only
stock figure the store keeps; it is mutated exclusively through
``decrement_stock`` and ``replenish`` so that it never drops below zero.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String

from grocery.catalogue.events import PriceChanged, ProductAdded, StockDecremented, StockReplenished
from grocery.domain import grocery
from grocery.errors import InsufficientStock, InvalidArgument


@grocery.aggregate
class Product:
    name = String(required=True, max_length=255)
    selling_price = Integer(required=True, min_value=0)
    cost_price = Integer(required=True, min_value=0)
    num_of_stock = Integer(default=0, min_value=0)
    category_id = Identifier()
    merchant_id = Identifier()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def stock_must_not_be_negative(self):
        if self.num_of_stock is not None and self.num_of_stock < 0:
            raise ValidationError({"num_of_stock": ["Stock cannot be negative"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, name, selling_price, cost_price, num_of_stock=0, category_id=None, merchant_id=None):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            selling_price=selling_price,
            cost_price=cost_price,
            num_of_stock=num_of_stock,
            category_id=category_id,
            merchant_id=merchant_id,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=name,
                selling_price=selling_price,
                cost_price=cost_price,
                num_of_stock=num_of_stock,
                added_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def has_stock_for(self, quantity):
        return (self.num_of_stock or 0) >= quantity

    def decrement_stock(self, quantity):
        """Take ``quantity`` units off the shelf, refusing to go below zero."""
        if quantity <= 0:
            raise InvalidArgument({"quantity": ["Quantity must be positive"]})
        if not self.has_stock_for(quantity):
            raise InsufficientStock(
                product_id=str(self.id),
                product_name=self.name,
                available=self.num_of_stock or 0,
                requested=quantity,
            )

        previous = self.num_of_stock
        now = datetime.now(UTC)
        self.num_of_stock = previous - quantity
        self.updated_at = now

        self.raise_(
            StockDecremented(
                product_id=str(self.id),
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.num_of_stock,
                decremented_at=now,
            )
        )

    def replenish(self, quantity):
        if quantity <= 0:
            raise InvalidArgument({"quantity": ["Quantity must be positive"]})

        previous = self.num_of_stock or 0
        now = datetime.now(UTC)
        self.num_of_stock = previous + quantity
        self.updated_at = now

        self.raise_(
            StockReplenished(
                product_id=str(self.id),
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.num_of_stock,
                replenished_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------
    def change_price(self, selling_price):
        if selling_price < 0:
            raise InvalidArgument({"selling_price": ["Price cannot be negative"]})

        previous = self.selling_price
        now = datetime.now(UTC)
        self.selling_price = selling_price
        self.updated_at = now

        self.raise_(
            PriceChanged(
                product_id=str(self.id),
                previous_price=previous,
                new_price=selling_price,
                changed_at=now,
            )
        )
