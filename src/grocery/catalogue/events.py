"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from grocery.domain import grocery


@grocery.event(part_of="Product")
class ProductAdded:
    """A product was added to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    selling_price = Integer(required=True)
    cost_price = Integer(required=True)
    num_of_stock = Integer(required=True)
    added_at = DateTime(required=True)


@grocery.event(part_of="Product")
class PriceChanged:
    """The selling price of a product changed. Existing order lines keep their price."""

    __version__ = 1

    product_id = Identifier(required=True)
    previous_price = Integer(required=True)
    new_price = Integer(required=True)
    changed_at = DateTime(required=True)


@grocery.event(part_of="Product")
class StockDecremented:
    """Stock left the shelf because an order was placed."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    decremented_at = DateTime(required=True)


@grocery.event(part_of="Product")
class StockReplenished:
    """Stock was added to a product."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    replenished_at = DateTime(required=True)
