"""Catalogue management — product creation and price changes."""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from grocery.catalogue.product import Product
from grocery.catalogue.reader import ProductSnapshot
from grocery.domain import grocery
from grocery.stock.locks import get_lock_manager, lock_timeout, product_key
from grocery.utils.uow import atomic, load

logger = structlog.get_logger(__name__)


@grocery.command(part_of="Product")
class AddProduct:
    """Add a product to the catalogue with its opening stock."""

    name = String(required=True, max_length=255)
    selling_price = Integer(required=True, min_value=0)
    cost_price = Integer(required=True, min_value=0)
    num_of_stock = Integer(required=True, min_value=0)
    category_id = Identifier()
    merchant_id = Identifier()


@grocery.command_handler(part_of=Product)
class AddProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            name=command.name,
            selling_price=command.selling_price,
            cost_price=command.cost_price,
            num_of_stock=command.num_of_stock,
            category_id=command.category_id,
            merchant_id=command.merchant_id,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_added", product_id=str(product.id), num_of_stock=command.num_of_stock)
        return str(product.id)


def change_price(product_id, selling_price: int, lock_manager=None, timeout: float | None = None) -> ProductSnapshot:
    """Change a product's selling price.

    Runs under the product lock so it cannot interleave with a checkout
    that is reading the price and decrementing the same row.
    """
    locks = lock_manager or get_lock_manager()
    with locks.hold([product_key(product_id)], timeout if timeout is not None else lock_timeout()):
        with atomic("change_price", product_id=str(product_id)):
            repo = current_domain.repository_for(Product)
            product = load(repo, "Product", product_id)
            product.change_price(selling_price)
            repo.add(product)

    logger.info("price_changed", product_id=str(product_id), selling_price=selling_price)
    return ProductSnapshot.of(product)
