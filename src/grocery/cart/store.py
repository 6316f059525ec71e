"""Cart store — add, remove and look up cart lines.

Mutations of an existing cart run under the cart lock, the same lock the
checkout workflow holds while it snapshots and clears the cart, so an item
added during a checkout lands either before the snapshot or after the clear.
"""

import structlog
from protean.utils.globals import current_domain

from grocery.cart.cart import Cart
from grocery.catalogue.reader import CatalogReader
from grocery.errors import InvalidArgument
from grocery.stock.locks import LockManager, cart_key, get_lock_manager, lock_timeout
from grocery.utils.uow import atomic, load

logger = structlog.get_logger(__name__)


class CartStore:
    def __init__(
        self,
        catalogue: CatalogReader | None = None,
        lock_manager: LockManager | None = None,
        timeout: float | None = None,
    ):
        self.catalogue = catalogue or CatalogReader()
        self._lock_manager = lock_manager
        self._timeout = timeout

    @property
    def locks(self) -> LockManager:
        return self._lock_manager or get_lock_manager()

    @property
    def timeout(self) -> float:
        return self._timeout if self._timeout is not None else lock_timeout()

    def _repo(self):
        return current_domain.repository_for(Cart)

    def get_cart(self, cart_id) -> Cart:
        return load(self._repo(), "Cart", cart_id)

    def add_item(self, product_id, quantity, cart_id=None, customer_id=None) -> Cart:
        """Add a product to a cart, creating the cart when ``cart_id`` is not given."""
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidArgument({"quantity": ["Quantity must be a positive integer"]})
        if not product_id:
            raise InvalidArgument({"product_id": ["Product is required"]})

        # Unknown products are rejected before any lock is taken
        self.catalogue.get(product_id)

        if not cart_id:
            # A brand-new cart id is not visible to anyone else yet; no lock needed
            with atomic("add_item", product_id=str(product_id)):
                cart = Cart.create(customer_id=customer_id)
                cart.add_item(product_id, quantity)
                self._repo().add(cart)
            logger.info("cart_created", cart_id=str(cart.id), customer_id=customer_id)
            return cart

        with self.locks.hold([cart_key(cart_id)], self.timeout):
            with atomic("add_item", cart_id=str(cart_id), product_id=str(product_id)):
                repo = self._repo()
                cart = load(repo, "Cart", cart_id)
                cart.add_item(product_id, quantity)
                repo.add(cart)

        logger.info("cart_item_added", cart_id=str(cart_id), product_id=str(product_id), quantity=quantity)
        return cart

    def remove_item(self, cart_id, product_id) -> Cart:
        """Remove the product's line. Removing a line that is not there is a no-op."""
        with self.locks.hold([cart_key(cart_id)], self.timeout):
            with atomic("remove_item", cart_id=str(cart_id), product_id=str(product_id)):
                repo = self._repo()
                cart = load(repo, "Cart", cart_id)
                removed = cart.remove_item(product_id)
                repo.add(cart)

        logger.info("cart_item_removed", cart_id=str(cart_id), product_id=str(product_id), removed=removed)
        return cart
