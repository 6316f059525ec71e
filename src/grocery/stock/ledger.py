"""Stock ledger — availability checks and stock movements on Product.num_of_stock.

``check_availability``, ``decrement`` and ``increment`` expect the caller to
hold the product lock (see ``guard``) and to run inside an open unit of work;
the check and the write then see the same committed stock figure. ``restock``
is the standalone operation that takes the lock and the unit of work itself.
"""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import structlog
from protean.utils.globals import current_domain

from grocery.catalogue.product import Product
from grocery.catalogue.reader import ProductSnapshot
from grocery.errors import InvalidArgument
from grocery.stock.locks import LockManager, get_lock_manager, lock_timeout, product_key
from grocery.utils.uow import atomic, load

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Availability:
    product_id: str
    product_name: str
    current_stock: int
    requested: int

    @property
    def available(self) -> bool:
        return self.current_stock >= self.requested


class StockLedger:
    def __init__(self, lock_manager: LockManager | None = None, timeout: float | None = None):
        self._lock_manager = lock_manager
        self._timeout = timeout

    @property
    def locks(self) -> LockManager:
        return self._lock_manager or get_lock_manager()

    @property
    def timeout(self) -> float:
        return self._timeout if self._timeout is not None else lock_timeout()

    def _repo(self):
        return current_domain.repository_for(Product)

    @contextmanager
    def guard(self, product_ids: Iterable[str]) -> Iterator[None]:
        """Hold the locks of every product in ``product_ids``."""
        with self.locks.hold([product_key(pid) for pid in product_ids], self.timeout):
            yield

    def check_availability(self, product_id, quantity: int) -> Availability:
        product = load(self._repo(), "Product", product_id)
        return Availability(
            product_id=str(product.id),
            product_name=product.name,
            current_stock=product.num_of_stock or 0,
            requested=quantity,
        )

    def decrement(self, product_id, quantity: int) -> Product:
        """Conditional decrement: raises InsufficientStock instead of going below zero."""
        repo = self._repo()
        product = load(repo, "Product", product_id)
        product.decrement_stock(quantity)
        repo.add(product)
        logger.info("stock_decremented", product_id=str(product_id), quantity=quantity, new_stock=product.num_of_stock)
        return product

    def increment(self, product_id, quantity: int) -> Product:
        repo = self._repo()
        product = load(repo, "Product", product_id)
        product.replenish(quantity)
        repo.add(product)
        logger.info("stock_replenished", product_id=str(product_id), quantity=quantity, new_stock=product.num_of_stock)
        return product

    def restock(self, product_id, quantity: int) -> ProductSnapshot:
        """Add stock to a product (the manager's stock update)."""
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidArgument({"quantity": ["Quantity must be a positive integer"]})

        with self.guard([str(product_id)]):
            with atomic("restock", product_id=str(product_id)):
                product = self.increment(product_id, quantity)
        return ProductSnapshot.of(product)
