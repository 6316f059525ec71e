"""Order placement — turns a cart into a PENDING order and takes the stock.

Flow (one atomic unit, all-or-nothing):
    1. Snapshot the cart lines (under the cart lock). No lines -> EmptyCart.
    2. Lock every product in the snapshot, then check each line against the
       current stock. Any shortfall -> InsufficientStock, nothing written.
    3. Open the order header (PENDING).
    4. Per line, in snapshot order: record the line at the current selling
       price and decrement the product's stock.
    5. Clear the cart lines (the cart row stays).

Steps 2-5 run in one UnitOfWork opened after all locks are held and closed
before any lock is released. A failure anywhere rolls the unit back, so there
is never an order without its lines, or stock taken without an order line.

The cart lock is held from the snapshot until the clear has committed.
Concurrent ``add_item``/``remove_item`` calls on the same cart wait for it,
so the lines cleared in step 5 are exactly the lines ordered in step 4.
"""

import structlog
from protean.utils.globals import current_domain

from grocery.cart.cart import Cart
from grocery.catalogue.reader import CatalogReader
from grocery.errors import EmptyCart, InsufficientStock, InvalidArgument
from grocery.order.order import FulfillmentType, Order
from grocery.stock.ledger import StockLedger
from grocery.stock.locks import LockManager, cart_key, get_lock_manager, lock_timeout
from grocery.utils.uow import atomic, load

logger = structlog.get_logger(__name__)


def _validate_request(cart_id, customer_name, address, fulfillment_type) -> FulfillmentType:
    errors = {}
    if not cart_id:
        errors["cart_id"] = ["Cart is required"]
    if not customer_name or not str(customer_name).strip():
        errors["customer_name"] = ["Customer name is required"]
    if not address or not str(address).strip():
        errors["address"] = ["Address is required"]

    fulfillment = None
    try:
        fulfillment = FulfillmentType(fulfillment_type)
    except ValueError:
        allowed = ", ".join(f.value for f in FulfillmentType)
        errors["fulfillment_type"] = [f"Unknown fulfillment type {fulfillment_type!r}; expected one of {allowed}"]

    if errors:
        raise InvalidArgument(errors)
    return fulfillment


class OrderWorkflow:
    def __init__(
        self,
        catalogue: CatalogReader | None = None,
        ledger: StockLedger | None = None,
        lock_manager: LockManager | None = None,
        timeout: float | None = None,
    ):
        self.catalogue = catalogue or CatalogReader()
        self._lock_manager = lock_manager
        self._timeout = timeout
        self.ledger = ledger or StockLedger(lock_manager=lock_manager, timeout=timeout)

    @property
    def locks(self) -> LockManager:
        return self._lock_manager or get_lock_manager()

    @property
    def timeout(self) -> float:
        return self._timeout if self._timeout is not None else lock_timeout()

    def place_order(self, cart_id, customer_name, address, fulfillment_type) -> Order:
        fulfillment = _validate_request(cart_id, customer_name, address, fulfillment_type)
        log = logger.bind(cart_id=str(cart_id))

        try:
            with self.locks.hold([cart_key(cart_id)], self.timeout):
                cart_repo = current_domain.repository_for(Cart)
                lines = load(cart_repo, "Cart", cart_id).lines()
                if not lines:
                    raise EmptyCart(str(cart_id))

                with self.ledger.guard(line.product_id for line in lines):
                    with atomic("place_order", cart_id=str(cart_id)):
                        self._check_stock(lines)

                        order = Order.create(
                            customer_name=customer_name,
                            address=address,
                            fulfillment_type=fulfillment.value,
                        )
                        for line in lines:
                            price = self.catalogue.price_of(line.product_id)
                            order.add_item(line.product_id, line.quantity, price)
                            self.ledger.decrement(line.product_id, line.quantity)
                        order.mark_placed(cart_id)
                        current_domain.repository_for(Order).add(order)

                        cart = load(cart_repo, "Cart", cart_id)
                        cart.clear(order.id)
                        cart_repo.add(cart)
        except (EmptyCart, InsufficientStock) as exc:
            log.info("checkout_rejected", reason=exc.code, detail=exc.message)
            raise

        log.info("order_placed", order_id=str(order.id), lines=len(lines), total=order.total())
        return order

    def _check_stock(self, lines):
        """Validate every line before anything is written."""
        for line in lines:
            availability = self.ledger.check_availability(line.product_id, line.quantity)
            if not availability.available:
                raise InsufficientStock(
                    product_id=availability.product_id,
                    product_name=availability.product_name,
                    available=availability.current_stock,
                    requested=line.quantity,
                )
