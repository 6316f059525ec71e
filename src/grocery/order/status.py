"""Order status changes and the pluggable transition policy.

The store currently lets an operator move an order between any two statuses
(COMPLETED back to PENDING included). That rule lives in
``PermitAnyTransition``; ``OneWayTransitionPolicy`` is the stricter
PENDING -> COMPLETED | CANCELLED rule, ready to be switched on with
``set_transition_policy`` once the stricter behaviour is agreed.
"""

from abc import ABC, abstractmethod

import structlog
from protean.utils.globals import current_domain

from grocery.errors import InvalidArgument
from grocery.order.order import Order, OrderStatus
from grocery.stock.locks import LockManager, get_lock_manager, lock_timeout, order_key
from grocery.utils.uow import atomic, load

logger = structlog.get_logger(__name__)


class TransitionPolicy(ABC):
    @abstractmethod
    def permits(self, current: OrderStatus, target: OrderStatus) -> bool: ...


class PermitAnyTransition(TransitionPolicy):
    def permits(self, current: OrderStatus, target: OrderStatus) -> bool:
        return True


class OneWayTransitionPolicy(TransitionPolicy):
    """PENDING may move to COMPLETED or CANCELLED; both of those are terminal."""

    _ALLOWED = {
        OrderStatus.PENDING: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
        OrderStatus.COMPLETED: set(),
        OrderStatus.CANCELLED: set(),
    }

    def permits(self, current: OrderStatus, target: OrderStatus) -> bool:
        return target in self._ALLOWED[current]


_current_policy: TransitionPolicy | None = None


def get_transition_policy() -> TransitionPolicy:
    global _current_policy
    if _current_policy is None:
        _current_policy = PermitAnyTransition()
    return _current_policy


def set_transition_policy(policy: TransitionPolicy) -> None:
    global _current_policy
    _current_policy = policy


def reset_transition_policy() -> None:
    global _current_policy
    _current_policy = None


def parse_status(status) -> OrderStatus:
    if isinstance(status, OrderStatus):
        return status
    try:
        return OrderStatus(str(status).upper())
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise InvalidArgument({"status": [f"Unknown status {status!r}; expected one of {allowed}"]}) from None


def get_order(order_id) -> Order:
    """Order header plus its line items."""
    return load(current_domain.repository_for(Order), "Order", order_id)


def change_order_status(
    order_id,
    status,
    policy: TransitionPolicy | None = None,
    lock_manager: LockManager | None = None,
    timeout: float | None = None,
) -> Order:
    target = parse_status(status)
    policy = policy or get_transition_policy()
    locks = lock_manager or get_lock_manager()

    with locks.hold([order_key(order_id)], timeout if timeout is not None else lock_timeout()):
        with atomic("change_order_status", order_id=str(order_id)):
            repo = current_domain.repository_for(Order)
            order = load(repo, "Order", order_id)
            current = OrderStatus(order.status)
            if not policy.permits(current, target):
                raise InvalidArgument({"status": [f"Cannot move order from {current.value} to {target.value}"]})
            order.change_status(target)
            repo.add(order)

    logger.info("order_status_changed", order_id=str(order_id), previous=current.value, status=target.value)
    return order
