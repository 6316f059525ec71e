"""Error taxonomy for the grocery store core.

Every failure surfaced by a store operation is one of the classes below.
Callers branch on the class (or on ``code``) and use ``retryable`` to decide
whether the whole operation may be re-issued.
"""

from protean.exceptions import ValidationError


class StoreError(Exception):
    """Base exception for all store errors."""

    code = "internal"
    retryable = False

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def details(self) -> dict:
        """Structured payload describing the failure."""
        return {"code": self.code, "message": self.message}


class InvalidArgument(StoreError):
    """Raised for a malformed or missing input value."""

    code = "invalid_argument"

    def __init__(self, messages: dict[str, list[str]]):
        self.messages = messages
        summary = "; ".join(f"{field}: {', '.join(errors)}" for field, errors in messages.items())
        super().__init__(summary or "Invalid argument")

    def details(self) -> dict:
        return {**super().details(), "fields": self.messages}


class NotFound(StoreError):
    """Raised when a cart, order or product id is unknown."""

    code = "not_found"

    def __init__(self, kind: str, identifier: str):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} not found: {identifier}")

    def details(self) -> dict:
        return {**super().details(), "kind": self.kind, "id": self.identifier}


class EmptyCart(StoreError):
    """Raised when checking out a cart that has no lines."""

    code = "empty_cart"

    def __init__(self, cart_id: str):
        self.cart_id = cart_id
        super().__init__(f"Cart is empty: {cart_id}")

    def details(self) -> dict:
        return {**super().details(), "cart_id": self.cart_id}


class InsufficientStock(StoreError):
    """Raised when a requested quantity exceeds the product's current stock."""

    code = "insufficient_stock"

    def __init__(self, product_id: str, product_name: str, available: int, requested: int):
        self.product_id = product_id
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for {product_name}. Available: {available}, Requested: {requested}"
        )

    def details(self) -> dict:
        return {
            **super().details(),
            "product_id": self.product_id,
            "product_name": self.product_name,
            "available": self.available,
            "requested": self.requested,
        }


class Unavailable(StoreError):
    """Raised when a shared resource could not be acquired in time, or was
    changed by a concurrent writer before this operation committed. Safe to retry.
    """

    code = "unavailable"
    retryable = True

    def __init__(self, resource: str, timeout: float | None = None):
        self.resource = resource
        self.timeout = timeout
        if timeout is None:
            message = f"{resource} was changed concurrently; retry the operation"
        else:
            message = f"Timed out after {timeout}s waiting for {resource}"
        super().__init__(message)

    def details(self) -> dict:
        return {**super().details(), "resource": self.resource}


class Internal(StoreError):
    """Raised when storage fails unexpectedly. The unit of work has been rolled back."""

    code = "internal"

    def __init__(self, message: str = "Internal storage failure"):
        super().__init__(message)


def from_validation_error(exc: ValidationError) -> InvalidArgument:
    """Translate a Protean field validation failure."""
    messages = exc.messages if isinstance(getattr(exc, "messages", None), dict) else {"_entity": [str(exc)]}
    return InvalidArgument({str(k): [str(m) for m in (v if isinstance(v, list) else [v])] for k, v in messages.items()})

