"""Pydantic request/response schemas for the grocery API.

These are external contracts — separate from the internal Protean aggregates.
Money fields are integers in the minor currency unit.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from grocery.cart.cart import Cart
from grocery.catalogue.reader import ProductSnapshot
from grocery.order.order import FulfillmentType, Order, OrderStatus


# ---------------------------------------------------------------------------
# Product schemas
# ---------------------------------------------------------------------------
class AddProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    selling_price: int = Field(ge=0)
    cost_price: int = Field(ge=0)
    num_of_stock: int = Field(ge=0)
    category_id: str | None = None
    merchant_id: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Bananas",
                    "selling_price": 79,
                    "cost_price": 40,
                    "num_of_stock": 200,
                }
            ]
        }
    }


class RestockRequest(BaseModel):
    quantity: int = Field(gt=0)


class ChangePriceRequest(BaseModel):
    selling_price: int = Field(ge=0)


class ProductIdResponse(BaseModel):
    product_id: str


class ProductResponse(BaseModel):
    id: str
    name: str
    selling_price: int
    cost_price: int
    num_of_stock: int
    category_id: str | None = None
    merchant_id: str | None = None

    @classmethod
    def of(cls, snapshot: ProductSnapshot) -> "ProductResponse":
        return cls(**snapshot.__dict__)


# ---------------------------------------------------------------------------
# Cart schemas
# ---------------------------------------------------------------------------
class AddItemToCartRequest(BaseModel):
    cart_id: str | None = None
    customer_id: str | None = None
    product_id: str
    quantity: int

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "cart_id": None,
                    "customer_id": "cust-001",
                    "product_id": "3f1c6a0e-8f43-4a55-9d7b-0b3f4a1f2c11",
                    "quantity": 2,
                }
            ]
        }
    }


class CartItemResponse(BaseModel):
    product_id: str
    quantity: int


class CartResponse(BaseModel):
    id: str
    customer_id: str | None = None
    updated_at: datetime | None = None
    cart_items: list[CartItemResponse] = []

    @classmethod
    def of(cls, cart: Cart) -> "CartResponse":
        return cls(
            id=str(cart.id),
            customer_id=str(cart.customer_id) if cart.customer_id else None,
            updated_at=cart.updated_at,
            cart_items=[CartItemResponse(product_id=line.product_id, quantity=line.quantity) for line in cart.lines()],
        )


# ---------------------------------------------------------------------------
# Order schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    customer_name: str
    address: str
    fulfillment_type: FulfillmentType


class ChangeOrderStatusRequest(BaseModel):
    status: OrderStatus


class OrderItemResponse(BaseModel):
    product_id: str
    quantity: int
    price_at_purchase: int


class OrderResponse(BaseModel):
    id: str
    customer_name: str
    address: str
    fulfillment_type: FulfillmentType
    status: OrderStatus
    created_at: datetime | None = None
    order_items: list[OrderItemResponse] | None = None

    @classmethod
    def of(cls, order: Order, with_items: bool = False) -> "OrderResponse":
        items = None
        if with_items:
            items = [
                OrderItemResponse(
                    product_id=str(item.product_id),
                    quantity=item.quantity,
                    price_at_purchase=item.price_at_purchase,
                )
                for item in order.items or []
            ]
        return cls(
            id=str(order.id),
            customer_name=order.customer_name,
            address=order.address,
            fulfillment_type=FulfillmentType(order.fulfillment_type),
            status=OrderStatus(order.status),
            created_at=order.created_at,
            order_items=items,
        )
