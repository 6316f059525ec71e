"""FastAPI routes for the grocery domain — products, carts and orders."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from grocery.api.schemas import (
    AddItemToCartRequest,
    AddProductRequest,
    CartResponse,
    ChangeOrderStatusRequest,
    ChangePriceRequest,
    OrderResponse,
    PlaceOrderRequest,
    ProductIdResponse,
    ProductResponse,
    RestockRequest,
)
from grocery.cart.store import CartStore
from grocery.catalogue.management import AddProduct, change_price
from grocery.catalogue.reader import CatalogReader
from grocery.order.placement import OrderWorkflow
from grocery.order.status import change_order_status, get_order
from grocery.stock.ledger import StockLedger

# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(body: AddProductRequest) -> ProductIdResponse:
    command = AddProduct(
        name=body.name,
        selling_price=body.selling_price,
        cost_price=body.cost_price,
        num_of_stock=body.num_of_stock,
        category_id=body.category_id,
        merchant_id=body.merchant_id,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("", response_model=list[ProductResponse])
async def list_products() -> list[ProductResponse]:
    return [ProductResponse.of(p) for p in CatalogReader().list_products()]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return ProductResponse.of(CatalogReader().get(product_id))


@product_router.post("/{product_id}/restock", response_model=ProductResponse)
async def restock_product(product_id: str, body: RestockRequest) -> ProductResponse:
    return ProductResponse.of(StockLedger().restock(product_id, body.quantity))


@product_router.put("/{product_id}/price", response_model=ProductResponse)
async def change_product_price(product_id: str, body: ChangePriceRequest) -> ProductResponse:
    return ProductResponse.of(change_price(product_id, body.selling_price))


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.post("/items", response_model=CartResponse)
async def add_item_to_cart(body: AddItemToCartRequest) -> CartResponse:
    cart = CartStore().add_item(
        product_id=body.product_id,
        quantity=body.quantity,
        cart_id=body.cart_id,
        customer_id=body.customer_id,
    )
    return CartResponse.of(cart)


@cart_router.delete("/{cart_id}/items/{product_id}", response_model=CartResponse)
async def remove_item_from_cart(cart_id: str, product_id: str) -> CartResponse:
    return CartResponse.of(CartStore().remove_item(cart_id, product_id))


@cart_router.get("/{cart_id}", response_model=CartResponse)
async def get_cart(cart_id: str) -> CartResponse:
    return CartResponse.of(CartStore().get_cart(cart_id))


@cart_router.post("/{cart_id}/checkout", status_code=201, response_model=OrderResponse)
async def place_order(cart_id: str, body: PlaceOrderRequest) -> OrderResponse:
    order = OrderWorkflow().place_order(
        cart_id=cart_id,
        customer_name=body.customer_name,
        address=body.address,
        fulfillment_type=body.fulfillment_type,
    )
    return OrderResponse.of(order)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("/{order_id}", response_model=OrderResponse)
async def read_order(order_id: str) -> OrderResponse:
    return OrderResponse.of(get_order(order_id), with_items=True)


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(order_id: str, body: ChangeOrderStatusRequest) -> OrderResponse:
    return OrderResponse.of(change_order_status(order_id, body.status))
