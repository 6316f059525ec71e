"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the API's Pydantic request
schemas. Prices are integers in the minor currency unit.
"""

import random

from faker import Faker

fake = Faker()

_PRODUCE = [
    "Apples",
    "Bananas",
    "Carrots",
    "Eggs",
    "Milk",
    "Oat Milk",
    "Bread",
    "Butter",
    "Cheddar",
    "Tomatoes",
    "Spinach",
    "Rice",
]


# ---------- Catalogue ----------


def product_data(num_of_stock: int | None = None) -> dict:
    """Generate AddProductRequest payload."""
    cost = random.randint(20, 800)
    return {
        "name": f"{random.choice(_PRODUCE)} {fake.word().title()}"[:255],
        "selling_price": cost + random.randint(5, 400),
        "cost_price": cost,
        "num_of_stock": num_of_stock if num_of_stock is not None else random.randint(50, 500),
    }


def restock_data() -> dict:
    return {"quantity": random.randint(10, 100)}


def price_data() -> dict:
    return {"selling_price": random.randint(25, 1200)}


# ---------- Cart ----------


def cart_item_data(product_id: str, cart_id: str | None = None, max_quantity: int = 5) -> dict:
    """Generate AddItemToCartRequest payload."""
    return {
        "cart_id": cart_id,
        "customer_id": None,
        "product_id": product_id,
        "quantity": random.randint(1, max_quantity),
    }


# ---------- Checkout ----------


def checkout_data() -> dict:
    """Generate PlaceOrderRequest payload."""
    return {
        "customer_name": fake.name()[:255],
        "address": fake.address().replace("\n", ", ")[:500],
        "fulfillment_type": random.choice(["PICK_UP", "DELIVERY"]),
    }
