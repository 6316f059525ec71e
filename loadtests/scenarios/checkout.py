"""Shopping and checkout load test scenarios.

Shoppers fill a cart from a small shared product range and check out, so
concurrent checkouts compete for the same stock. A 409 insufficient_stock
or a 503 unavailable is an expected outcome under contention and is not
counted as a failure.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import cart_item_data, checkout_data, price_data, product_data, restock_data
from loadtests.helpers.response import error_code, extract_error_detail
from loadtests.helpers.state import ManagerState, ShopperState

# Outcomes a correct store produces when shoppers race for the same units
_EXPECTED_REJECTIONS = {"insufficient_stock", "unavailable", "empty_cart"}


class ShoppingTripJourney(SequentialTaskSet):
    """Browse -> Add Items -> Remove One -> Check Out -> Read Order."""

    def on_start(self):
        self.state = ShopperState()

    @task
    def browse(self):
        with self.client.get("/products", catch_response=True, name="GET /products") as resp:
            if resp.status_code != 200:
                resp.failure(f"List products failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()
                return
            products = resp.json()
            if not products:
                resp.success()
                self.interrupt()
                return
            picks = random.sample(products, k=min(3, len(products)))
            self.state.product_ids = [p["id"] for p in picks]

    @task
    def fill_cart(self):
        for product_id in self.state.product_ids:
            with self.client.post(
                "/carts/items",
                json=cart_item_data(product_id, cart_id=self.state.cart_id),
                catch_response=True,
                name="POST /carts/items",
            ) as resp:
                if resp.status_code == 200:
                    self.state.cart_id = resp.json()["id"]
                    self.state.line_count += 1
                else:
                    resp.failure(f"Add item failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def remove_one(self):
        if self.state.line_count < 2:
            return
        product_id = self.state.product_ids[-1]
        with self.client.delete(
            f"/carts/{self.state.cart_id}/items/{product_id}",
            catch_response=True,
            name="DELETE /carts/{id}/items/{product_id}",
        ) as resp:
            if resp.status_code == 200:
                self.state.line_count -= 1
            else:
                resp.failure(f"Remove item failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def checkout(self):
        if not self.state.cart_id:
            self.interrupt()
            return
        with self.client.post(
            f"/carts/{self.state.cart_id}/checkout",
            json=checkout_data(),
            catch_response=True,
            name="POST /carts/{id}/checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["id"]
            elif error_code(resp) in _EXPECTED_REJECTIONS:
                resp.success()
            else:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def read_order(self):
        if self.state.order_id:
            self.client.get(f"/orders/{self.state.order_id}", name="GET /orders/{id}")
        self.interrupt()


class StoreManagerJourney(SequentialTaskSet):
    """Add Product -> Restock -> Reprice, running alongside shoppers."""

    def on_start(self):
        self.state = ManagerState()

    @task
    def add_product(self):
        with self.client.post("/products", json=product_data(), catch_response=True, name="POST /products") as resp:
            if resp.status_code == 201:
                self.state.product_ids.append(resp.json()["product_id"])
            else:
                resp.failure(f"Add product failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def restock(self):
        self.client.post(
            f"/products/{self.state.product_ids[-1]}/restock",
            json=restock_data(),
            name="POST /products/{id}/restock",
        )

    @task
    def reprice(self):
        self.client.put(
            f"/products/{self.state.product_ids[-1]}/price",
            json=price_data(),
            name="PUT /products/{id}/price",
        )
        self.interrupt()


class ShopperUser(HttpUser):
    """Locust user simulating a grocery shopper.

    Weighted distribution:
    - 90% Shopping trip ending in checkout
    - 10% Store manager catalogue upkeep
    """

    wait_time = between(0.5, 2.0)
    tasks = {
        ShoppingTripJourney: 9,
        StoreManagerJourney: 1,
    }
