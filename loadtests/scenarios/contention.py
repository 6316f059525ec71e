"""Hot-product stress test.

Every user checks out the same small-stock product as fast as it can. The
store must never sell more units than it had: at the end of a run the sum
of placed quantities plus the remaining stock equals the stock that was
seeded plus any restocks.
"""

import requests
from locust import HttpUser, constant_pacing, events, task

from loadtests.data_generators import checkout_data, product_data
from loadtests.helpers.response import error_code, extract_error_detail

_hot_product = {"id": None}


@events.test_start.add_listener
def seed_hot_product(environment, **_kwargs):
    """Create the one product every HotProductUser fights over."""
    if environment.host is None:
        return

    resp = requests.post(f"{environment.host}/products", json=product_data(num_of_stock=100), timeout=10)
    resp.raise_for_status()
    _hot_product["id"] = resp.json()["product_id"]


class HotProductUser(HttpUser):
    """Stress test: many single-line checkouts against one product."""

    wait_time = constant_pacing(0.1)  # ~10 checkouts/sec per user

    @task
    def buy_hot_product(self):
        product_id = _hot_product["id"]
        if product_id is None:
            return

        resp = self.client.post(
            "/carts/items",
            json={"product_id": product_id, "quantity": 1},
            name="[HOT] POST /carts/items",
        )
        if resp.status_code != 200:
            return
        cart_id = resp.json()["id"]

        with self.client.post(
            f"/carts/{cart_id}/checkout",
            json=checkout_data(),
            catch_response=True,
            name="[HOT] POST /carts/{id}/checkout",
        ) as checkout:
            if checkout.status_code == 201 or error_code(checkout) in {"insufficient_stock", "unavailable"}:
                checkout.success()
            else:
                checkout.failure(f"Checkout failed: {checkout.status_code} — {extract_error_detail(checkout)}")
