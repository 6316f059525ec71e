"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state — no cross-user sharing.
State tracks entity IDs returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks state for a single simulated shopping trip."""

    product_ids: list[str] = field(default_factory=list)
    cart_id: str | None = None
    line_count: int = 0
    order_id: str | None = None


@dataclass
class ManagerState:
    """Tracks the products a simulated store manager looks after."""

    product_ids: list[str] = field(default_factory=list)
