"""Grocery bounded context — Catalogue, Stock, Shopping Cart and Orders.

A single domain hosts every aggregate touched by a checkout so that one
UnitOfWork can span product, cart and order writes.
"""

import structlog
from protean.domain import Domain

grocery = Domain(name="grocery")

logger = structlog.get_logger(__name__)
