"""Read-only product lookups used by the stock ledger and the checkout workflow."""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from grocery.catalogue.product import Product
from grocery.utils.uow import load


@dataclass(frozen=True)
class ProductSnapshot:
    """Point-in-time view of a product row."""

    id: str
    name: str
    selling_price: int
    cost_price: int
    num_of_stock: int
    category_id: str | None = None
    merchant_id: str | None = None

    @classmethod
    def of(cls, product: Product) -> "ProductSnapshot":
        return cls(
            id=str(product.id),
            name=product.name,
            selling_price=product.selling_price,
            cost_price=product.cost_price,
            num_of_stock=product.num_of_stock or 0,
            category_id=str(product.category_id) if product.category_id else None,
            merchant_id=str(product.merchant_id) if product.merchant_id else None,
        )


class CatalogReader:
    def _repo(self):
        return current_domain.repository_for(Product)

    def get(self, product_id) -> ProductSnapshot:
        return ProductSnapshot.of(load(self._repo(), "Product", product_id))

    def price_of(self, product_id) -> int:
        """Current selling price; becomes the price-at-purchase of an order line."""
        return self.get(product_id).selling_price

    def list_products(self) -> list[ProductSnapshot]:
        products = self._repo()._dao.query.all().items
        return sorted((ProductSnapshot.of(p) for p in products), key=lambda p: p.name)
