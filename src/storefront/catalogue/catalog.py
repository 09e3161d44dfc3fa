"""Catalog — the collaborator contract the core uses to reach product records."""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product.creation import AddProduct
from storefront.catalogue.product.product import Product
from storefront.catalogue.product.rating import RecordRatingSummary
from storefront.shared.errors import NotFound


@dataclass(frozen=True)
class LineItemSnapshot:
    name: str
    price: float
    image: str | None = None


class Catalog:
    def get_line_item_snapshot(self, product_id) -> LineItemSnapshot | None:
        """Name, price and image of a product at this moment, or None if unknown."""
        try:
            product = current_domain.repository_for(Product).get(product_id)
        except ObjectNotFoundError:
            return None
        return LineItemSnapshot(name=product.name, price=product.price, image=product.image)

    def set_rating_aggregate(self, product_id, average: float, count: int) -> bool:
        """Store a rating summary. Returns False when the product does not exist."""
        return current_domain.process(
            RecordRatingSummary(product_id=product_id, average_rating=average, review_count=count),
            asynchronous=False,
        )

    def add_product(self, name, price, image=None, category=None, description=None) -> str:
        return current_domain.process(
            AddProduct(name=name, price=price, image=image, category=category, description=description),
            asynchronous=False,
        )

    def get_product(self, product_id) -> Product:
        try:
            return current_domain.repository_for(Product).get(product_id)
        except ObjectNotFoundError:
            raise NotFound("Product not found") from None
