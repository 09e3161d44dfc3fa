"""Product aggregate — the slice of the catalog the storefront core touches.

Catalog CRUD lives elsewhere. The core reads line-item snapshots from products
and owns the denormalized rating summary.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text

from storefront.catalogue.product.events import ProductAdded, ProductRatingRecomputed
from storefront.domain import storefront


@storefront.aggregate
class Product:
    name: String(required=True, max_length=200)
    price: Float(required=True, min_value=0.0)
    image: String(max_length=500)
    category: String(max_length=100)
    description: Text()

    # Rating summary, rebuilt from reviews
    average_rating: Float(default=0.0)
    review_count: Integer(default=0)

    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def rating_summary_must_be_consistent(self):
        if self.review_count is not None and self.review_count < 0:
            raise ValidationError({"review_count": ["Review count cannot be negative"]})
        if self.average_rating is not None and not 0 <= self.average_rating <= 5:
            raise ValidationError({"average_rating": ["Average rating must be between 0 and 5"]})
        if self.review_count == 0 and self.average_rating:
            raise ValidationError({"average_rating": ["A product without reviews has no rating"]})

    @classmethod
    def add(cls, name, price, image=None, category=None, description=None):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            price=price,
            image=image,
            category=category,
            description=description,
            average_rating=0.0,
            review_count=0,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=name,
                price=price,
                added_at=now,
            )
        )
        return product

    def record_rating(self, average_rating: float, review_count: int):
        """Overwrite the rating summary with a freshly computed one."""
        now = datetime.now(UTC)
        with atomic_change(self):
            self.average_rating = average_rating
            self.review_count = review_count
            self.updated_at = now

        self.raise_(
            ProductRatingRecomputed(
                product_id=str(self.id),
                average_rating=average_rating,
                review_count=review_count,
                recomputed_at=now,
            )
        )
