"""Review aggregate (CQRS) — one verified review per product and order.

A review exists only for a product that appears in an order that reached
``delivered``. Reviews are deleted outright; there is no moderation state.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.reviews.review.events import ReviewSubmitted


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Review")
class Rating:
    """A star rating from 1 to 5."""

    score = Integer(required=True)

    @invariant.post
    def score_must_be_in_range(self):
        if self.score is not None and (self.score < 1 or self.score > 5):
            raise ValidationError({"rating": ["Rating must be between 1 and 5"]})


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Review:
    product_id = Identifier(required=True)
    order_id = Identifier(required=True)
    account_id = Identifier()
    customer_name = String(required=True, max_length=100)

    rating = ValueObject(Rating, required=True)
    title = String(max_length=100)
    comment = String(max_length=500)

    verified = Boolean(default=True)
    created_at = DateTime()

    @classmethod
    def submit(cls, product_id, order_id, customer_name, rating, title=None, comment=None, account_id=None):
        now = datetime.now(UTC)
        review = cls(
            product_id=product_id,
            order_id=order_id,
            account_id=account_id,
            customer_name=customer_name,
            rating=Rating(score=rating),
            title=title,
            comment=comment,
            verified=True,
            created_at=now,
        )
        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                product_id=str(product_id),
                order_id=str(order_id),
                account_id=str(account_id) if account_id else None,
                rating=rating,
                title=title,
                submitted_at=now,
            )
        )
        return review

    def is_owned_by(self, account_id) -> bool:
        return self.account_id is not None and str(self.account_id) == str(account_id)


@storefront.repository(part_of=Review)
class ReviewRepository:
    def remove(self, review: Review) -> None:
        """Hard-delete ``review``; reviews keep no tombstone."""
        self._dao.delete(review)
