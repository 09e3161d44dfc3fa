"""ReviewIntegrityEngine — verified review writes and the product rating summary.

Every committed create or delete is followed by an explicit full recompute of
the product's rating from its live reviews. Writes and their recompute hold
the engine lock, so the duplicate check and the insert cannot interleave
and summaries are applied in commit order.
"""

import threading
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.catalog import Catalog
from storefront.reviews.review.removal import DeleteReview
from storefront.reviews.review.review import Review
from storefront.reviews.review.submission import SubmitReview
from storefront.shared.errors import NotFound
from storefront.shared.pagination import Page, fetch_all, paginate

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RatingSummary:
    product_id: str
    average_rating: float
    review_count: int


def summarize(ratings: list[int]) -> tuple[float, int]:
    """Mean rounded half-up to one decimal, and the count. ``(0.0, 0)`` when empty."""
    if not ratings:
        return 0.0, 0
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)), len(ratings)


class ReviewIntegrityEngine:
    _write_lock = threading.Lock()

    def __init__(self, catalog: Catalog | None = None):
        self.catalog = catalog or Catalog()

    def submit(self, product_id, order_id, rating, title=None, comment=None, account_id=None) -> Review:
        command = SubmitReview(
            product_id=product_id,
            order_id=order_id,
            rating=rating,
            title=title or None,
            comment=comment or None,
            account_id=account_id,
        )
        with self._write_lock:
            review_id = current_domain.process(command, asynchronous=False)
            logger.info("review_submitted", review_id=review_id, product_id=str(product_id), order_id=str(order_id))
            self.recompute_aggregate(product_id)

        return self.get(review_id)

    def delete(self, review_id, requester_account_id=None) -> bool:
        with self._write_lock:
            product_id = current_domain.process(
                DeleteReview(review_id=review_id, requester_account_id=requester_account_id),
                asynchronous=False,
            )
            logger.info("review_deleted", review_id=str(review_id), product_id=product_id)
            self.recompute_aggregate(product_id)
        return True

    def recompute_aggregate(self, product_id) -> RatingSummary:
        """Rebuild the product's rating summary from every review that references it."""
        reviews = fetch_all(_reviews().filter(product_id=str(product_id)))
        average, count = summarize([review.rating.score for review in reviews])

        if not self.catalog.set_rating_aggregate(product_id, average, count):
            logger.warning("rating_recompute_skipped", product_id=str(product_id), review_count=count)
        return RatingSummary(product_id=str(product_id), average_rating=average, review_count=count)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def get(self, review_id) -> Review:
        try:
            return current_domain.repository_for(Review).get(review_id)
        except ObjectNotFoundError:
            raise NotFound("Review not found") from None

    def for_product(self, product_id, page: int = 1, limit: int = 10) -> Page:
        return paginate(_reviews().filter(product_id=str(product_id)).order_by("-created_at"), page, limit)

    def for_order(self, order_id) -> dict[str, Review]:
        """Reviews of one order keyed by product id."""
        reviews = fetch_all(_reviews().filter(order_id=str(order_id)))
        return {str(review.product_id): review for review in reviews}

    def check(self, order_id, product_id) -> Review | None:
        matches = _reviews().filter(order_id=str(order_id), product_id=str(product_id)).all().items
        return matches[0] if matches else None


def _reviews():
    return current_domain.repository_for(Review)._dao.query
