"""SubmitReview — accept a review for a delivered order's product.

Checks run in order: the order exists, it was delivered, it contains the
product, and the (product, order) pair has no review yet.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Order, OrderStatus
from storefront.reviews.review.review import Review
from storefront.shared.errors import Conflict, NotFound, PreconditionFailed


@storefront.command(part_of="Review")
class SubmitReview:
    product_id = Identifier(required=True)
    order_id = Identifier(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    title = String(max_length=100)
    comment = String(max_length=500)
    account_id = Identifier()


@storefront.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        try:
            order = current_domain.repository_for(Order).get(command.order_id)
        except ObjectNotFoundError:
            raise NotFound("Order not found") from None

        if order.status != OrderStatus.DELIVERED.value:
            raise PreconditionFailed("You can only review items from delivered orders. This order is not yet delivered")

        if not order.contains_product(command.product_id):
            raise PreconditionFailed("This product is not in this order")

        repo = current_domain.repository_for(Review)
        existing = repo._dao.query.filter(
            product_id=str(command.product_id),
            order_id=str(command.order_id),
        ).all()
        if existing.items:
            raise Conflict("You have already reviewed this product for this order")

        review = Review.submit(
            product_id=command.product_id,
            order_id=command.order_id,
            customer_name=order.customer_name,
            rating=command.rating,
            title=command.title,
            comment=command.comment,
            account_id=command.account_id,
        )
        repo.add(review)
        return str(review.id)
