"""DeleteReview — remove a review, checking ownership when both sides are known."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.reviews.review.review import Review
from storefront.shared.errors import Forbidden, NotFound


@storefront.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)
    requester_account_id = Identifier()


@storefront.command_handler(part_of=Review)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        repo = current_domain.repository_for(Review)
        try:
            review = repo.get(command.review_id)
        except ObjectNotFoundError:
            raise NotFound("Review not found") from None

        # Guest reviews and anonymous requests carry no ownership to check
        if command.requester_account_id and review.account_id and not review.is_owned_by(command.requester_account_id):
            raise Forbidden("Not authorized to delete this review")

        product_id = str(review.product_id)
        repo.remove(review)
        return product_id
