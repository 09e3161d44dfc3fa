"""Domain events for the Review aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Review")
class ReviewSubmitted:
    """A verified purchaser reviewed a product from a delivered order."""

    __version__ = 1

    review_id: Identifier(required=True)
    product_id: Identifier(required=True)
    order_id: Identifier(required=True)
    account_id: Identifier()
    rating: Integer(required=True)
    title: String()
    submitted_at: DateTime(required=True)
