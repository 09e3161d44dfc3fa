"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A product was added to the catalog."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    added_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductRatingRecomputed:
    """The product's rating summary was rebuilt from its live reviews."""

    __version__ = 1

    product_id: Identifier(required=True)
    average_rating: Float(required=True)
    review_count: Integer(required=True)
    recomputed_at: DateTime(required=True)
