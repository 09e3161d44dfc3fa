"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """An order was placed and assigned its number."""

    __version__ = 1

    order_id: Identifier(required=True)
    order_number: String(required=True)
    account_id: Identifier()
    customer_email: String(required=True)
    item_count: Integer(required=True)
    total: Float(required=True)
    payment_status: String(required=True)
    placed_at: DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """The fulfillment status of an order moved along the transition graph."""

    __version__ = 1

    order_id: Identifier(required=True)
    order_number: String(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
    changed_at: DateTime(required=True)
