"""UpdateOrderStatus — move an order along its fulfillment graph."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import ORDER_STATUSES, Order
from storefront.shared.errors import NotFound


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=30)


@storefront.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        if command.status not in ORDER_STATUSES:
            raise ValidationError({"status": [f"Invalid status. Must be one of: {', '.join(ORDER_STATUSES)}"]})

        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(command.order_id)
        except ObjectNotFoundError:
            raise NotFound("Order not found") from None

        previous = order.status
        order.change_status(command.status)
        repo.add(order)
        return previous
