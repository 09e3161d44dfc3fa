"""PlaceOrder — number and persist an order in one unit of work."""

import json

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Order, PaymentStatus
from storefront.ordering.order.sequence import OrderSequence, format_order_number, next_value


@storefront.command(part_of="Order")
class PlaceOrder:
    customer_name = String(required=True, max_length=100)
    customer_email = String(required=True, max_length=254)
    customer_phone = String(required=True, max_length=10)
    customer_address = Text(required=True)
    customer_postal_code = String(required=True, max_length=6)
    items = Text(required=True)  # JSON array of {product_id, name, price, quantity, image}
    subtotal = Float(required=True, min_value=0.0)
    delivery_fee = Float(default=5.0, min_value=0.0)
    total = Float(required=True, min_value=0.0)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PAID.value)
    payment_id = String(max_length=255)
    account_id = Identifier()


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        number = next_value(current_domain.repository_for(OrderSequence))

        order = Order.place(
            order_number=format_order_number(number),
            customer={
                "name": command.customer_name,
                "email": command.customer_email,
                "phone": command.customer_phone,
                "address": command.customer_address,
                "postal_code": command.customer_postal_code,
            },
            items=json.loads(command.items),
            subtotal=command.subtotal,
            delivery_fee=command.delivery_fee,
            total=command.total,
            payment_status=command.payment_status,
            payment_id=command.payment_id,
            account_id=command.account_id,
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)
