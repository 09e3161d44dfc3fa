"""Order confirmation template — sent after an order is placed."""

from html import escape

from storefront.notifications.templates.layout import money, wrap


class OrderConfirmationTemplate:
    name = "order_confirmation"

    @staticmethod
    def render(context: dict) -> dict:
        store = context.get("store_name", "our store")
        number = context["order_number"]
        items = context.get("items", [])
        lines = "".join(
            f"<tr><td>{escape(item['name'])} x {item['quantity']}</td>"
            f"<td>{money(item['price'] * item['quantity'])}</td></tr>"
            for item in items
        )
        return {
            "subject": f"Order Confirmed - {number} - {store}",
            "body": (
                f"Order Confirmed! Order Number: {number}. "
                f"Total: {money(context.get('total'))}. Thank you for ordering from {store}!"
            ),
            "html_body": wrap(
                store,
                f"<h2>Order Confirmed!</h2><p>Thank you for your order, {escape(context.get('customer_name', ''))}!</p>"
                f"<p><strong>Order Number:</strong> {escape(number)}<br>"
                f"<strong>Status:</strong> {escape(context.get('status', ''))}</p>"
                f"<p>{escape(context.get('customer_address') or '')}<br>"
                f"Postal code: {escape(context.get('customer_postal_code') or '')}</p>"
                f"<table>{lines}"
                f"<tr><td>Subtotal</td><td>{money(context.get('subtotal'))}</td></tr>"
                f"<tr><td>Delivery</td><td>{money(context.get('delivery_fee'))}</td></tr>"
                f"<tr><td><strong>Total</strong></td><td><strong>{money(context.get('total'))}</strong></td></tr>"
                "</table>",
            ),
        }
