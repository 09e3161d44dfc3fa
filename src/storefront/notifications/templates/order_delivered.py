"""Order delivered template — invites the customer to review their items."""

from html import escape

from storefront.notifications.templates.layout import wrap


class OrderDeliveredTemplate:
    name = "order_delivered"

    @staticmethod
    def render(context: dict) -> dict:
        store = context.get("store_name", "our store")
        number = context["order_number"]
        name = context.get("customer_name", "there")
        return {
            "subject": f"Your order {number} has been delivered - {store}",
            "body": (
                f"Hi {name}, your order {number} has been delivered. "
                "We'd love to hear what you think, leave a review from your orders page."
            ),
            "html_body": wrap(
                store,
                f"<h2>Delivered!</h2><p>Hi {escape(name)}, your order <strong>{escape(number)}</strong> "
                "has been delivered.</p><p>We'd love to hear what you think. "
                "Leave a review from your orders page.</p>",
            ),
        }
