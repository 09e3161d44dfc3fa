"""Welcome template — sent once an account is activated."""

from html import escape

from storefront.notifications.templates.layout import wrap


class WelcomeTemplate:
    name = "welcome"

    @staticmethod
    def render(context: dict) -> dict:
        store = context.get("store_name", "our store")
        name = context.get("name", "there")
        return {
            "subject": f"Welcome to {store}!",
            "body": f"Welcome to {store}, {name}! Thank you for joining us.",
            "html_body": wrap(
                store,
                f"<h2>Welcome, {escape(name)}!</h2>"
                f"<p>Thank you for joining {escape(store)}. Your account is now active.</p>",
            ),
        }
