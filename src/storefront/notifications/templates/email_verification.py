"""Email verification template — code for re-verifying an account email."""

from html import escape

from storefront.notifications.templates.layout import code_block, wrap


class EmailVerificationTemplate:
    name = "email_verification"

    @staticmethod
    def render(context: dict) -> dict:
        store = context.get("store_name", "our store")
        name = context.get("name", "there")
        code = context["code"]
        minutes = context.get("ttl_minutes", 10)
        return {
            "subject": f"Verify your email - {store}",
            "body": f"Hello {name}! Your email verification code is {code}. Valid for {minutes} minutes.",
            "html_body": wrap(
                store,
                f"<h2>Hello {escape(name)}!</h2>"
                "<p>Use this code to verify your email address:</p>"
                f"{code_block(code)}"
                f"<p>The code is valid for {minutes} minutes. If you did not request it, ignore this email.</p>",
            ),
        }
