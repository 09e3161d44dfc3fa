"""Registration code template — sent when a signup starts or is re-sent."""

from html import escape

from storefront.notifications.templates.layout import code_block, wrap


class RegistrationCodeTemplate:
    name = "registration_code"

    @staticmethod
    def render(context: dict) -> dict:
        store = context.get("store_name", "our store")
        name = context.get("name", "there")
        code = context["code"]
        minutes = context.get("ttl_minutes", 10)
        return {
            "subject": f"Complete your registration - {store}",
            "body": (
                f"Almost there, {name}!\n\n"
                f"Your registration code is {code}. It is valid for {minutes} minutes.\n"
                "Do not share it with anyone."
            ),
            "html_body": wrap(
                store,
                f"<h2>Almost there, {escape(name)}!</h2>"
                "<p>Use this code to complete your registration:</p>"
                f"{code_block(code)}"
                f"<p>The code is valid for {minutes} minutes. Do not share it with anyone.</p>",
            ),
        }
