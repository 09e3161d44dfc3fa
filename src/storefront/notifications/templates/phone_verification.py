"""Phone verification template — text message carrying the phone code."""


class PhoneVerificationTemplate:
    name = "phone_verification"

    @staticmethod
    def render(context: dict) -> dict:
        store = context.get("store_name", "our store")
        code = context["code"]
        minutes = context.get("ttl_minutes", 10)
        body = f"{store}: your phone verification code is {code}. Valid for {minutes} minutes."
        return {"subject": "", "body": body, "html_body": None}
