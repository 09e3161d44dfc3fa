"""SendGrid email adapter."""

import sendgrid
from sendgrid.helpers.mail import Mail

from storefront.notifications.channel.email_port import DispatchOutcome, EmailPort

_ACCEPTED = (200, 201, 202)


class SendGridEmailAdapter(EmailPort):
    def __init__(self, api_key: str, from_email: str):
        self.client = sendgrid.SendGridAPIClient(api_key=api_key)
        self.from_email = from_email

    def send(self, to: str, subject: str, body: str, html_body: str | None = None) -> DispatchOutcome:
        message = Mail(
            from_email=self.from_email,
            to_emails=to,
            subject=subject,
            plain_text_content=body,
            html_content=html_body or body,
        )
        response = self.client.send(message)
        if response.status_code in _ACCEPTED:
            return {"message_id": response.headers.get("X-Message-Id"), "status": "sent"}
        return {
            "message_id": None,
            "status": "failed",
            "error": f"SendGrid responded with {response.status_code}",
        }
