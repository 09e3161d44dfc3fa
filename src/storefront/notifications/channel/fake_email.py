"""In-memory email adapter used in development and tests."""

from uuid import uuid4

from storefront.notifications.channel.email_port import DispatchOutcome, EmailPort


class FakeEmailAdapter(EmailPort):
    """Keeps every message in ``outbox`` instead of delivering it."""

    def __init__(self):
        self.outbox: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"
        self.raise_on_send: Exception | None = None

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Email delivery failed",
        raise_on_send: Exception | None = None,
    ):
        """Make subsequent sends fail, either by result or by raising."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.raise_on_send = raise_on_send

    def send(self, to: str, subject: str, body: str, html_body: str | None = None) -> DispatchOutcome:
        if self.raise_on_send is not None:
            raise self.raise_on_send
        if not self.should_succeed:
            return {"message_id": None, "status": "failed", "error": self.failure_reason}

        message_id = f"email-{uuid4().hex[:12]}"
        self.outbox.append(
            {
                "message_id": message_id,
                "to": to,
                "subject": subject,
                "body": body,
                "html_body": html_body,
            }
        )
        return {"message_id": message_id, "status": "sent"}

    def messages_to(self, address: str) -> list[dict]:
        return [message for message in self.outbox if message["to"] == address]

    def reset(self):
        self.outbox.clear()
        self.configure()
