"""In-memory SMS adapter used in development and tests."""

from uuid import uuid4

from storefront.notifications.channel.email_port import DispatchOutcome
from storefront.notifications.channel.sms_port import SMSPort


class FakeSMSAdapter(SMSPort):
    """Keeps every text message in ``outbox`` instead of delivering it."""

    def __init__(self):
        self.outbox: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "SMS delivery failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "SMS delivery failed"):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(self, to: str, body: str) -> DispatchOutcome:
        if not self.should_succeed:
            return {"message_id": None, "status": "failed", "error": self.failure_reason}

        message_id = f"sms-{uuid4().hex[:12]}"
        self.outbox.append({"message_id": message_id, "to": to, "body": body})
        return {"message_id": message_id, "status": "sent"}

    def reset(self):
        self.outbox.clear()
        self.configure()
