"""NotificationGateway — fire-and-forget email and SMS delivery.

Every send returns a ``DeliveryResult``. Adapter failures, whether reported or
raised, are logged here and never reach the caller.
"""

from dataclasses import dataclass

import structlog

from storefront.config import get_settings
from storefront.notifications.channel import NotificationChannel, get_channel
from storefront.notifications.templates import get_template

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DeliveryResult:
    success: bool
    message_id: str | None = None
    error: str | None = None


def _to_result(outcome: dict) -> DeliveryResult:
    if outcome.get("status") == "sent":
        return DeliveryResult(success=True, message_id=outcome.get("message_id"))
    return DeliveryResult(success=False, error=outcome.get("error") or "Delivery failed")


class NotificationGateway:
    def send(self, to: str, subject: str, html_body: str | None, text_body: str) -> DeliveryResult:
        try:
            outcome = get_channel(NotificationChannel.EMAIL.value).send(
                to=to, subject=subject, body=text_body, html_body=html_body
            )
        except Exception as exc:
            logger.error("email_dispatch_raised", to=to, subject=subject, error=str(exc))
            return DeliveryResult(success=False, error=str(exc))

        result = _to_result(outcome)
        if result.success:
            logger.info("email_dispatched", to=to, subject=subject, message_id=result.message_id)
        else:
            logger.warning("email_dispatch_failed", to=to, subject=subject, error=result.error)
        return result

    def send_sms(self, to: str, body: str) -> DeliveryResult:
        try:
            outcome = get_channel(NotificationChannel.SMS.value).send(to=to, body=body)
        except Exception as exc:
            logger.error("sms_dispatch_raised", to=to, error=str(exc))
            return DeliveryResult(success=False, error=str(exc))

        result = _to_result(outcome)
        if result.success:
            logger.info("sms_dispatched", to=to, message_id=result.message_id)
        else:
            logger.warning("sms_dispatch_failed", to=to, error=result.error)
        return result

    def send_template(self, to: str, template_name: str, context: dict) -> DeliveryResult:
        """Render a registered template and deliver it by email."""
        rendered = get_template(template_name).render({"store_name": get_settings().store_name, **context})
        return self.send(to, rendered["subject"], rendered["html_body"], rendered["body"])

    def send_template_sms(self, to: str, template_name: str, context: dict) -> DeliveryResult:
        rendered = get_template(template_name).render({"store_name": get_settings().store_name, **context})
        return self.send_sms(to, rendered["body"])
