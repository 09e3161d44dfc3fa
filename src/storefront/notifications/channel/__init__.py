"""Channel adapter registry.

Adapters are singletons per channel. Email goes through SendGrid when
``EMAIL_ADAPTER=sendgrid``; every other setting uses the in-memory fakes.
"""

from enum import Enum

from storefront.config import get_settings


class NotificationChannel(Enum):
    EMAIL = "Email"
    SMS = "SMS"


_channel_instances: dict[str, object] = {}


def _build_email_adapter():
    settings = get_settings()
    if settings.email_adapter == "sendgrid":
        from storefront.notifications.channel.sendgrid_email import SendGridEmailAdapter

        return SendGridEmailAdapter(api_key=settings.sendgrid_api_key, from_email=settings.email_from)

    from storefront.notifications.channel.fake_email import FakeEmailAdapter

    return FakeEmailAdapter()


def _build_sms_adapter():
    from storefront.notifications.channel.fake_sms import FakeSMSAdapter

    return FakeSMSAdapter()


def get_channel(channel_type: str):
    """Return the configured adapter for ``channel_type`` ("Email" or "SMS")."""
    if channel_type not in _channel_instances:
        if channel_type == NotificationChannel.EMAIL.value:
            _channel_instances[channel_type] = _build_email_adapter()
        elif channel_type == NotificationChannel.SMS.value:
            _channel_instances[channel_type] = _build_sms_adapter()
        else:
            raise ValueError(f"Unknown channel type: {channel_type}")

    return _channel_instances[channel_type]


def set_channel(channel_type: str, adapter) -> None:
    _channel_instances[channel_type] = adapter


def reset_channels():
    """Drop all adapter singletons so the next lookup rebuilds them."""
    _channel_instances.clear()
