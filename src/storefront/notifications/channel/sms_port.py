"""SMS channel contract, used for phone verification codes."""

from abc import ABC, abstractmethod

from storefront.notifications.channel.email_port import DispatchOutcome


class SMSPort(ABC):
    @abstractmethod
    def send(self, to: str, body: str) -> DispatchOutcome:
        """Send a text message to a ten-digit mobile number."""
        ...
