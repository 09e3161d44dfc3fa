"""Outbound channel contracts.

Adapters report the outcome of a send as a ``DispatchOutcome`` instead of
raising; ``NotificationGateway`` still guards against adapters that raise.
"""

from abc import ABC, abstractmethod
from typing import Literal, TypedDict


class DispatchOutcome(TypedDict, total=False):
    message_id: str | None
    status: Literal["sent", "failed"]
    error: str


class EmailPort(ABC):
    """Delivers one email to one recipient."""

    @abstractmethod
    def send(self, to: str, subject: str, body: str, html_body: str | None = None) -> DispatchOutcome:
        """``body`` is the plain-text part; ``html_body`` falls back to it when absent."""
        ...
