"""
Notification interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DeliveryReport:
    """Result of a message send."""

    delivered: bool
    reason: Optional[str] = None

    @classmethod
    def ok(cls) -> "DeliveryReport":
        return cls(delivered=True)

    @classmethod
    def failed(cls, reason: str) -> "DeliveryReport":
        return cls(delivered=False, reason=reason)


class INotifier(ABC):
    """Abstract interface for short message delivery."""

    @abstractmethod
    async def send(self, phone: str, message: str) -> DeliveryReport:
        """
        Send a short message.

        Args:
            phone: Recipient number (normalized to E.164 by the adapter)
            message: Message body

        Returns:
            DeliveryReport with delivered flag and failure reason

        Raises:
            NotificationError: If the gateway cannot be reached
        """

    async def close(self) -> None:
        """Release network resources."""
