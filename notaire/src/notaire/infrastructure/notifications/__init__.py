"""
Notification adapters.
"""

from notaire.infrastructure.notifications.logging_notifier import LoggingNotifier
from notaire.infrastructure.notifications.twilio_sms_notifier import (
    TwilioSmsNotifier,
)

__all__ = ["LoggingNotifier", "TwilioSmsNotifier"]
