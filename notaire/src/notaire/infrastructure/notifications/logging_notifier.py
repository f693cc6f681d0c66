"""
Notifier used when no SMS gateway is configured.
"""

from notaire.domain.services.i_notifier import DeliveryReport, INotifier
from notaire.domain.value_objects.phone_number import mask_phone
from notaire.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class LoggingNotifier(INotifier):
    """Logs messages instead of sending them and reports non-delivery."""

    async def send(self, phone: str, message: str) -> DeliveryReport:
        logger.info(f"SMS gateway not configured, message for {mask_phone(phone)}")
        return DeliveryReport.failed("SMS gateway not configured")
