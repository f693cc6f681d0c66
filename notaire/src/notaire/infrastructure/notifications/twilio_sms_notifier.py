"""
Twilio SMS notifier.

Posts to the Twilio Messages REST endpoint with basic auth.
"""

import asyncio
import time
from typing import Optional

import aiohttp

from notaire.domain.exceptions import NotificationError
from notaire.domain.services.i_notifier import DeliveryReport, INotifier
from notaire.domain.value_objects.phone_number import mask_phone, to_e164
from notaire.infrastructure.monitoring.logger import get_logger
from notaire.infrastructure.monitoring.metrics import (
    backend_errors_total,
    backend_request_duration_seconds,
    backend_requests_total,
)

logger = get_logger(__name__)

SERVICE = "sms"


class TwilioSmsNotifier(INotifier):
    """SMS delivery through Twilio's REST API."""

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        api_url: str = "https://api.twilio.com",
        default_country_code: str = "+91",
        timeout: float = 15.0,
    ):
        """
        Initialize Twilio notifier.

        Args:
            account_sid: Twilio account SID
            auth_token: Twilio auth token
            from_number: Sender number in E.164
            api_url: Twilio API base URL
            default_country_code: Prefix for bare 10 digit numbers
            timeout: Request timeout in seconds
        """
        self.account_sid = account_sid
        self.from_number = from_number
        self.default_country_code = default_country_code
        self.messages_url = (
            f"{api_url.rstrip('/')}/2010-04-01/Accounts/{account_sid}/Messages.json"
        )
        self.auth = aiohttp.BasicAuth(account_sid, auth_token)
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def send(self, phone: str, message: str) -> DeliveryReport:
        """
        Send an SMS.

        Args:
            phone: Recipient number, normalized to E.164
            message: Message body

        Returns:
            DeliveryReport; on a non-2xx answer the reason carries the
            gateway's error text

        Raises:
            NotificationError: If Twilio cannot be reached
        """
        form = {
            "To": to_e164(phone, self.default_country_code),
            "From": self.from_number,
            "Body": message,
        }

        backend_requests_total.labels(service=SERVICE, operation="send").inc()
        start = time.perf_counter()
        try:
            status, body = await self._post_message(form)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            backend_errors_total.labels(
                service=SERVICE, error_type=type(e).__name__
            ).inc()
            raise NotificationError(f"Twilio unreachable: {e}") from e
        finally:
            backend_request_duration_seconds.labels(
                service=SERVICE, operation="send"
            ).observe(time.perf_counter() - start)

        if 200 <= status < 300:
            logger.info(f"SMS sent to {mask_phone(phone)}")
            return DeliveryReport.ok()

        backend_errors_total.labels(service=SERVICE, error_type=f"http_{status}").inc()
        logger.warning(f"Twilio rejected SMS to {mask_phone(phone)}: {status}")
        return DeliveryReport.failed(f"Twilio error {status}: {body[:300]}")

    async def _post_message(self, form: dict) -> tuple[int, str]:
        """POST the message form, return status and body text."""
        session = await self._get_session()
        async with session.post(
            self.messages_url, data=form, auth=self.auth
        ) as response:
            return response.status, await response.text()

    async def close(self) -> None:
        """Close HTTP session and cleanup resources."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
