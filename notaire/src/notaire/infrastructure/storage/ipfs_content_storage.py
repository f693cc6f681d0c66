"""
IPFS content storage client.

Uploads blobs through the IPFS HTTP API (/api/v0/add) and returns
their CID. One attempt per call; a circuit breaker stops calling an
unreachable daemon.
"""

import asyncio
import json
import time
from typing import Optional

import aiohttp

from notaire.domain.exceptions import (
    ContentStorageUnavailableError,
    UploadRejectedError,
)
from notaire.domain.services.i_content_storage import IContentStorage
from notaire.infrastructure.monitoring.logger import get_logger
from notaire.infrastructure.monitoring.metrics import (
    backend_errors_total,
    backend_request_duration_seconds,
    backend_requests_total,
)
from notaire.infrastructure.resilience.circuit_breaker import CircuitBreaker

logger = get_logger(__name__)

SERVICE = "ipfs"


def parse_add_response(body: str) -> str:
    """
    Extract the CID from an /api/v0/add response.

    The daemon answers with NDJSON, one object per added entry. The
    last object describes the root of the upload.

    Raises:
        UploadRejectedError: If no object carries a Hash
    """
    last: Optional[dict] = None
    for line in body.strip().splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            obj = json.loads(line)
        except json.JSONDecodeError:
            continue
        if isinstance(obj, dict):
            last = obj

    cid = str((last or {}).get("Hash") or "").strip()
    if not cid:
        raise UploadRejectedError(f"IPFS add returned no hash: {body[:200]}")
    return cid


class IpfsContentStorage(IContentStorage):
    """IPFS HTTP API client."""

    def __init__(
        self,
        api_url: str,
        gateway_url: str,
        timeout: float = 15.0,
        connect_timeout: float = 5.0,
        pin: bool = True,
        circuit_breaker: Optional[CircuitBreaker] = None,
    ):
        """
        Initialize IPFS client.

        Args:
            api_url: IPFS daemon API base URL (e.g. http://127.0.0.1:5001)
            gateway_url: Public gateway base URL (e.g. https://ipfs.io)
            timeout: Total request timeout in seconds
            connect_timeout: Connection timeout in seconds
            pin: Pin uploaded content on the daemon
            circuit_breaker: Optional breaker shared across calls
        """
        self.api_url = api_url.rstrip("/")
        self.gateway_base = gateway_url.rstrip("/")
        self.pin = pin
        self.timeout = aiohttp.ClientTimeout(total=timeout, connect=connect_timeout)
        self.circuit_breaker = circuit_breaker or CircuitBreaker(
            SERVICE,
            expected_exception=ContentStorageUnavailableError,
        )
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                connector=aiohttp.TCPConnector(limit=20, ttl_dns_cache=300),
            )
        return self._session

    def gateway_url(self, cid: str) -> str:
        return f"{self.gateway_base}/ipfs/{cid}"

    async def put(self, data: bytes, filename: str = "blob") -> str:
        """
        Upload bytes to IPFS.

        Args:
            data: Raw bytes to upload
            filename: Name reported in the multipart form

        Returns:
            Content identifier

        Raises:
            ContentStorageUnavailableError: Daemon unreachable, 5xx, or
                circuit open
            UploadRejectedError: Daemon answered 4xx or without a hash
        """
        backend_requests_total.labels(service=SERVICE, operation="add").inc()
        start = time.perf_counter()
        try:
            cid = await self.circuit_breaker.call(self._add_once, data, filename)
        except (ContentStorageUnavailableError, UploadRejectedError) as e:
            backend_errors_total.labels(
                service=SERVICE, error_type=type(e).__name__
            ).inc()
            raise
        finally:
            backend_request_duration_seconds.labels(
                service=SERVICE, operation="add"
            ).observe(time.perf_counter() - start)

        logger.info(f"Uploaded {len(data)} bytes to IPFS: {cid}")
        return cid

    async def _add_once(self, data: bytes, filename: str) -> str:
        try:
            status, body = await self._post_add(data, filename)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ContentStorageUnavailableError(
                f"IPFS daemon unreachable at {self.api_url}: {e}"
            ) from e

        if status >= 500:
            raise ContentStorageUnavailableError(
                f"IPFS daemon error {status}: {body[:200]}"
            )
        if status != 200:
            raise UploadRejectedError(
                f"IPFS add rejected ({status}): {body[:200]}",
                status_code=status,
            )

        return parse_add_response(body)

    async def _post_add(self, data: bytes, filename: str) -> tuple[int, str]:
        """POST a single file to /api/v0/add, return status and body."""
        session = await self._get_session()
        form = aiohttp.FormData()
        form.add_field(
            "file",
            data,
            filename=filename,
            content_type="application/octet-stream",
        )
        params = {"pin": "true" if self.pin else "false"}

        async with session.post(
            f"{self.api_url}/api/v0/add", data=form, params=params
        ) as response:
            return response.status, await response.text()

    async def close(self) -> None:
        """Close HTTP session and cleanup resources."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
