"""
Unit tests for IpfsContentStorage.

Usage:
    pytest notaire/tests/unit/infrastructure/test_ipfs_content_storage.py
"""

from unittest.mock import AsyncMock, patch

import aiohttp
import pytest

from notaire.domain.exceptions import (
    ContentStorageUnavailableError,
    UploadRejectedError,
)
from notaire.infrastructure.resilience.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerOpenError,
    CircuitState,
)
from notaire.infrastructure.storage.ipfs_content_storage import (
    IpfsContentStorage,
    parse_add_response,
)


class TestParseAddResponse:
    """Tests for /api/v0/add response parsing."""

    def test_single_object(self):
        assert parse_add_response('{"Name":"a","Hash":"QmA","Size":"3"}\n') == "QmA"

    def test_ndjson_uses_last_object(self):
        body = (
            '{"Name":"a/x.jpg","Hash":"QmChild","Size":"3"}\n'
            '{"Name":"a","Hash":"QmRoot","Size":"60"}\n'
        )
        assert parse_add_response(body) == "QmRoot"

    def test_missing_hash(self):
        with pytest.raises(UploadRejectedError):
            parse_add_response('{"Name":"a"}')

    def test_empty_body(self):
        with pytest.raises(UploadRejectedError):
            parse_add_response("")


class TestIpfsContentStorage:
    """Unit tests for IpfsContentStorage."""

    # ================================================================
    # Helper Methods
    # ================================================================

    def _storage(self, **overrides) -> IpfsContentStorage:
        kwargs = {
            "api_url": "http://ipfs.test:5001/",
            "gateway_url": "https://gw.test/",
        }
        kwargs.update(overrides)
        return IpfsContentStorage(**kwargs)

    # ================================================================
    # Tests
    # ================================================================

    async def test_put_returns_cid(self):
        storage = self._storage()
        post = AsyncMock(return_value=(200, '{"Name":"img.jpg","Hash":"QmImg"}\n'))

        with patch.object(storage, "_post_add", post):
            cid = await storage.put(b"\xff\xd8data", filename="img.jpg")

        assert cid == "QmImg"
        post.assert_awaited_once_with(b"\xff\xd8data", "img.jpg")

    def test_gateway_url_strips_trailing_slash(self):
        storage = self._storage()
        assert storage.gateway_url("QmImg") == "https://gw.test/ipfs/QmImg"

    async def test_server_error_is_unavailable(self):
        storage = self._storage()

        with patch.object(storage, "_post_add", AsyncMock(return_value=(502, "bad"))):
            with pytest.raises(ContentStorageUnavailableError):
                await storage.put(b"data")

    async def test_client_error_is_rejected(self):
        storage = self._storage()

        with patch.object(storage, "_post_add", AsyncMock(return_value=(400, "no"))):
            with pytest.raises(UploadRejectedError) as exc_info:
                await storage.put(b"data")

        assert exc_info.value.status_code == 400

    async def test_connection_error_is_unavailable(self):
        storage = self._storage()
        post = AsyncMock(side_effect=aiohttp.ClientConnectionError("refused"))

        with patch.object(storage, "_post_add", post):
            with pytest.raises(ContentStorageUnavailableError):
                await storage.put(b"data")

    async def test_rejections_do_not_open_breaker(self):
        """Test only unreachable-daemon failures count against the breaker."""
        breaker = CircuitBreaker(
            "ipfs-test",
            failure_threshold=1,
            expected_exception=ContentStorageUnavailableError,
        )
        storage = self._storage(circuit_breaker=breaker)

        with patch.object(storage, "_post_add", AsyncMock(return_value=(400, "no"))):
            for _ in range(3):
                with pytest.raises(UploadRejectedError):
                    await storage.put(b"data")

        assert breaker.state == CircuitState.CLOSED

    async def test_open_breaker_skips_daemon(self):
        breaker = CircuitBreaker(
            "ipfs-test",
            failure_threshold=1,
            recovery_timeout=60.0,
            expected_exception=ContentStorageUnavailableError,
        )
        storage = self._storage(circuit_breaker=breaker)
        post = AsyncMock(side_effect=aiohttp.ClientConnectionError("refused"))

        with patch.object(storage, "_post_add", post):
            with pytest.raises(ContentStorageUnavailableError):
                await storage.put(b"data")
            with pytest.raises(CircuitBreakerOpenError):
                await storage.put(b"data")

        assert post.await_count == 1
