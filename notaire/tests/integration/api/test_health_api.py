"""
API tests for service endpoints.

Usage:
    pytest notaire/tests/integration/api/test_health_api.py
"""


class TestServiceEndpoints:
    """API tests for /, /health and /metrics."""

    async def test_root(self, api_client):
        response = await api_client.get("/")

        assert response.status_code == 200
        assert response.json()["service"] == "Notaire"

    async def test_health_reports_optional_backends(self, api_client):
        response = await api_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["components"]["database"]["status"] == "healthy"
        assert data["components"]["ipfs"]["status"] == "disabled"
        assert data["components"]["chain"]["status"] == "disabled"
        assert data["components"]["sms"]["status"] == "disabled"

    async def test_request_id_is_echoed(self, api_client):
        response = await api_client.get("/", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    async def test_metrics(self, api_client):
        await api_client.get("/")

        response = await api_client.get("/metrics")

        assert response.status_code == 200
        assert "notaire_http_requests_total" in response.text
