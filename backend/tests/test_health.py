"""
Tests for health check endpoints.
"""


class TestHealthEndpoints:
    """Test health check API endpoints."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.text.startswith("BuffetPOS is running")

    def test_health_check(self, client):
        """Basic health check should return healthy status."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "buffet-pos"
        assert data["environment"] == "test"

    def test_detailed_health_check(self, client):
        response = client.get("/health/detailed")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["dependencies"]["database"]["status"] == "healthy"

    def test_health_needs_no_credentials(self, client):
        assert client.get("/health", headers={"Authorization": "garbage"}).status_code == 200
