"""Tests for /health and / endpoints."""


class TestHealth:

    def test_health_returns_200(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["db"] == "ok"
        assert "uptime_seconds" in data
        assert "version" in data
        assert data["folder_count"] == 0

    def test_folder_count_tracks_folders(self, client, alice):
        client.post("/api/folders", json={"name": "Trip"}, headers=alice)
        assert client.get("/health").json()["folder_count"] == 1

    def test_root_returns_api_info(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.json()["name"] == "Gift Gallery API"


class TestResponseHeaders:

    def test_response_includes_middleware_headers(self, client):
        resp = client.get("/health")
        assert "x-request-id" in resp.headers
        assert "x-response-time" in resp.headers

    def test_incoming_request_id_is_echoed(self, client):
        resp = client.get("/health", headers={"X-Request-ID": "abc123"})
        assert resp.headers["x-request-id"] == "abc123"
