from datetime import datetime

import httpx


class TestHealth:
    def test_reports_ok_and_port(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert body["port"] == 12345
        assert body["message"] == "Proxy Server is running"
        datetime.fromisoformat(body["timestamp"])

    def test_does_not_touch_upstream(self, client, upstream):
        def handler(request):
            raise httpx.ConnectError("down", request=request)

        upstream.handler = handler
        assert client.get("/health").status_code == 200
        assert upstream.requests == []


class TestRoot:
    def test_lists_endpoints(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "Users API Proxy Server"
        assert set(body["endpoints"]) == {"/users", "/health", "/diagnose"}


class TestRouting:
    def test_unknown_path_is_404(self, client, upstream):
        resp = client.get("/products")
        assert resp.status_code == 404
        assert resp.json() == {"detail": "Not Found"}
        assert upstream.requests == []

    def test_users_prefix_must_be_a_segment(self, client, upstream):
        assert client.get("/usersettings").status_code == 404
        assert upstream.requests == []


class TestCors:
    def test_header_without_origin(self, client):
        assert client.get("/health").headers["access-control-allow-origin"] == "*"

    def test_header_with_origin(self, client):
        resp = client.get("/", headers={"origin": "https://example.org"})
        assert resp.headers["access-control-allow-origin"] == "*"

    def test_preflight(self, client, upstream):
        resp = client.options(
            "/users",
            headers={"origin": "https://example.org", "access-control-request-method": "GET"},
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "*"
        assert upstream.requests == []
