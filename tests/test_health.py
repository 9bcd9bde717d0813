"""HTTP tests for liveness/readiness/health endpoints and the shared error body shape."""

import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from api_support import ApiTestCase, make_settings
from mindfulme.main import create_app


class TestHealthEndpoints(ApiTestCase):
    def test_healthz_is_plain_ok(self) -> None:
        resp = self.client.get("/healthz")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.text, "OK")

    def test_ready(self) -> None:
        resp = self.client.get("/ready")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"ready": True})

    def test_not_ready_when_database_unreachable(self) -> None:
        with patch.object(self.storage, "check_connection", return_value=False):
            resp = self.client.get("/ready")
        self.assertEqual(resp.status_code, 503)
        self.assertEqual(resp.json(), {"ready": False})

    def test_health_details(self) -> None:
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["environment"], "test")
        self.assertEqual(body["database"], "sqlite")
        self.assertEqual(body["database_status"], "connected")
        self.assertEqual(body["version"], "1.0.0")
        self.assertGreaterEqual(body["uptime"], 0)
        self.assertIn("timestamp", body)

    def test_health_degraded(self) -> None:
        with patch.object(self.storage, "check_connection", return_value=False):
            body = self.client.get("/health").json()
        self.assertEqual(body["status"], "degraded")
        self.assertEqual(body["database_status"], "disconnected")

    def test_health_routes_are_outside_api_prefix(self) -> None:
        self.assertEqual(self.client.get("/api/healthz").status_code, 404)


class TestErrorShape(ApiTestCase):
    def test_unknown_route(self) -> None:
        resp = self.client.get("/api/does-not-exist")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"message": "Not Found"})

    def test_method_not_allowed(self) -> None:
        resp = self.client.delete("/api/anonymous-rants")
        self.assertEqual(resp.status_code, 405)
        self.assertEqual(set(resp.json()), {"message"})

    def test_malformed_json(self) -> None:
        resp = self.client.post(
            "/api/auth/login",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(set(resp.json()), {"message"})

    def test_unexpected_error_is_opaque_500(self) -> None:
        client = TestClient(self.app, raise_server_exceptions=False)
        with patch.object(self.storage, "list_rants", side_effect=RuntimeError("secret detail")):
            with self.assertLogs("mindfulme.main", level="ERROR"):
                resp = client.get("/api/anonymous-rants")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"message": "Internal server error"})
        self.assertNotIn("secret detail", resp.text)


class TestPerformanceMonitoring(unittest.TestCase):
    def test_timing_header_only_when_enabled(self) -> None:
        enabled = create_app(make_settings(ENABLE_PERFORMANCE_MONITORING=True))
        with TestClient(enabled) as client:
            self.assertIn("x-response-time-ms", client.get("/healthz").headers)

        disabled = create_app(make_settings())
        with TestClient(disabled) as client:
            self.assertNotIn("x-response-time-ms", client.get("/healthz").headers)


if __name__ == "__main__":
    unittest.main()
