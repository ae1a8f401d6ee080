from fastapi import APIRouter
from fastapi.testclient import TestClient

from medikey.main import create_application
from tests.conftest import API


class TestHealthEndpoint:
    def test_health_reports_database(self, client):
        response = client.get(f"{API}/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["database"] == "healthy"
        assert body["version"]


class TestErrorFormat:
    def test_unauthenticated_request_returns_json_error(self, client):
        response = client.get(f"{API}/auth/me")
        assert response.status_code == 401
        assert response.json() == {"error": True, "message": "Not authenticated", "status_code": 401}

    def test_invalid_token_is_401_with_bearer_challenge(self, client):
        response = client.get(f"{API}/auth/me", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_unknown_route_is_404(self, client):
        response = client.get(f"{API}/does-not-exist")
        assert response.status_code == 404
        assert response.json()["error"] is True

    def test_validation_error_lists_details(self, client):
        response = client.post(f"{API}/auth/register", json={"username": "x"})
        assert response.status_code == 422
        body = response.json()
        assert body["message"] == "Invalid request"
        assert body["details"]

    def test_unhandled_exception_is_500(self):
        application = create_application()
        router = APIRouter()

        @router.get("/boom")
        def boom():
            raise RuntimeError("kaboom")

        application.include_router(router, prefix=API)
        response = TestClient(application, raise_server_exceptions=False).get(f"{API}/boom")
        assert response.status_code == 500
        assert response.json() == {"error": True, "message": "Internal server error", "status_code": 500}
