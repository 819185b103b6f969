"""API tests for the resource endpoints"""
import pytest
from fastapi.testclient import TestClient

from resource_service.core.config import Config
from resource_service.main import create_app
from resource_service.repositories.memory import InMemoryResourceStore

from tests.doubles import RecordingChannel


@pytest.fixture
def client():
    settings = Config(store_backend="memory", event_channel="log")
    app = create_app(settings=settings, store=InMemoryResourceStore(), channel=RecordingChannel())
    with TestClient(app) as test_client:
        yield test_client


def create(client, code="X1", name="Name", **extra):
    return client.post("/api/resources", json={"code": code, "name": name, **extra})


class TestCreateResource:

    def test_create_returns_201(self, client):
        response = create(client, description="First resource")

        assert response.status_code == 201
        body = response.json()
        assert body["id"]
        assert body["code"] == "X1"
        assert body["description"] == "First resource"
        assert body["active"] is True
        assert body["createdAt"] == body["updatedAt"]

    def test_duplicate_code_returns_409(self, client):
        create(client)

        response = create(client, name="Other")

        assert response.status_code == 409
        body = response.json()
        assert body["status"] == 409
        assert body["error"] == "Conflict"
        assert body["path"] == "/api/resources"

    @pytest.mark.parametrize("payload", [
        {"name": "Name"},
        {"code": "X", "name": "Name"},
        {"code": "X1", "name": "N"},
        {"code": "X1", "name": "Name", "description": "d" * 501},
    ])
    def test_invalid_payload_returns_400(self, client, payload):
        response = client.post("/api/resources", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation Failed"
        assert body["validation_errors"]


class TestReadResource:

    def test_get_by_id(self, client):
        created = create(client).json()

        response = client.get(f"/api/resources/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_get_by_code(self, client):
        created = create(client, code="BY_CODE").json()

        response = client.get("/api/resources/code/BY_CODE")

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    def test_get_missing_returns_404(self, client):
        response = client.get("/api/resources/does-not-exist")

        assert response.status_code == 404
        assert response.json()["error"] == "Resource Not Found"

    def test_list(self, client):
        create(client, code="L1")
        create(client, code="L2")

        response = client.get("/api/resources")

        assert response.status_code == 200
        assert {r["code"] for r in response.json()} == {"L1", "L2"}


class TestDeleteResource:

    def test_delete_returns_204_then_404(self, client):
        created = create(client).json()
        client.get(f"/api/resources/{created['id']}")

        response = client.delete(f"/api/resources/{created['id']}")

        assert response.status_code == 204
        assert client.get(f"/api/resources/{created['id']}").status_code == 404
        assert client.delete(f"/api/resources/{created['id']}").status_code == 404

    def test_code_is_reusable_after_delete(self, client):
        created = create(client).json()
        client.delete(f"/api/resources/{created['id']}")

        assert create(client).status_code == 201


class TestOperationalEndpoints:

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "UP"

    def test_info(self, client):
        response = client.get("/api/info")

        assert response.status_code == 200
        assert response.json()["name"]

    def test_cache_stats(self, client):
        created = create(client).json()
        client.get(f"/api/resources/{created['id']}")
        client.get(f"/api/resources/{created['id']}")

        stats = client.get("/api/operational/cache").json()

        assert stats["size"] == 1
        assert stats["hits"] == 1
        assert stats["misses"] == 1

    def test_correlation_id_is_echoed(self, client):
        response = client.get("/api/health", headers={"X-Correlation-ID": "corr-123"})

        assert response.headers["X-Correlation-ID"] == "corr-123"

    def test_correlation_id_is_generated(self, client):
        response = client.get("/api/health")

        assert response.headers["X-Correlation-ID"]

    def test_unknown_route_returns_404_body(self, client):
        response = client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.json()["path"] == "/api/nothing-here"
