from fastapi import status

from layoutlens.api.exceptions import StoreUnavailableError
from layoutlens.api.services.store import ProjectStore


def test_health_check(client):
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok", "message": "LayoutLens API is running"}


def test_cors_allows_any_origin(client):
    """Preflight from an arbitrary origin is accepted"""
    response = client.options(
        "/projects",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type",
        },
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["access-control-allow-origin"] == "*"


def test_cors_header_on_simple_request(client):
    response = client.get("/health", headers={"Origin": "http://example.com"})

    assert response.headers["access-control-allow-origin"] == "*"


def test_unknown_route_problem_details(client):
    response = client.get("/nope")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    data = response.json()
    assert data["code"] == "HTTP_404"
    assert data["status"] == 404
    assert "timestamp" in data["extensions"]


def test_method_not_allowed(client):
    response = client.delete("/projects/abc")

    assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
    assert response.json()["code"] == "HTTP_405"


def test_validation_error_lists_errors(client):
    response = client.post("/projects", json={})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["title"] == "Validation Error"
    assert data["extensions"]["errors"][0]["loc"] == ["body", "name"]


def test_store_unavailable_maps_to_503(client):
    """A store that cannot take its lock answers 503 instead of crashing"""
    from layoutlens.api.dependencies import get_store
    from layoutlens.api.main import app

    class BusyStore(ProjectStore):
        def get(self, project_id):
            raise StoreUnavailableError()

    app.dependency_overrides[get_store] = lambda: BusyStore()

    response = client.get("/projects/anything")

    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert response.text == "Project store is busy, try again later"
    assert response.headers["retry-after"] == "1"


def test_app_owns_a_store():
    from layoutlens.api.main import app

    assert isinstance(app.state.store, ProjectStore)
