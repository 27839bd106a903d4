"""
Domain error to HTTP response mapping.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from cms_core.api.errors import register_domain_error_handlers, status_code_for
from cms_core.components.content import ContentDomainService
from cms_core.domain.content_values import ContentTitle
from cms_core.errors import (
    ConflictError,
    DomainError,
    ResourceExhaustedError,
    StateError,
    ValidationError,
)

# --- Test Setup ---


@pytest.fixture
def app() -> FastAPI:
    """Test app with routes that raise domain errors."""
    app = FastAPI()
    register_domain_error_handlers(app)

    @app.get("/title")
    def make_title(value: str) -> dict[str, str]:
        return {"title": ContentTitle.create(value).value}

    @app.get("/conflict")
    async def conflict() -> None:
        async def always_taken(slug: object, exclude_id: object) -> bool:
            return True

        await ContentDomainService().validate_slug_uniqueness("taken", always_taken)

    @app.get("/state")
    def state() -> None:
        raise StateError("Content is already published", current_state="published")

    @app.get("/exhausted")
    def exhausted() -> None:
        raise ResourceExhaustedError("Unable to generate unique slug", attempts=3, field="slug")

    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


class TestStatusCodes:
    """status_code_for."""

    @pytest.mark.parametrize(
        ("error", "status"),
        [
            (ValidationError("bad"), 400),
            (ConflictError("dup"), 409),
            (StateError("state"), 409),
            (ResourceExhaustedError("gone", attempts=1), 503),
            (DomainError("other"), 400),
        ],
    )
    def test_mapping(self, error: DomainError, status: int) -> None:
        assert status_code_for(error) == status


class TestHandlers:
    """Responses produced by registered handlers."""

    def test_success_untouched(self, client: TestClient) -> None:
        response = client.get("/title", params={"value": "  Hello "})
        assert response.status_code == 200
        assert response.json() == {"title": "Hello"}

    def test_validation_error(self, client: TestClient) -> None:
        response = client.get("/title", params={"value": "   "})
        assert response.status_code == 400
        assert response.json() == {
            "detail": "Title is required",
            "code": "validation_error",
            "field": "title",
        }

    def test_conflict(self, client: TestClient) -> None:
        response = client.get("/conflict")
        assert response.status_code == 409
        assert response.json() == {
            "detail": 'Slug "taken" is already in use',
            "code": "conflict",
            "field": "slug",
        }

    def test_state_error(self, client: TestClient) -> None:
        response = client.get("/state")
        assert response.status_code == 409
        assert response.json()["code"] == "invalid_state"
        assert response.json()["field"] == "status"

    def test_exhausted(self, client: TestClient) -> None:
        response = client.get("/exhausted")
        assert response.status_code == 503
        assert response.json()["code"] == "resource_exhausted"
