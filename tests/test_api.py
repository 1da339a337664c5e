"""
Tests for the HTTP boundary: health endpoints, exception handlers, the
request-logging middleware and per-request service wiring.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from rbac_admin.api.dependencies import provide_service
from rbac_admin.api.errors import register_exception_handlers
from rbac_admin.core.exceptions import (
    BusinessRuleViolationError,
    EntityNotFoundError,
    ExternalServiceError,
    ValidationError,
)
from rbac_admin.db.session import get_session
from rbac_admin.main import app
from rbac_admin.services import RoleService, StateInfractionService


def override_session(session):
    async def _session():
        yield session
    return _session


@pytest.fixture
def fake_session():
    return AsyncMock()


@pytest.fixture
def client(fake_session):
    app.dependency_overrides[get_session] = override_session(fake_session)
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["message"] == "RBAC Admin Service"

    def test_health_with_database(self, client, fake_session):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "database": "ok"}
        fake_session.execute.assert_awaited_once()

    def test_health_without_database(self, client, fake_session):
        fake_session.execute.side_effect = OSError("unable to open database file")

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "degraded", "database": "unavailable"}

    def test_process_time_header(self, client):
        response = client.get("/")

        assert "x-process-time" in response.headers


@pytest.fixture
def error_app():
    """A throwaway app whose routes raise each domain error."""
    error_app = FastAPI()
    register_exception_handlers(error_app)

    @error_app.get("/validation")
    async def validation():
        raise ValidationError("person_id", "The referenced person does not exist")

    @error_app.get("/not-found")
    async def not_found():
        raise EntityNotFoundError("User", 7)

    @error_app.get("/conflict")
    async def conflict():
        raise BusinessRuleViolationError("PersonInactive", "Person 3 is inactive")

    @error_app.get("/store")
    async def store():
        raise ExternalServiceError("Base de datos", "Error retrieving User records", RuntimeError("boom"))

    return error_app


class TestExceptionHandlers:

    def test_validation_error_is_400(self, error_app):
        response = TestClient(error_app).get("/validation")

        assert response.status_code == 400
        assert response.json() == {
            "error": "ValidationError",
            "message": "The referenced person does not exist",
            "field": "person_id",
        }

    def test_not_found_is_404(self, error_app):
        response = TestClient(error_app).get("/not-found")

        assert response.status_code == 404
        assert response.json()["error"] == "EntityNotFoundError"

    def test_business_rule_is_409(self, error_app):
        response = TestClient(error_app).get("/conflict")

        assert response.status_code == 409
        assert response.json()["code"] == "PersonInactive"

    def test_store_failure_is_500_without_details(self, error_app):
        response = TestClient(error_app).get("/store")

        assert response.status_code == 500
        assert response.json() == {"error": "ExternalServiceError", "message": "Internal server error"}


class TestProvideService:

    def test_service_is_built_on_request_session(self, fake_session):
        wiring_app = FastAPI()

        @wiring_app.get("/wiring")
        async def wiring(
            roles: RoleService = Depends(provide_service(RoleService)),
            infractions: StateInfractionService = Depends(provide_service(StateInfractionService))
        ):
            return {
                "roles": roles.repository.session is fake_session,
                "infractions": infractions.repository.session is fake_session,
                "persons": infractions.person_repository.session is fake_session,
            }

        wiring_app.dependency_overrides[get_session] = override_session(fake_session)
        response = TestClient(wiring_app).get("/wiring")

        assert response.json() == {"roles": True, "infractions": True, "persons": True}
