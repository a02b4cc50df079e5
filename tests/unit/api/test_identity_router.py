"""Unit tests for the identity HTTP router."""

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from src.authbridge.core.errors import StoreError
from src.authbridge.core.store import SqlEntityStore


class TestUserEndpoints:
    """Identity lookups by login id."""

    def test_get_user(self, client: TestClient):
        response = client.get("/identity/users/ana")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "loginId": "ana",
            "partyId": "P1",
            "tenantId": "acme",
            "enabled": True,
            "hasLoggedOut": False,
            "firstName": "Ana",
            "lastName": "Reyes",
            "email": "ana@acme.test",
            "organizationPartyId": "P2",
            "organizationName": "Acme",
        }

    def test_get_user_without_party(self, client: TestClient):
        body = client.get("/identity/users/system").json()

        assert body == {
            "loginId": "system",
            "tenantId": "acme",
            "enabled": True,
            "hasLoggedOut": True,
        }

    def test_unknown_user_is_404(self, client: TestClient):
        response = client.get("/identity/users/nonexistent")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        body = response.json()
        assert body["detail"] == "User not found: nonexistent"
        assert body["request_id"] == response.headers["X-Request-ID"]

    def test_request_id_is_echoed(self, client: TestClient):
        response = client.get("/identity/users/nonexistent", headers={"X-Request-ID": "req-1"})

        assert response.headers["X-Request-ID"] == "req-1"
        assert response.json()["request_id"] == "req-1"

    def test_store_fault_is_503(self, client: TestClient, monkeypatch):
        def _fail(self, entity_name, **predicate):
            raise StoreError("database is locked")

        monkeypatch.setattr(SqlEntityStore, "query_one", _fail)

        response = client.get("/identity/users/ana")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["detail"] == (
            "Error retrieving user information: database is locked"
        )

    def test_user_with_tenant(self, client: TestClient):
        body = client.get("/identity/users/ana/tenant").json()

        assert body["tenant"] == {"tenantId": "acme", "namespaceKey": "default#acme"}
        assert body["organization"]["organizationName"] == "Acme"
        assert body["organization"]["attributes"] == {"region": "EU", "tier": "gold"}

    def test_user_with_tenant_excluding_organization(self, client: TestClient):
        response = client.get(
            "/identity/users/ana/tenant", params={"includeOrganization": "false"}
        )

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert "organization" not in body
        assert body["tenant"]["tenantId"] == "acme"

    def test_user_with_tenant_unknown_user(self, client: TestClient):
        response = client.get("/identity/users/ghost/tenant")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestTenantEndpoint:
    def test_default_tenant(self, client: TestClient):
        response = client.get("/identity/tenant")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"tenantId": "acme", "namespaceKey": "default#acme"}

    def test_tenant_with_party(self, client: TestClient):
        body = client.get("/identity/tenant", params={"tenantId": "t9", "partyId": "P2"}).json()

        assert body["tenantId"] == "t9"
        assert body["organizationPartyId"] == "P2"
        assert body["partyTypeId"] == "PARTY_GROUP"

    def test_unknown_party_is_tolerated(self, client: TestClient):
        body = client.get("/identity/tenant", params={"partyId": "NOPE"}).json()

        assert "organizationPartyId" not in body


class TestCredentialEndpoint:
    def test_valid_credentials(self, client: TestClient, password: str):
        response = client.post(
            "/identity/credentials/validate",
            json={"loginId": "ana", "password": password},
        )

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["valid"] is True
        assert body["tenantId"] == "acme"
        assert body["identity"]["email"] == "ana@acme.test"

    def test_invalid_password_is_still_200(self, client: TestClient):
        response = client.post(
            "/identity/credentials/validate",
            json={"loginId": "ana", "password": "wrong"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "valid": False,
            "errorMessage": "The password was incorrect.",
        }

    def test_missing_fields(self, client: TestClient):
        body = client.post("/identity/credentials/validate", json={}).json()

        assert body == {
            "valid": False,
            "errorMessage": "Username and password are required",
        }

    @pytest.mark.parametrize(
        "content",
        ['{"loginId": null, "password": null}', '["ana", "pw"]', '"ana"', "not json", ""],
    )
    def test_unreadable_body_is_still_200(self, client: TestClient, content: str):
        response = client.post(
            "/identity/credentials/validate",
            content=content,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "valid": False,
            "errorMessage": "Username and password are required",
        }

    def test_wrongly_typed_fields_are_still_200(self, client: TestClient):
        response = client.post(
            "/identity/credentials/validate", json={"loginId": 7, "password": ["pw"]}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["valid"] is False

    def test_snake_case_body_accepted(self, client: TestClient, password: str):
        response = client.post(
            "/identity/credentials/validate",
            json={"login_id": "ana", "password": password},
        )

        assert response.json()["valid"] is True


class TestHealthEndpoints:
    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"status": "healthy", "service": "authbridge"}

    def test_ready(self, client: TestClient):
        response = client.get("/health/ready")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["status"] == "ready"
        assert body["checks"]["database"]["type"] == "sqlite"

    def test_not_ready_when_database_unreachable(self, client: TestClient, database_service, monkeypatch):
        monkeypatch.setattr(database_service, "health_check", lambda: False)

        response = client.get("/health/ready")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["status"] == "not_ready"
