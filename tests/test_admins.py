"""
Brokerage Back-Office - Admin Management Tests

Run with: pytest tests/test_admins.py -v
"""

from uuid import uuid4

from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD, auth_headers, login_admin


class TestListAdmins:
    def test_any_admin_can_list(self, client, super_admin, admin_headers):
        response = client.get("/api/v1/admins", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert {a["role"] for a in data["admins"]} == {"admin", "super_admin"}

    def test_anonymous_rejected(self, client):
        response = client.get("/api/v1/admins")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"


class TestInviteAdmin:
    def test_super_admin_invites(self, client, super_admin_headers):
        response = client.post(
            "/api/v1/admins",
            json={"email": "new@brokerage.test", "name": "New Agent"},
            headers=super_admin_headers,
        )

        assert response.status_code == 201
        temp_password = response.json()["temp_password"]
        assert len(temp_password) == 14

        token = login_admin(client, "new@brokerage.test", temp_password)
        me = client.get("/api/v1/auth/me", headers=auth_headers(token)).json()
        assert me["role"] == "admin"

    def test_plain_admin_cannot_invite(self, client, admin_headers):
        response = client.post(
            "/api/v1/admins",
            json={"email": "new@brokerage.test", "name": "New Agent"},
            headers=admin_headers,
        )

        assert response.status_code == 403

    def test_duplicate_email_conflicts(self, client, plain_admin, super_admin_headers):
        response = client.post(
            "/api/v1/admins",
            json={"email": ADMIN_EMAIL, "name": "Again"},
            headers=super_admin_headers,
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "Admin with this email already exists"


class TestUpdateRole:
    def test_promote_admin(self, client, plain_admin, super_admin_headers):
        response = client.patch(
            f"/api/v1/admins/{plain_admin.id}/role",
            json={"role": "super_admin"},
            headers=super_admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["role"] == "super_admin"

    def test_missing_admin_is_404(self, client, super_admin_headers):
        response = client.patch(
            f"/api/v1/admins/{uuid4()}/role",
            json={"role": "admin"},
            headers=super_admin_headers,
        )

        assert response.status_code == 404

    def test_unknown_role_rejected(self, client, plain_admin, super_admin_headers):
        response = client.patch(
            f"/api/v1/admins/{plain_admin.id}/role",
            json={"role": "owner"},
            headers=super_admin_headers,
        )

        assert response.status_code == 422


class TestRemoveAdmin:
    def test_removed_admin_session_stops_working(self, client, plain_admin, super_admin_headers):
        agent_token = login_admin(client, ADMIN_EMAIL, ADMIN_PASSWORD)

        response = client.delete(f"/api/v1/admins/{plain_admin.id}", headers=super_admin_headers)

        assert response.status_code == 200
        assert client.get("/api/v1/auth/me", headers=auth_headers(agent_token)).json() is None

    def test_cannot_remove_self(self, client, super_admin, super_admin_headers):
        response = client.delete(f"/api/v1/admins/{super_admin.id}", headers=super_admin_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Cannot remove your own account"

    def test_removing_missing_admin_succeeds(self, client, super_admin_headers):
        response = client.delete(f"/api/v1/admins/{uuid4()}", headers=super_admin_headers)

        assert response.status_code == 200


class TestRevokeAndPurge:
    def test_revoke_sessions_logs_admin_out(self, client, plain_admin, super_admin_headers):
        first = login_admin(client, ADMIN_EMAIL, ADMIN_PASSWORD)
        second = login_admin(client, ADMIN_EMAIL, ADMIN_PASSWORD)

        response = client.post(
            f"/api/v1/admins/{plain_admin.id}/revoke-sessions",
            headers=super_admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Revoked 2 sessions"
        for token in (first, second):
            assert client.get("/api/v1/auth/me", headers=auth_headers(token)).json() is None

    def test_purge_endpoint(self, client, super_admin_headers):
        response = client.post("/api/v1/admins/maintenance/purge", headers=super_admin_headers)

        assert response.status_code == 200
        assert response.json() == {"sessions": 0, "reset_tokens": 0}

    def test_purge_requires_super_admin(self, client, admin_headers):
        response = client.post("/api/v1/admins/maintenance/purge", headers=admin_headers)

        assert response.status_code == 403
