"""
Brokerage Back-Office - Authentication Test Suite

Tests for:
- Password hashing and token generation
- Signup, login, current admin and logout endpoints
- End-to-end auth scenarios

Run with: pytest tests/test_auth.py -v
"""

import bcrypt

from brokerage.auth.password import hash_password, needs_rehash, verify_password
from brokerage.auth.tokens import TEMP_PASSWORD_ALPHABET, generate_temp_password, generate_token
from brokerage.config import settings
from tests.conftest import (
    ADMIN_EMAIL,
    ADMIN_PASSWORD,
    SUPER_ADMIN_EMAIL,
    SUPER_ADMIN_PASSWORD,
    auth_headers,
    login_admin,
)


# =============================================================================
# PASSWORD HASHING TESTS
# =============================================================================

class TestPasswordHashing:
    """Unit tests for bcrypt password utilities."""

    def test_hash_password_creates_bcrypt_hash(self):
        hashed = hash_password("SecurePassword123")

        assert hashed.startswith("$2b$")
        assert len(hashed) == 60

    def test_verify_password_correct(self):
        hashed = hash_password("SecurePassword123")

        assert verify_password("SecurePassword123", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = hash_password("SecurePassword123")

        assert verify_password("WrongPassword", hashed) is False

    def test_same_password_different_hashes(self):
        """Hashes are salted, so equal passwords do not produce equal blobs."""
        hash1 = hash_password("pw123456")
        hash2 = hash_password("pw123456")

        assert hash1 != hash2
        assert verify_password("pw123456", hash1)
        assert verify_password("pw123456", hash2)

    def test_malformed_hash_does_not_verify(self):
        # Legacy unsalted SHA-256 hex digests are not accepted
        assert verify_password("pw123456", "ab" * 32) is False

    def test_needs_rehash_low_work_factor(self):
        old_hash = bcrypt.hashpw(b"password", bcrypt.gensalt(rounds=4)).decode()

        assert needs_rehash(old_hash, target_work_factor=5) is True
        assert needs_rehash(old_hash, target_work_factor=4) is False

    def test_needs_rehash_non_bcrypt(self):
        assert needs_rehash("not-a-hash") is True


class TestTokens:
    def test_generate_token_is_64_hex_chars(self):
        token = generate_token()

        assert len(token) == 64
        int(token, 16)

    def test_tokens_are_unique(self):
        assert len({generate_token() for _ in range(50)}) == 50

    def test_temp_password_alphabet(self):
        password = generate_temp_password()

        assert len(password) == 14
        assert all(ch in TEMP_PASSWORD_ALPHABET for ch in password)


# =============================================================================
# SIGNUP ENDPOINT TESTS
# =============================================================================

class TestSignupEndpoint:
    def test_first_signup_creates_super_admin(self, client):
        response = client.post(
            "/api/v1/auth/signup",
            json={"email": "a@x.com", "password": "pw123456", "name": "Ada"},
        )

        assert response.status_code == 201
        assert response.json()["success"] is True

        token = login_admin(client, "a@x.com", "pw123456")
        me = client.get("/api/v1/auth/me", headers=auth_headers(token)).json()
        assert me["role"] == "super_admin"
        assert me["name"] == "Ada"

    def test_second_signup_conflicts(self, client):
        client.post(
            "/api/v1/auth/signup",
            json={"email": "a@x.com", "password": "pw123456", "name": "Ada"},
        )
        response = client.post(
            "/api/v1/auth/signup",
            json={"email": "b@x.com", "password": "pw123456", "name": "Bo"},
        )

        assert response.status_code == 409
        assert "disabled" in response.json()["detail"]

    def test_signup_short_password_rejected(self, client):
        response = client.post(
            "/api/v1/auth/signup",
            json={"email": "a@x.com", "password": "short", "name": "Ada"},
        )

        assert response.status_code == 422

    def test_signup_invalid_email_rejected(self, client):
        response = client.post(
            "/api/v1/auth/signup",
            json={"email": "not-an-email", "password": "pw123456", "name": "Ada"},
        )

        assert response.status_code == 422


class TestEmailExists:
    def test_registered_email(self, client, plain_admin):
        response = client.get("/api/v1/auth/email-exists", params={"email": ADMIN_EMAIL})

        assert response.json() == {"exists": True}

    def test_email_match_is_case_sensitive(self, client, plain_admin):
        response = client.get(
            "/api/v1/auth/email-exists", params={"email": ADMIN_EMAIL.upper()}
        )

        assert response.json() == {"exists": False}


# =============================================================================
# LOGIN ENDPOINT TESTS
# =============================================================================

class TestLoginEndpoint:
    def test_login_success(self, client, plain_admin):
        response = client.post(
            "/api/v1/auth/login",
            json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()
        assert len(data["session_token"]) == 64
        assert data["token_type"] == "bearer"
        assert data["expires_in"] == 7 * 24 * 60 * 60
        assert data["admin"]["email"] == ADMIN_EMAIL
        assert data["admin"]["last_login"] is not None
        assert "password_hash" not in data["admin"]

    def test_wrong_password_and_unknown_email_look_the_same(self, client, plain_admin):
        wrong_password = client.post(
            "/api/v1/auth/login",
            json={"email": ADMIN_EMAIL, "password": "WrongPass123"},
        )
        unknown_email = client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@brokerage.test", "password": ADMIN_PASSWORD},
        )

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json()
        assert wrong_password.json()["detail"] == "Invalid email or password"


# =============================================================================
# CURRENT ADMIN / LOGOUT TESTS
# =============================================================================

class TestCurrentAdmin:
    def test_me_with_valid_token(self, client, plain_admin):
        token = login_admin(client, ADMIN_EMAIL, ADMIN_PASSWORD)

        response = client.get("/api/v1/auth/me", headers=auth_headers(token))

        assert response.status_code == 200
        assert response.json()["email"] == ADMIN_EMAIL

    def test_me_lists_role_permissions(self, client, super_admin, plain_admin):
        owner = login_admin(client, SUPER_ADMIN_EMAIL, SUPER_ADMIN_PASSWORD)
        agent = login_admin(client, ADMIN_EMAIL, ADMIN_PASSWORD)

        owner_perms = client.get("/api/v1/auth/me", headers=auth_headers(owner)).json()["permissions"]
        agent_perms = client.get("/api/v1/auth/me", headers=auth_headers(agent)).json()["permissions"]

        assert "manage:admins" in owner_perms
        assert "manage:admins" not in agent_perms
        assert "manage:content" in agent_perms

    def test_me_without_token_is_null(self, client):
        response = client.get("/api/v1/auth/me")

        assert response.status_code == 200
        assert response.json() is None

    def test_me_with_garbage_token_is_null(self, client):
        response = client.get("/api/v1/auth/me", headers=auth_headers("garbage"))

        assert response.json() is None


class TestLogoutEndpoint:
    def test_logout_invalidates_session(self, client, plain_admin):
        token = login_admin(client, ADMIN_EMAIL, ADMIN_PASSWORD)

        response = client.post("/api/v1/auth/logout", headers=auth_headers(token))

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert client.get("/api/v1/auth/me", headers=auth_headers(token)).json() is None

    def test_logout_is_idempotent(self, client):
        first = client.post("/api/v1/auth/logout", headers=auth_headers("never-issued"))
        second = client.post("/api/v1/auth/logout")

        assert first.json()["success"] is True
        assert second.json()["success"] is True

    def test_logout_only_closes_one_session(self, client, plain_admin):
        phone = login_admin(client, ADMIN_EMAIL, ADMIN_PASSWORD)
        laptop = login_admin(client, ADMIN_EMAIL, ADMIN_PASSWORD)

        client.post("/api/v1/auth/logout", headers=auth_headers(phone))

        assert client.get("/api/v1/auth/me", headers=auth_headers(laptop)).json() is not None


class TestSessionListing:
    def test_lists_active_sessions_and_marks_current(self, client, plain_admin):
        first = login_admin(client, ADMIN_EMAIL, ADMIN_PASSWORD)
        login_admin(client, ADMIN_EMAIL, ADMIN_PASSWORD)

        response = client.get("/api/v1/auth/sessions", headers=auth_headers(first))

        data = response.json()
        assert data["total"] == 2
        assert sum(1 for s in data["sessions"] if s["is_current"]) == 1

    def test_requires_authentication(self, client):
        response = client.get("/api/v1/auth/sessions")

        assert response.status_code == 401


# =============================================================================
# FULL FLOW
# =============================================================================

class TestFullAuthFlow:
    def test_signup_login_reset_flow(self, client, monkeypatch):
        monkeypatch.setattr(settings, "EXPOSE_RESET_TOKENS", True)

        client.post(
            "/api/v1/auth/signup",
            json={"email": "a@x.com", "password": "pw123456", "name": "Ada"},
        )
        token = login_admin(client, "a@x.com", "pw123456")
        assert client.get("/api/v1/auth/me", headers=auth_headers(token)).json()["email"] == "a@x.com"

        reset = client.post("/api/v1/auth/password-reset/request", json={"email": "a@x.com"})
        reset_token = reset.json()["token"]
        assert reset_token

        confirm = client.post(
            "/api/v1/auth/password-reset/confirm",
            json={"token": reset_token, "new_password": "newpass1"},
        )
        assert confirm.status_code == 200

        assert login_admin(client, "a@x.com", "pw123456") is None
        assert login_admin(client, "a@x.com", "newpass1") is not None

        again = client.post(
            "/api/v1/auth/password-reset/confirm",
            json={"token": reset_token, "new_password": "anotherpass"},
        )
        assert again.status_code == 400
        assert again.json()["detail"] == "Invalid or expired reset token"

    def test_reset_request_hides_token_by_default(self, client, super_admin):
        response = client.post(
            "/api/v1/auth/password-reset/request", json={"email": SUPER_ADMIN_EMAIL}
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "token": None}

    def test_reset_request_for_unknown_email_succeeds(self, client):
        response = client.post(
            "/api/v1/auth/password-reset/request", json={"email": "ghost@x.com"}
        )

        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_security_headers_present(self, client):
        response = client.get("/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["Cache-Control"] == "no-store"
        assert response.headers["X-Request-ID"]

    def test_super_admin_password_still_valid(self, client, super_admin):
        assert login_admin(client, SUPER_ADMIN_EMAIL, SUPER_ADMIN_PASSWORD) is not None
