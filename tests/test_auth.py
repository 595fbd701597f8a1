"""Operator login and bearer-token protection of admin routes."""

from storefront.auth.admin import issue_token, verify_token
from storefront.extensions import bcrypt


class TestLogin:
    def test_correct_credentials(self, client, admin_credentials):
        resp = client.post("/api/auth/login", json=admin_credentials)

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["success"] is True
        assert body["role"] == "admin"
        assert body["token"]

    def test_wrong_password(self, client, admin_credentials):
        resp = client.post(
            "/api/auth/login",
            json={**admin_credentials, "password": "nope"},
        )

        assert resp.status_code == 401
        body = resp.get_json()
        assert body["success"] is False
        assert "role" not in body
        assert "token" not in body

    def test_wrong_username(self, client, admin_credentials):
        resp = client.post(
            "/api/auth/login",
            json={**admin_credentials, "username": "root"},
        )
        assert resp.status_code == 401
        assert "role" not in resp.get_json()

    def test_padded_credentials_do_not_match(self, client, admin_credentials):
        resp = client.post(
            "/api/auth/login",
            json={
                "username": f"  {admin_credentials['username']} ",
                "password": f" {admin_credentials['password']}   ",
            },
        )
        assert resp.status_code == 401
        assert "token" not in resp.get_json()

    def test_password_with_spaces_matches_exactly(self, app, client, admin_credentials):
        app.config["ADMIN_PASSWORD"] = " spaced out "

        ok = client.post("/api/auth/login", json={**admin_credentials, "password": " spaced out "})
        trimmed = client.post("/api/auth/login", json={**admin_credentials, "password": "spaced out"})

        assert ok.status_code == 200
        assert trimmed.status_code == 401

    def test_empty_body(self, client):
        assert client.post("/api/auth/login").status_code == 401

    def test_unset_password_disables_login(self, app, client, admin_credentials):
        app.config["ADMIN_PASSWORD"] = None

        assert client.post("/api/auth/login", json=admin_credentials).status_code == 401

    def test_bcrypt_hash_takes_precedence(self, app, client, admin_credentials):
        app.config["ADMIN_PASSWORD_HASH"] = bcrypt.generate_password_hash("hashed-pass").decode("utf-8")

        ok = client.post(
            "/api/auth/login",
            json={"username": admin_credentials["username"], "password": "hashed-pass"},
        )
        plain = client.post("/api/auth/login", json=admin_credentials)

        assert ok.status_code == 200
        assert plain.status_code == 401


class TestAdminRoutes:
    def test_session_with_token(self, client, auth_headers):
        resp = client.get("/api/auth/session", headers=auth_headers)

        assert resp.status_code == 200
        assert resp.get_json() == {"authenticated": True, "role": "admin", "username": "operator"}

    def test_without_token(self, client):
        resp = client.get("/api/auth/session")

        assert resp.status_code == 401
        assert resp.get_json() == {"error": "Authentication required"}

    def test_tampered_token(self, client, auth_headers):
        headers = {"Authorization": auth_headers["Authorization"] + "x"}
        assert client.get("/api/admin/stats", headers=headers).status_code == 401

    def test_wrong_scheme(self, client, auth_headers):
        token = auth_headers["Authorization"].split(" ", 1)[1]
        headers = {"Authorization": f"Token {token}"}
        assert client.get("/api/admin/stats", headers=headers).status_code == 401

    def test_expired_token(self, app, client, auth_headers):
        app.config["ADMIN_TOKEN_MAX_AGE"] = -1
        assert client.get("/api/admin/stats", headers=auth_headers).status_code == 401

    def test_token_for_renamed_admin_is_rejected(self, app):
        token = issue_token("operator")
        assert verify_token(token) is not None

        app.config["ADMIN_USERNAME"] = "someone-else"
        assert verify_token(token) is None

    def test_public_routes_need_no_token(self, client):
        assert client.get("/api/products").status_code == 200
        assert client.get("/api/products/featured").status_code == 200
        assert client.get("/api/categories").status_code == 200
