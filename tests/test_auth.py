"""Login, logout and the two access gates."""

from __future__ import annotations

from datetime import timedelta

from repairworks.extensions import db
from repairworks.models import User


class TestLogin:
    def test_admin_login(self, client, log_in):
        response = log_in("admin", "admin")
        assert response.status_code == 200
        assert response.get_json() == {"success": True}

        data = client.get("/api/data").get_json()
        assert data["user"]["login"] == "admin"
        assert data["user"]["is_admin"] is True

    def test_regular_user_login(self, client, log_in):
        assert log_in("user1", "user1").status_code == 200
        data = client.get("/api/data").get_json()
        assert data["user"]["login"] == "user1"
        assert data["user"]["is_admin"] is False

    def test_wrong_password_is_generic_failure(self, client, log_in):
        wrong_password = log_in("user1", "nope")
        unknown_login = log_in("ghost", "user1")

        assert wrong_password.status_code == 401
        assert unknown_login.status_code == 401
        assert wrong_password.get_json()["error"] == unknown_login.get_json()["error"]

        # no session was established
        assert client.get("/api/data").status_code == 401

    def test_missing_fields(self, client):
        assert client.post("/login", json={}).status_code == 401
        assert client.post("/login", json={"login": "admin"}).status_code == 401

    def test_form_encoded_login(self, client):
        response = client.post("/login", data={"login": "admin", "password": "admin"})
        assert response.status_code == 200
        assert client.get("/api/data").status_code == 200

    def test_relogin_replaces_principal(self, client, log_in):
        log_in("admin", "admin")
        log_in("user1", "user1")
        assert client.get("/api/data").get_json()["user"]["login"] == "user1"

    def test_session_expires_after_lifetime(self, app, client, log_in):
        response = log_in("user1", "user1")
        cookie = response.headers["Set-Cookie"]
        assert "Expires=" in cookie
        with client.session_transaction() as sess:
            assert sess.permanent is True
        assert app.permanent_session_lifetime == timedelta(hours=12)

    def test_failed_relogin_keeps_no_new_session(self, client, log_in):
        log_in("user1", "user1")
        assert log_in("admin", "wrong").status_code == 401
        assert client.get("/api/data").get_json()["user"]["login"] == "user1"


class TestLogout:
    def test_logout_redirects_to_login_page(self, user_client):
        response = user_client.get("/logout")
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/login.html")

    def test_logout_destroys_session(self, user_client):
        user_client.get("/logout")
        assert user_client.get("/api/data").status_code == 401

    def test_logout_without_session(self, client):
        assert client.get("/logout").status_code == 302


class TestGates:
    def test_unauthenticated_api_points_to_login(self, client):
        response = client.get("/api/data")
        assert response.status_code == 401
        assert response.get_json()["login_url"] == "/login.html"

    def test_unauthenticated_page_redirects(self, client):
        response = client.get("/")
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/login.html")

    def test_login_page_is_public(self, client):
        response = client.get("/login.html")
        assert response.status_code == 200
        assert b"login-form" in response.data

    def test_dashboard_page_for_logged_in_user(self, user_client):
        response = user_client.get("/")
        assert response.status_code == 200
        assert b"order-form" in response.data

    def test_unauthenticated_mutation_is_401_not_403(self, client):
        response = client.delete("/delete_order/1")
        assert response.status_code == 401

    def test_non_admin_gets_forbidden(self, user_client):
        response = user_client.delete("/delete_order/1")
        assert response.status_code == 403
        assert response.get_json() == {"error": "Forbidden"}

    def test_admin_flag_is_fixed_for_the_session(self, app, client, log_in, ids):
        log_in("user1", "user1")

        with app.app_context():
            db.session.get(User, ids["user1"]).is_admin = True
            db.session.commit()

        assert client.get("/api/data").get_json()["user"]["is_admin"] is False
        assert client.delete("/delete_order/1").status_code == 403

        # a fresh login picks up the new flag
        log_in("user1", "user1")
        assert client.get("/api/data").get_json()["user"]["is_admin"] is True


class TestCsrf:
    def test_token_endpoint(self, client):
        response = client.get("/csrf-token")
        assert response.status_code == 200
        assert response.get_json()["csrf_token"]

    def test_mutations_require_token_when_enabled(self, app):
        app.config["WTF_CSRF_ENABLED"] = True
        client = app.test_client()

        rejected = client.post("/login", json={"login": "admin", "password": "admin"})
        assert rejected.status_code == 400

        token = client.get("/csrf-token").get_json()["csrf_token"]
        accepted = client.post(
            "/login",
            json={"login": "admin", "password": "admin"},
            headers={"X-CSRFToken": token},
        )
        assert accepted.status_code == 200