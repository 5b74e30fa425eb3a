"""
Authentication Routes

Provides:
- /login      (POST, JSON or form: login + password)
- /logout     (GET, clears the session, back to the login page)
- /csrf-token (GET, token for the static pages' mutating requests)

Rules:
- Failure responses never reveal whether the login or the password was wrong.
- The session principal is a snapshot of the user at login time.
"""

from flask import Blueprint, current_app, jsonify, redirect, request
from flask_wtf.csrf import generate_csrf

from ...extensions import db
from ...errors import AuthenticationError
from ...repositories import Store
from ...security import end_session, start_session


auth_bp = Blueprint("auth", __name__)

LOGIN_PAGE = "/login.html"


def _credentials() -> tuple[str, str]:
    """Read login/password from a JSON body or a form post."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form
    login = data.get("login")
    password = data.get("password")
    return (
        login.strip() if isinstance(login, str) else "",
        password if isinstance(password, str) else "",
    )


# ============================================================
# LOGIN
# ============================================================

@auth_bp.route("/login", methods=["POST"])
def login():
    """Authenticate a user and attach a principal to the session."""
    login_name, password = _credentials()

    user = Store(db.session).users.find_one(login=login_name) if login_name else None

    if user is None or not user.check_password(password):
        current_app.logger.info("Failed login attempt for %r", login_name)
        raise AuthenticationError("Invalid login or password")

    principal = start_session(user)
    current_app.logger.info("User %s logged in (admin=%s)", principal.login, principal.is_admin)
    return jsonify({"success": True})


# ============================================================
# LOGOUT
# ============================================================

@auth_bp.route("/logout")
def logout():
    """Destroy the session."""
    end_session()
    return redirect(LOGIN_PAGE)


# ============================================================
# CSRF TOKEN
# ============================================================

@auth_bp.route("/csrf-token")
def csrf_token():
    return jsonify({"csrf_token": generate_csrf()})
