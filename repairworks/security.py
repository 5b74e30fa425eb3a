"""
repairworks/security.py

Access control helpers for the RepairWorks backend.

Key rules:
- UI is never trusted; all permission checks are server-side.
- Two tiers: admin (full access) and regular users.
- The session holds a Principal {id, login, is_admin} projected from the User
  at login time. It is NOT reloaded from the database on later requests, so a
  change to the user's admin flag only takes effect after the next login.

Gates:
- flask_login.login_required -> authenticated principal required
  (unauthorized handler in create_app raises AuthenticationError)
- admin_required -> principal must be admin (AuthorizationError otherwise)

Apply login_required first, admin_required second.

IMPORTANT:
- Decorators must preserve wrapped function metadata to avoid Flask endpoint collisions.
  We use functools.wraps everywhere.
"""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, Optional

from flask import current_app, has_app_context, session
from flask_login import UserMixin, current_user, login_user, logout_user
from werkzeug.security import check_password_hash, generate_password_hash

from .errors import AuthorizationError

PRINCIPAL_SESSION_KEY = "principal"
DEFAULT_HASH_METHOD = "pbkdf2:sha256:600000"


# ---------------------------------------------------------------------
# Credential verifier
# ---------------------------------------------------------------------
def hash_password(plaintext: str, method: Optional[str] = None) -> str:
    """Salted one-way hash. Work factor comes from PASSWORD_HASH_METHOD."""
    if method is None:
        method = DEFAULT_HASH_METHOD
        if has_app_context():
            method = current_app.config.get("PASSWORD_HASH_METHOD", DEFAULT_HASH_METHOD)
    return generate_password_hash(plaintext, method=method)


def verify_password(plaintext: Any, password_hash: Any) -> bool:
    """
    Constant-time check of plaintext against a stored hash.

    Malformed input of any kind is a non-match, never an exception.
    """
    if not isinstance(plaintext, str) or not isinstance(password_hash, str) or not password_hash:
        return False
    try:
        return check_password_hash(password_hash, plaintext)
    except (ValueError, TypeError):
        return False


# ---------------------------------------------------------------------
# Session principal
# ---------------------------------------------------------------------
class Principal(UserMixin):
    """Authenticated identity attached to a session."""

    def __init__(self, id: int, login: str, is_admin: bool = False):
        self.id = int(id)
        self.login = login
        self.is_admin = bool(is_admin)

    @classmethod
    def from_user(cls, user) -> "Principal":
        return cls(id=user.id, login=user.login, is_admin=bool(user.is_admin))

    @classmethod
    def from_dict(cls, data: dict) -> "Principal":
        return cls(id=data["id"], login=data["login"], is_admin=data.get("is_admin", False))

    def get_id(self) -> str:
        return str(self.id)

    def to_dict(self) -> dict:
        return {"id": self.id, "login": self.login, "is_admin": self.is_admin}

    def __repr__(self):
        return f"<Principal {self.login} admin={self.is_admin}>"


def start_session(user) -> Principal:
    """Replace the current session with a fresh principal for `user`."""
    session.clear()
    principal = Principal.from_user(user)
    login_user(principal)
    session[PRINCIPAL_SESSION_KEY] = principal.to_dict()
    # expires after PERMANENT_SESSION_LIFETIME instead of with the browser
    session.permanent = True
    return principal


def end_session() -> None:
    logout_user()
    session.clear()


def load_principal(user_id: str) -> Optional[Principal]:
    """Flask-Login user loader: rebuild the principal from the session only."""
    data = session.get(PRINCIPAL_SESSION_KEY)
    if not data or str(data.get("id")) != str(user_id):
        return None
    try:
        return Principal.from_dict(data)
    except (KeyError, TypeError, ValueError):
        return None


# ---------------------------------------------------------------------
# Gates
# ---------------------------------------------------------------------
def is_admin() -> bool:
    """Return True if current user is authenticated and admin."""
    return bool(current_user.is_authenticated and getattr(current_user, "is_admin", False))


def admin_required(view_func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator: admin-only."""
    @wraps(view_func)
    def wrapper(*args: Any, **kwargs: Any):
        if not is_admin():
            raise AuthorizationError()
        return view_func(*args, **kwargs)

    return wrapper
