"""
Shared fixtures: a seeded in-memory app, a test client, login helpers.

Route tests must not run inside a long-lived app context (flask.g would be
shared between requests), so fixtures hand out plain ids and open short
contexts of their own. Service tests use the `session` fixture instead.
"""

from __future__ import annotations

import pytest

from config import TestingConfig
from repairworks import create_app
from repairworks.extensions import db
from repairworks.models import Client, Contractor, Material, User, WorkObject


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    """Database session inside a pushed app context (service-level tests)."""
    with app.app_context():
        yield db.session


@pytest.fixture
def ids(app):
    """Ids of the starter rows, keyed the way the tests talk about them."""
    with app.app_context():
        users = {u.login: u.id for u in User.query.all()}
        materials = {m.name: m.id for m in Material.query.all()}
        objects = [o.id for o in WorkObject.query.order_by(WorkObject.id).all()]
        return {
            "admin": users["admin"],
            "user1": users["user1"],
            "client": Client.query.order_by(Client.id).first().id,
            "contractor": Contractor.query.order_by(Contractor.id).first().id,
            "flat": objects[0],
            "office": objects[1],
            "paint": materials["Краска"],
            "wallpaper": materials["Обои"],
            "laminate": materials["Ламинат"],
        }


@pytest.fixture
def add_user(app):
    """Create a user and return its id."""
    def _add(login: str, password: str = "secret", is_admin: bool = False) -> int:
        with app.app_context():
            user = User(login=login, is_admin=is_admin)
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            return user.id

    return _add


def _login(client, login_name: str, password: str):
    return client.post("/login", json={"login": login_name, "password": password})


@pytest.fixture
def log_in(client):
    """POST /login with the given credentials on the shared test client."""
    return lambda login_name, password: _login(client, login_name, password)


@pytest.fixture
def admin_client(client):
    assert _login(client, "admin", "admin").status_code == 200
    return client


@pytest.fixture
def user_client(client):
    assert _login(client, "user1", "user1").status_code == 200
    return client
