"""Store-boundary validation and document shapes."""

from __future__ import annotations

from decimal import Decimal

import pytest

from repairworks.errors import StoreError, ValidationError
from repairworks.models import Client, Material, User, WorkObject
from repairworks.repositories import EntityRepository, parse_id


@pytest.mark.parametrize("value, expected", [
    (5, 5), ("7", 7), (" 8 ", 8), ("", None), (None, None), ("x1", None), (True, None),
    (2**63 - 1, 2**63 - 1), (2**63, None), (str(2**63), None), (-(2**63) - 1, None),
])
def test_parse_id(value, expected):
    assert parse_id(value) == expected


class TestValidation:
    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            Client(name="   ")

    def test_name_is_trimmed(self):
        assert Client(name="  Иванов ").name == "Иванов"

    def test_material_cost_required(self):
        with pytest.raises(ValidationError):
            Material(name="Клей", cost=None)

    def test_material_cost_non_negative(self):
        with pytest.raises(ValidationError):
            Material(name="Клей", cost=-1)

    def test_material_cost_not_nan(self):
        with pytest.raises(ValidationError):
            Material(name="Клей", cost="NaN")

    def test_object_area_optional(self):
        assert WorkObject(type="Гараж").area is None
        assert WorkObject(type="Гараж", area="12.5").area == Decimal("12.5")

    @pytest.mark.parametrize("value", [{"a": 1}, ["x"], True])
    def test_non_scalar_text_rejected(self, value):
        with pytest.raises(ValidationError):
            Client(name=value)
        with pytest.raises(ValidationError):
            Client(name="Иванов", contact=value)
        with pytest.raises(ValidationError):
            WorkObject(type="Дом", address=value)

    @pytest.mark.parametrize("value", [True, [1], {"v": 1}])
    def test_non_scalar_number_rejected(self, value):
        with pytest.raises(ValidationError):
            Material(name="Клей", cost=value)

    def test_optional_text_is_trimmed(self):
        assert Client(name="Иванов", contact="  a@b.c ").contact == "a@b.c"
        assert WorkObject(type="Дом", address="   ").address is None

    def test_user_login_required(self):
        with pytest.raises(ValidationError):
            User(login="")


class TestDocuments:
    def test_user_document_has_no_hash(self, session):
        doc = User.query.filter_by(login="user1").one().to_dict()
        assert set(doc) == {"id", "login", "is_admin"}

    def test_material_document(self, session):
        doc = Material.query.filter_by(name="Обои").one().to_dict()
        assert doc["cost"] == 2500
        assert isinstance(doc["cost"], int)


class TestRepository:
    def test_find_by_malformed_id(self, session):
        assert EntityRepository(session, Client).find_by_id("abc") is None

    def test_find_many_ignores_unknown(self, session, ids):
        found = EntityRepository(session, Material).find_many([ids["paint"], 404, "zz"])
        assert [m.id for m in found] == [ids["paint"]]

    def test_duplicate_login_is_store_error(self, session):
        repo = EntityRepository(session, User)
        with pytest.raises(StoreError):
            repo.insert({"login": "admin", "password_hash": "x"})
        # the session is usable again after the rollback
        assert repo.count() == 2
