"""
RepairWorks domain models.

One table per entity kind:
- users, clients, contractors, materials, objects (reference data)
- orders (historical records)

IMPORTANT:
- An Order stores SNAPSHOTS of its client, contractor and object (JSON copies
  taken at creation time), not foreign keys. Later edits or deletions of the
  source rows never change an existing order.
- Required fields are validated here, at the store boundary (@validates).
"""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy.orm import validates

from .errors import ValidationError
from .extensions import db
from .security import hash_password, verify_password


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------
def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_decimal(value) -> Decimal:
    """Convert Numeric/float/None to Decimal safely."""
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value))


def _number(value):
    """JSON-friendly number: int when integral, float otherwise."""
    if value is None:
        return None
    d = _to_decimal(value)
    if d == d.to_integral_value():
        return int(d)
    return float(d)


# Values a text or number column can take from a request body.
_SCALAR_TYPES = (str, int, float, Decimal)


def _scalar(field: str, value):
    if isinstance(value, bool) or not isinstance(value, _SCALAR_TYPES):
        raise ValidationError(f"Field '{field}' has an invalid value")
    return value


def _required_text(field: str, value) -> str:
    text = str(_scalar(field, value)).strip() if value is not None else ""
    if not text:
        raise ValidationError(f"Field '{field}' is required")
    return text


def _optional_text(field: str, value):
    if value is None:
        return None
    return str(_scalar(field, value)).strip() or None


def _non_negative(field: str, value, required: bool = True):
    if value is None or value == "":
        if required:
            raise ValidationError(f"Field '{field}' is required")
        return None
    try:
        number = _to_decimal(_scalar(field, value))
    except ArithmeticError:
        raise ValidationError(f"Field '{field}' must be a number") from None
    if not number.is_finite() or number < 0:
        raise ValidationError(f"Field '{field}' must be a non-negative number")
    return number


class OrderStatus(str, enum.Enum):
    NEW = "new"


# ---------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------
class User(db.Model):
    """System login user. Only seeded; no signup path."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)

    login = db.Column(db.String(80), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    is_admin = db.Column(db.Boolean, default=False, nullable=False, index=True)

    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)

    @validates("login")
    def _validate_login(self, key, value):
        return _required_text(key, value)

    def set_password(self, password: str):
        self.password_hash = hash_password(password)

    def check_password(self, password: str) -> bool:
        return verify_password(password, self.password_hash)

    def to_dict(self) -> dict:
        return {"id": self.id, "login": self.login, "is_admin": bool(self.is_admin)}

    def __repr__(self):
        return f"<User {self.login}>"


# ---------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------
class Client(db.Model):
    __tablename__ = "clients"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    contact = db.Column(db.String(255), nullable=True)

    @validates("name")
    def _validate_name(self, key, value):
        return _required_text(key, value)

    @validates("contact")
    def _validate_contact(self, key, value):
        return _optional_text(key, value)

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "contact": self.contact}


class Contractor(db.Model):
    __tablename__ = "contractors"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    contact = db.Column(db.String(255), nullable=True)

    @validates("name")
    def _validate_name(self, key, value):
        return _required_text(key, value)

    @validates("contact")
    def _validate_contact(self, key, value):
        return _optional_text(key, value)

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "contact": self.contact}


class Material(db.Model):
    """Priced material. Immutable reference data, no stock tracking."""

    __tablename__ = "materials"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    cost = db.Column(db.Numeric(12, 2), nullable=False, default=Decimal("0.00"))

    @validates("name")
    def _validate_name(self, key, value):
        return _required_text(key, value)

    @validates("cost")
    def _validate_cost(self, key, value):
        return _non_negative(key, value)

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "cost": _number(self.cost)}


class WorkObject(db.Model):
    """A site where work is done (flat, office, ...)."""

    __tablename__ = "objects"

    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.String(120), nullable=False)
    address = db.Column(db.String(255), nullable=True)
    area = db.Column(db.Numeric(10, 2), nullable=True)

    @validates("type")
    def _validate_type(self, key, value):
        return _required_text(key, value)

    @validates("address")
    def _validate_address(self, key, value):
        return _optional_text(key, value)

    @validates("area")
    def _validate_area(self, key, value):
        return _non_negative(key, value, required=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "address": self.address,
            "area": _number(self.area),
        }


# ---------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------
class Order(db.Model):
    """
    A repair order.

    client / contractor / object are frozen JSON snapshots.
    materials holds material NAMES only; per-material cost is not kept.
    cost is fixed at creation: object.area * 1000 + sum(material.cost).
    """

    __tablename__ = "orders"

    id = db.Column(db.Integer, primary_key=True)

    client = db.Column(db.JSON, nullable=False)
    contractor = db.Column(db.JSON, nullable=False)
    work_object = db.Column("object", db.JSON, nullable=False)
    materials = db.Column(db.JSON, nullable=False, default=list)

    cost = db.Column(db.Numeric(14, 2), nullable=False)

    # Plain ids, not foreign keys: orders outlive the users they mention.
    user_id = db.Column(db.Integer, nullable=False, index=True)
    assigned_user_id = db.Column(db.Integer, nullable=False, index=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)
    status = db.Column(db.String(20), nullable=False, default=OrderStatus.NEW.value)

    def to_dict(self) -> dict:
        created_at = self.created_at
        return {
            "id": self.id,
            "client": self.client,
            "contractor": self.contractor,
            "object": self.work_object,
            "materials": list(self.materials or []),
            "cost": _number(self.cost),
            "user_id": self.user_id,
            "assigned_user_id": self.assigned_user_id,
            "created_at": created_at.isoformat() if created_at else None,
            "status": self.status,
        }

    def __repr__(self):
        return f"<Order {self.id} cost={self.cost}>"
