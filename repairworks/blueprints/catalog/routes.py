"""
Catalog routes: reference data CRUD.

Kinds: clients, contractors, materials, objects.

- GET    /api/<kind>        list (logged-in users)
- POST   /api/<kind>        create (admin only)
- DELETE /api/<kind>/<id>   delete (admin only)

Deleting a client/contractor/object never affects existing orders: they hold
snapshots, not references.
"""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required

from ...errors import NotFoundError, ValidationError
from ...extensions import db
from ...models import Client, Contractor, Material, WorkObject
from ...repositories import EntityRepository
from ...security import admin_required

catalog_bp = Blueprint("catalog", __name__, url_prefix="/api")

KIND_RULE = "any(clients, contractors, materials, objects)"

# kind -> (model, writable fields)
CATALOG = {
    "clients": (Client, ("name", "contact")),
    "contractors": (Contractor, ("name", "contact")),
    "materials": (Material, ("name", "cost")),
    "objects": (WorkObject, ("type", "address", "area")),
}


def _repo(kind: str) -> EntityRepository:
    model, _ = CATALOG[kind]
    return EntityRepository(db.session, model)


def _entity_data(kind: str) -> dict:
    """Writable fields from a JSON body or a form post; absent ones are None."""
    _, fields = CATALOG[kind]
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form
    if not data:
        raise ValidationError("Request body is empty")
    return {field: data.get(field) for field in fields}


@catalog_bp.route(f"/<{KIND_RULE}:kind>")
@login_required
def list_entities(kind: str):
    return jsonify([entity.to_dict() for entity in _repo(kind).find_all()])


@catalog_bp.route(f"/<{KIND_RULE}:kind>", methods=["POST"])
@login_required
@admin_required
def create_entity(kind: str):
    """Create one entity (admin-only)."""
    entity = _repo(kind).insert(_entity_data(kind))
    current_app.logger.info("%s %s created by user %s", kind, entity.id, current_user.id)
    return jsonify({"success": True, "item": entity.to_dict()}), 201


@catalog_bp.route(f"/<{KIND_RULE}:kind>/<int:entity_id>", methods=["DELETE"])
@login_required
@admin_required
def delete_entity(kind: str, entity_id: int):
    """Delete one entity (admin-only)."""
    if not _repo(kind).delete_by_id(entity_id):
        raise NotFoundError("Item not found")
    current_app.logger.info("%s %s deleted by user %s", kind, entity_id, current_user.id)
    return jsonify({"success": True})
