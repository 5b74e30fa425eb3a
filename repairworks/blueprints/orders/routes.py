"""
repairworks/blueprints/orders/routes.py

Order routes

Includes:
- POST   /create_order             (any logged-in user)
- DELETE /delete_order/<order_id>  (admin only)

Request body for create_order (JSON or form):
    client_id, contractor_id, object_id, user_id (the assignee), materials (list of ids)

IMPORTANT:
- UI is never trusted. References are validated server-side in OrderService.
"""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from ...extensions import db
from ...security import admin_required
from ...services import OrderService

orders_bp = Blueprint("orders", __name__)


def _order_payload() -> dict:
    """Normalize JSON or form input into OrderService arguments."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        materials = data.get("materials")
    else:
        data = request.form
        materials = data.getlist("materials") or data.getlist("materials[]")

    assignee = data.get("user_id")
    if assignee is None:
        assignee = data.get("assigned_user_id")

    return {
        "client_id": data.get("client_id"),
        "contractor_id": data.get("contractor_id"),
        "object_id": data.get("object_id"),
        "assigned_user_id": assignee,
        "material_ids": materials,
    }


@orders_bp.route("/create_order", methods=["POST"])
@login_required
def create_order():
    """Compose and persist an order; returns the full order."""
    order = OrderService(db.session).create_order(principal=current_user, **_order_payload())
    return jsonify({"success": True, "order": order.to_dict()})


@orders_bp.route("/delete_order/<int:order_id>", methods=["DELETE"])
@login_required
@admin_required
def delete_order(order_id: int):
    """Delete an order (admin-only)."""
    OrderService(db.session).delete_order(order_id, current_user)
    return jsonify({"success": True})
