"""
Order lifecycle: compose, list (visibility scoped), delete.

Rules:
- create: the four primary references must all resolve, otherwise nothing is
  written. Material ids are lenient: ids that do not resolve are dropped.
- list: admin sees everything; others see orders they created or were
  assigned to.
- delete: admin only; missing order is a NotFoundError.
"""

from __future__ import annotations

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable

from sqlalchemy import or_

from ..errors import AuthorizationError, NotFoundError, ValidationError
from ..models import Order, OrderStatus
from ..repositories import Store

logger = logging.getLogger(__name__)

# Price of one unit of object area, before materials.
BASE_RATE_PER_AREA = Decimal("1000")

REQUIRED_REFERENCES = ("client_id", "contractor_id", "object_id", "assigned_user_id")


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def _as_id_list(material_ids: Any) -> list:
    if material_ids is None:
        return []
    if isinstance(material_ids, (list, tuple, set)):
        return list(material_ids)
    return [material_ids]


def compute_order_cost(area: Any, material_costs: Iterable[Any]) -> Decimal:
    """area * 1000 + sum(material costs), rounded to cents."""
    total = Decimal(str(area or 0)) * BASE_RATE_PER_AREA
    for cost in material_costs:
        total += Decimal(str(cost or 0))
    return total.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class OrderService:
    def __init__(self, session):
        self.store = Store(session)

    # --- create -----------------------------------------------------------

    def create_order(
        self,
        client_id: Any,
        contractor_id: Any,
        object_id: Any,
        assigned_user_id: Any,
        material_ids: Any,
        principal,
    ) -> Order:
        refs = {
            "client_id": client_id,
            "contractor_id": contractor_id,
            "object_id": object_id,
            "assigned_user_id": assigned_user_id,
        }
        missing = [name for name in REQUIRED_REFERENCES if _is_missing(refs[name])]
        if missing:
            raise ValidationError("All required fields must be filled in")

        client = self.store.clients.find_by_id(client_id)
        contractor = self.store.contractors.find_by_id(contractor_id)
        work_object = self.store.objects.find_by_id(object_id)
        assigned_user = self.store.users.find_by_id(assigned_user_id)

        if client is None or contractor is None or work_object is None or assigned_user is None:
            raise ValidationError("Invalid order references")

        materials = self.store.materials.find_many(_as_id_list(material_ids))
        cost = compute_order_cost(work_object.area, (m.cost for m in materials))

        order = Order(
            client=client.to_dict(),
            contractor=contractor.to_dict(),
            work_object=work_object.to_dict(),
            materials=[m.name for m in materials],
            cost=cost,
            user_id=principal.id,
            assigned_user_id=assigned_user.id,
            status=OrderStatus.NEW.value,
        )
        self.store.orders.add(order)

        logger.info(
            "Order %s created by user %s for user %s (cost %s)",
            order.id, principal.id, assigned_user.id, cost,
        )
        return order

    # --- list -------------------------------------------------------------

    def list_orders(self, principal) -> list[Order]:
        q = self.store.session.query(Order)
        if not principal.is_admin:
            q = q.filter(
                or_(Order.user_id == principal.id, Order.assigned_user_id == principal.id)
            )
        return q.order_by(Order.id.asc()).all()

    # --- delete -----------------------------------------------------------

    def delete_order(self, order_id: Any, principal) -> bool:
        if not principal.is_admin:
            raise AuthorizationError()

        if not self.store.orders.delete_by_id(order_id):
            raise NotFoundError("Order not found")

        logger.info("Order %s deleted by user %s", order_id, principal.id)
        return True
