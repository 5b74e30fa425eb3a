"""Dashboard payload: reference data plus the orders the principal may see."""

from __future__ import annotations

from ..repositories import Store
from .orders import OrderService


def build_dashboard(session, principal) -> dict:
    store = Store(session)
    orders = OrderService(session).list_orders(principal)

    return {
        "user": principal.to_dict(),
        "clients": [c.to_dict() for c in store.clients.find_all()],
        "contractors": [c.to_dict() for c in store.contractors.find_all()],
        "materials": [m.to_dict() for m in store.materials.find_all()],
        "objects": [o.to_dict() for o in store.objects.find_all()],
        "users": [u.to_dict() for u in store.users.find_all(is_admin=False)],
        "orders": [o.to_dict() for o in orders],
    }
