"""Domain services: order composition and the dashboard aggregate."""

from .dashboard import build_dashboard  # noqa: F401
from .orders import BASE_RATE_PER_AREA, OrderService, compute_order_cost  # noqa: F401
