"""
Orders blueprint package export.

IMPORTANT:
- Must expose orders_bp for app factory registration.
"""

from __future__ import annotations

from .routes import orders_bp  # noqa: F401
