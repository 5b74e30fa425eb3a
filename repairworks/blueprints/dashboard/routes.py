"""
Dashboard routes.

- GET /          the dashboard page (static HTML, login required)
- GET /api/data  everything the dashboard renders, orders scoped to the principal
"""

from __future__ import annotations

from pathlib import Path

from flask import Blueprint, jsonify, send_from_directory
from flask_login import current_user, login_required

from ...extensions import db
from ...services import build_dashboard

PAGES_DIR = Path(__file__).resolve().parents[2] / "pages"

dashboard_bp = Blueprint("dashboard", __name__)


@dashboard_bp.route("/")
@login_required
def index():
    return send_from_directory(PAGES_DIR, "index.html")


@dashboard_bp.route("/api/data")
@login_required
def data():
    """Dashboard payload for the logged-in principal."""
    return jsonify(build_dashboard(db.session, current_user))
