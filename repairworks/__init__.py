"""
repairworks/__init__.py

Flask application factory for the RepairWorks backend.

Requirements:
- Session-based authentication, two tiers (admin / regular).
- UI is never trusted; server-side access control is enforced per route.
- Static pages are served as-is from repairworks/static; only the login page
  is reachable without a session, the dashboard page is behind login.
- Every error is answered at the route boundary as JSON (or a redirect to
  the login page for unauthenticated page requests).
"""

from __future__ import annotations

from typing import Union

import click
from flask import Flask, jsonify, redirect, request
from werkzeug.exceptions import HTTPException

from .errors import AuthenticationError, RepairWorksError, StoreError
from .extensions import csrf, db, login_manager
from .logging_config import configure_logging
from .security import load_principal

# Blueprint imports kept inside create_app() where possible to reduce import side effects.


def _is_page_request() -> bool:
    return request.method == "GET" and not request.path.startswith("/api/")


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AuthenticationError)
    def _unauthenticated(err: AuthenticationError):
        if _is_page_request():
            return redirect(err.login_url)
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(RepairWorksError)
    def _domain_error(err: RepairWorksError):
        if isinstance(err, StoreError):
            app.logger.error("Store error on %s %s", request.method, request.path)
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(HTTPException)
    def _http_error(err: HTTPException):
        return jsonify({"error": err.description or err.name}), err.code

    @app.errorhandler(Exception)
    def _unexpected(err: Exception):
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": StoreError.default_message}), 500


def create_app(config_object: Union[str, type] = "config.Config") -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__, static_folder="static", static_url_path="")
    app.config.from_object(config_object)

    configure_logging(app)

    # Extensions
    db.init_app(app)
    csrf.init_app(app)

    login_manager.init_app(app)
    login_manager.user_loader(load_principal)

    @login_manager.unauthorized_handler
    def _unauthorized():
        raise AuthenticationError()

    register_error_handlers(app)

    # ----------------------------------------------------------------------
    # Blueprints
    # ----------------------------------------------------------------------
    from .blueprints.auth import auth_bp
    from .blueprints.catalog import catalog_bp
    from .blueprints.dashboard import dashboard_bp
    from .blueprints.orders import orders_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(catalog_bp)

    # ----------------------------------------------------------------------
    # Tables + starter data
    # ----------------------------------------------------------------------
    with app.app_context():
        db.create_all()
        if app.config.get("SEED_ON_STARTUP", False):
            from .seed import seed_defaults

            seed_defaults(db.session)

    # ----------------------------------------------------------------------
    # CLI
    # ----------------------------------------------------------------------
    @app.cli.command("seed")
    def seed_command():
        """Seed empty tables with starter data."""
        from .seed import seed_defaults

        seeded = seed_defaults(db.session)
        if seeded:
            click.echo(f"Seeded: {', '.join(seeded)}")
        else:
            click.echo("Nothing to seed; all tables already have data.")

    return app
