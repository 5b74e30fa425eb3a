from .routes import dashboard_bp  # noqa: F401
