"""Route blueprints, registered by create_app()."""
