# fleet_console/routes/__init__.py
from .grid import grid_bp


def register_blueprints(app):
    app.register_blueprint(grid_bp)
