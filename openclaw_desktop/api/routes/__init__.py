"""API routes module - registers all route blueprints.

Route Organization:
- bridge.py: Command bridge (1 route, 11 commands)
- system.py: Version and health checks (3 routes)
"""

from apiflask import APIFlask

from openclaw_desktop.api.routes import bridge, system


def register_blueprints(app: APIFlask) -> None:
    """Register all route blueprints with the app.

    Args:
        app: APIFlask application instance
    """
    app.register_blueprint(system.api)
    app.register_blueprint(bridge.api)


__all__ = [
    "register_blueprints",
]
