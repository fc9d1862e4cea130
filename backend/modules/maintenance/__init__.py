MODULE_ID = "maintenance"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = "Recurring maintenance tasks, completion history, and due dates"

TABLES = [
    "maintenance_tasks",
]


def register(app) -> None:
    """Register the maintenance module routes."""
    from modules.maintenance import routes

    app.include_router(routes.router, prefix="/api")
    app.include_router(routes.router, prefix="/api/v1")
