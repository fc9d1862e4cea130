MODULE_ID = "devices"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = "Household appliances and the device deletion cascade"

TABLES = [
    "devices",
]


def register(app) -> None:
    """Register the devices module routes."""
    from modules.devices import routes

    app.include_router(routes.router, prefix="/api")
    app.include_router(routes.router, prefix="/api/v1")
