MODULE_ID = "consumables"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = "Supplies (filters, bulbs, cartridges) attached to devices"

TABLES = [
    "consumables",
]


def register(app) -> None:
    """Register the consumables module routes."""
    from modules.consumables import routes

    app.include_router(routes.router, prefix="/api")
    app.include_router(routes.router, prefix="/api/v1")
