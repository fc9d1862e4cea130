MODULE_ID = "users"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = "Accounts, login sessions, and the current-user profile"

TABLES = [
    "users",
]


def register(app) -> None:
    """Register the users module routes."""
    from modules.users import routes

    app.include_router(routes.router, prefix="/api")
    app.include_router(routes.router, prefix="/api/v1")
