"""
HomeKeep: household appliance, consumable and maintenance tracker API.

Run with:  uvicorn main:app --app-dir backend
"""

from core.app import create_app

app = create_app()


if __name__ == "__main__":
    import uvicorn
    from core.config import settings

    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.debug)
