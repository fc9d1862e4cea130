# core/app.py: App factory with module discovery
#
# Creates and configures the FastAPI application. Discovers all feature
# modules under backend/modules/ and calls each module's register(app).
#
# main.py is just: from core.app import create_app; app = create_app()

import importlib
import logging
import pathlib
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

log = logging.getLogger("homekeep.api")

__version__ = "1.0.0"


# ---------------------------------------------------------------------------
# Module discovery
# ---------------------------------------------------------------------------

def _discover_modules() -> list[str]:
    """Return the module package names found under backend/modules/.

    A valid module directory contains an __init__.py with a MODULE_ID attribute.
    Import failures propagate: a broken module must not silently drop its routes.
    """
    modules_dir = pathlib.Path(__file__).parent.parent / "modules"
    found = []
    for entry in sorted(modules_dir.iterdir()):
        if not entry.is_dir() or not (entry / "__init__.py").exists():
            continue
        pkg_name = f"modules.{entry.name}"
        mod = importlib.import_module(pkg_name)
        if hasattr(mod, "MODULE_ID"):
            found.append(pkg_name)
    return found


# ---------------------------------------------------------------------------
# Middleware setup
# ---------------------------------------------------------------------------

def _setup_middleware(app: FastAPI) -> None:
    """Attach CORS and rate limiting to the app."""
    from core.config import settings
    from core.rate_limit import limiter
    from slowapi import _rate_limit_exceeded_handler
    from slowapi.errors import RateLimitExceeded

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # CORS
    _cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    if "*" in _cors_origins:
        log.warning(
            "CORS origin '*' is incompatible with allow_credentials=True: "
            "falling back to empty origins list. Set explicit origins in CORS_ORIGINS."
        )
        _cors_origins = []

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
    )


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app() -> FastAPI:
    """Create and fully configure the HomeKeep FastAPI application.

    1. Discover all modules under backend/modules/.
    2. Create the FastAPI instance with a lifespan that creates tables.
    3. Attach middleware and the domain exception handlers.
    4. Register the health endpoint, then every module's routes.
    """
    from core.db import engine, init_db
    from core.errors import register_exception_handlers
    from core.logging_setup import configure_logging
    from core.schemas import HealthCheck

    configure_logging()

    pkg_names = _discover_modules()
    log.info(f"Module load order: {[p.split('.')[-1] for p in pkg_names]}")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db()
        log.info("Database tables ready")
        yield

    app = FastAPI(
        title="HomeKeep",
        description="Household appliance, consumable and maintenance tracker",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/v1/docs",
        redoc_url="/api/v1/redoc",
    )

    _setup_middleware(app)
    register_exception_handlers(app)

    @app.get("/health", response_model=HealthCheck, tags=["System"])
    def health():
        """Liveness plus a one-statement database probe."""
        database = "connected"
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception:
            log.warning("Health check: database unreachable", exc_info=True)
            database = "unavailable"
        return HealthCheck(version=__version__, database=database)

    for pkg in pkg_names:
        mod = importlib.import_module(pkg)
        if hasattr(mod, "register"):
            mod.register(app)
            log.debug(f"Registered module: {pkg}")

    return app
