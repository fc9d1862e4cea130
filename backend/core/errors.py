"""
HomeKeep: Domain error taxonomy and HTTP mapping.

Services and the task lifecycle raise these exceptions without knowing about
HTTP. register_exception_handlers() maps them to responses:

    NotFoundOrForbidden  -> 404  (entity missing OR owned by someone else)
    NotFound             -> 404  (consumable mutation paths only)
    Forbidden            -> 403  (consumable mutation paths only)
    ValidationError      -> 422  with field-level reasons
    PersistenceError     -> 503  (store unavailable / write failure)

Unauthenticated requests are rejected earlier by core.dependencies.require_user.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

log = logging.getLogger("homekeep.api")


class HomeKeepError(Exception):
    """Base class for all domain errors."""

    status_code = 500

    def __init__(self, detail: str = ""):
        super().__init__(detail)
        self.detail = detail


class NotFoundOrForbidden(HomeKeepError):
    """Existence-hiding denial: the caller cannot tell missing from foreign."""

    status_code = 404

    def __init__(self, entity: str = "Resource"):
        super().__init__(f"{entity} not found")
        self.entity = entity


class NotFound(HomeKeepError):
    status_code = 404


class Forbidden(HomeKeepError):
    status_code = 403


class ValidationError(HomeKeepError):
    """Rejected input. Raised before any store mutation."""

    status_code = 422

    def __init__(self, field: str, reason: str):
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason

    def to_dict(self) -> dict:
        return {"field": self.field, "reason": self.reason}


class PersistenceError(HomeKeepError):
    """The store could not complete a read or write. Not retried by the core."""

    status_code = 503

    def __init__(self, detail: str = "Storage temporarily unavailable"):
        super().__init__(detail)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach JSON handlers for the domain errors to the app."""

    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=exc.status_code, content={"detail": [exc.to_dict()]})

    @app.exception_handler(HomeKeepError)
    async def _domain_error(request: Request, exc: HomeKeepError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(SQLAlchemyError)
    async def _database_error(request: Request, exc: SQLAlchemyError):
        log.error(f"Unhandled database error on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(
            status_code=PersistenceError.status_code,
            content={"detail": PersistenceError().detail},
        )
