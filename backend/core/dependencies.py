"""
HomeKeep: Core auth/request dependencies.

get_current_user resolves the caller from the httpOnly session cookie or an
Authorization: Bearer token and returns {"id", "username"} (or None).
require_user rejects anonymous callers with a bare 401.
get_store hands each request its own EntityStore over the request's Session.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from core.auth import decode_token
from core.db import get_db
from core.store import SqlAlchemyEntityStore

log = logging.getLogger("homekeep.api")

SESSION_COOKIE = "session"

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_store(db: Session = Depends(get_db)) -> SqlAlchemyEntityStore:
    return SqlAlchemyEntityStore(db)


def get_current_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    store: SqlAlchemyEntityStore = Depends(get_store),
) -> Optional[dict]:
    """Resolve the current user from session cookie or Bearer token.

    The username is read from the users table, not the token, so a rename is
    visible on the very next request.
    """
    for candidate in (request.cookies.get(SESSION_COOKIE), token):
        if not candidate:
            continue
        token_data = decode_token(candidate)
        if token_data is None:
            log.debug("Ignoring invalid or expired session token")
            continue
        user = store.get_user(token_data.user_id)
        if user is not None:
            return {"id": user.id, "username": user.username}
    return None


def require_user(current_user: Optional[dict] = Depends(get_current_user)) -> dict:
    if not current_user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return current_user
