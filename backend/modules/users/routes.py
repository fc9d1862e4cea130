"""User auth routes: register, login, logout, and the current-user profile."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import OAuth2PasswordRequestForm

from core.auth import create_access_token, hash_password, validate_password, verify_password
from core.config import settings
from core.dependencies import SESSION_COOKIE, get_store, require_user
from core.errors import PersistenceError
from core.rate_limit import limiter
from core.store import SqlAlchemyEntityStore
from modules.users.schemas import RegisterRequest, UsernameUpdate, UserResponse

log = logging.getLogger("homekeep.api")
router = APIRouter(tags=["Auth"])


# ============== Session helpers ==============

def _session_response(user, status_code: int = 200) -> JSONResponse:
    """Return the user plus a fresh token, and set the httpOnly session cookie."""
    access_token = create_access_token(data={"sub": user.username, "uid": user.id})
    body = UserResponse.model_validate(user).model_dump(mode="json")
    body.update({"access_token": access_token, "token_type": "bearer"})
    resp = JSONResponse(body, status_code=status_code)
    resp.set_cookie(
        key=SESSION_COOKIE, value=access_token, httponly=True,
        secure=settings.cookie_secure, samesite=settings.cookie_samesite,
        path="/", max_age=settings.access_token_expire_hours * 3600,
    )
    return resp


# ============== Register / login / logout ==============

@router.post("/auth/register", status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, store: SqlAlchemyEntityStore = Depends(get_store)):
    """Create an account and start a session for it."""
    ok, message = validate_password(data.password)
    if not ok:
        raise HTTPException(status_code=400, detail=message)
    if store.get_user_by_username(data.username):
        raise HTTPException(status_code=400, detail="Username already exists")

    try:
        user = store.insert_user({
            "username": data.username,
            "password_hash": hash_password(data.password),
        })
    except PersistenceError:
        # A concurrent registration won the unique constraint
        if store.get_user_by_username(data.username):
            raise HTTPException(status_code=400, detail="Username already exists")
        raise
    log.info(f"Registered user {user.id} ({user.username})")
    return _session_response(user, status_code=status.HTTP_201_CREATED)


@router.post("/auth/login")
@limiter.limit(settings.login_rate_limit)
def login(request: Request, form_data: OAuth2PasswordRequestForm = Depends(),
          store: SqlAlchemyEntityStore = Depends(get_store)):
    user = store.get_user_by_username(form_data.username)
    if not user or not verify_password(form_data.password, user.password_hash):
        log.info(f"Failed login for {form_data.username!r}")
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return _session_response(user)


@router.post("/auth/logout")
def logout():
    """Clear the session cookie. Bearer tokens simply expire."""
    resp = JSONResponse({"success": True})
    resp.delete_cookie(SESSION_COOKIE, path="/")
    return resp


# ============== Current user ==============

@router.get("/auth/me", response_model=UserResponse)
def me(current_user: dict = Depends(require_user),
       store: SqlAlchemyEntityStore = Depends(get_store)):
    return store.get_user(current_user["id"])


@router.patch("/auth/me", response_model=UserResponse)
def rename(data: UsernameUpdate, current_user: dict = Depends(require_user),
           store: SqlAlchemyEntityStore = Depends(get_store)):
    """Change the caller's username. Past completion records keep the old name."""
    existing = store.get_user_by_username(data.username)
    if existing and existing.id != current_user["id"]:
        raise HTTPException(status_code=400, detail="Username already exists")
    try:
        user = store.update_user(current_user["id"], {"username": data.username})
    except PersistenceError:
        taken = store.get_user_by_username(data.username)
        if taken and taken.id != current_user["id"]:
            raise HTTPException(status_code=400, detail="Username already exists")
        raise
    log.info(f"User {user.id} renamed {current_user['username']!r} -> {user.username!r}")
    return user
