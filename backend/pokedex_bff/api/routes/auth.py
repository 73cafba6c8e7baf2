import json
import secrets
from urllib.parse import quote, urlencode

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from pokedex_bff.api.deps import get_db, get_google_client
from pokedex_bff.api.schemas import UserSummary
from pokedex_bff.core.google_oauth import GoogleOAuthClient, OAuthError
from pokedex_bff.core.log import logger
from pokedex_bff.core.security import (
    create_access_token,
    generate_user_code,
    hash_password,
    verify_password,
)
from pokedex_bff.core.settings import settings
from pokedex_bff.db import store
from pokedex_bff.models.user import User

router = APIRouter()

OAUTH_STATE_KEY = "oauth_state"
SESSION_USER_KEY = "user_email"


class RegisterIn(BaseModel):
    email: str | None = None
    password: str | None = None
    name: str | None = None


class LoginIn(BaseModel):
    email: str | None = None
    password: str | None = None


class AuthOut(BaseModel):
    token: str
    user: UserSummary


def _normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def _auth_response(user: User) -> AuthOut:
    return AuthOut(token=create_access_token(user.email), user=UserSummary.model_validate(user))


@router.post("/auth/register", response_model=AuthOut)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    email = _normalize_email(payload.email)
    if not email or not payload.password:
        raise HTTPException(status_code=400, detail="Email and password required")

    if store.get_user_by_email(db, email):
        raise HTTPException(status_code=400, detail="User exists")

    try:
        user = store.create_user(
            db,
            email=email,
            name=(payload.name or "").strip(),
            password=hash_password(payload.password),
            code=generate_user_code(),
        )
    except IntegrityError:
        # A concurrent registration won, or (rarely) the code collided.
        raise HTTPException(status_code=400, detail="User exists")

    return _auth_response(user)


@router.post("/auth/login", response_model=AuthOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    email = _normalize_email(payload.email)
    if not email or not payload.password:
        raise HTTPException(status_code=400, detail="Email and password required")

    user = store.get_user_by_email(db, email)
    if not user:
        raise HTTPException(status_code=400, detail="Invalid credentials")
    if not user.password:
        raise HTTPException(status_code=400, detail="Please use Google Sign-In for this account")
    if not verify_password(payload.password, user.password):
        raise HTTPException(status_code=400, detail="Invalid credentials")

    return _auth_response(user)


# ============ GOOGLE OAUTH ============


def _frontend_redirect(path: str, params: dict) -> RedirectResponse:
    base = settings.FRONTEND_URL.rstrip("/")
    return RedirectResponse(f"{base}{path}?{urlencode(params, quote_via=quote)}", status_code=302)


def _oauth_failed(reason: str) -> RedirectResponse:
    logger.warning(f"Google sign-in failed: {reason}")
    return _frontend_redirect("/login", {"error": "oauth_failed"})


def ensure_oauth_user(db: Session, email: str, name: str) -> User:
    """Find the local account for a Google profile, creating it on first login."""
    user = store.get_user_by_email(db, email)
    if user:
        return user

    try:
        user = store.create_user(
            db, email=email, name=name, password="", code=generate_user_code()
        )
    except IntegrityError:
        # Created concurrently by another callback for the same account.
        user = store.get_user_by_email(db, email)
        if not user:
            raise
        return user

    logger.info(f"Created user {user.id} from Google sign-in")
    return user


@router.get("/auth/google")
def google_login(request: Request, google: GoogleOAuthClient = Depends(get_google_client)):
    if not google.configured:
        raise HTTPException(status_code=503, detail="Google sign-in is not configured")

    state = secrets.token_urlsafe(24)
    request.session[OAUTH_STATE_KEY] = state
    return RedirectResponse(google.authorize_url(state), status_code=302)


@router.get("/auth/google/callback")
async def google_callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    db: Session = Depends(get_db),
    google: GoogleOAuthClient = Depends(get_google_client),
):
    expected_state = request.session.pop(OAUTH_STATE_KEY, None)
    if error:
        return _oauth_failed(f"provider returned {error}")
    if not code:
        return _oauth_failed("missing code")
    if not state or not expected_state or not secrets.compare_digest(state, expected_state):
        return _oauth_failed("state mismatch")

    try:
        profile = await google.fetch_profile(code)
    except OAuthError as e:
        return _oauth_failed(str(e))

    user = await run_in_threadpool(
        ensure_oauth_user, db, _normalize_email(profile.email), profile.name
    )
    request.session[SESSION_USER_KEY] = user.email

    summary = UserSummary.model_validate(user).model_dump()
    return _frontend_redirect(
        "/auth/callback",
        {"token": create_access_token(user.email), "user": json.dumps(summary)},
    )


@router.get("/auth/logout")
def logout(request: Request):
    request.session.clear()
    return {"message": "Logged out successfully"}
