from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends, Header, HTTPException, Request
from jose.exceptions import JWTError
from sqlalchemy.orm import Session

from pokedex_bff.core.google_oauth import GoogleOAuthClient
from pokedex_bff.core.security import decode_access_token
from pokedex_bff.core.settings import settings
from pokedex_bff.db import store
from pokedex_bff.models.user import User
from pokedex_bff.services.pokeapi import PokeApiClient


def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.db.session()
    try:
        yield db
    finally:
        db.close()


def get_pokeapi(request: Request) -> PokeApiClient:
    return PokeApiClient(request.app.state.http_client, settings.POKEAPI_BASE)


def get_google_client(request: Request) -> GoogleOAuthClient:
    return GoogleOAuthClient(
        request.app.state.http_client,
        client_id=settings.GOOGLE_CLIENT_ID,
        client_secret=settings.GOOGLE_CLIENT_SECRET,
        redirect_uri=settings.GOOGLE_CALLBACK_URL,
    )


def get_current_claims(
    request: Request,
    authorization: str | None = Header(default=None),
) -> dict:
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing Authorization header")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(status_code=401, detail="Invalid Authorization header")

    try:
        claims = decode_access_token(parts[1])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token")

    if not claims.get("email"):
        raise HTTPException(status_code=401, detail="Invalid token")

    request.state.claims = claims
    return claims


def get_current_user(
    claims: dict = Depends(get_current_claims),
    db: Session = Depends(get_db),
) -> User:
    user = store.get_user_by_email(db, claims["email"])
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    return user
