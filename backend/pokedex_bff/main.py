from __future__ import annotations

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.sessions import SessionMiddleware

from pokedex_bff.api.routes.auth import router as auth_router
from pokedex_bff.api.routes.battle import router as battle_router
from pokedex_bff.api.routes.favorites import router as favorites_router
from pokedex_bff.api.routes.friends import router as friends_router
from pokedex_bff.api.routes.health import router as health_router
from pokedex_bff.api.routes.pokemon import router as pokemon_router
from pokedex_bff.api.routes.teams import router as teams_router
from pokedex_bff.core.log import configure_logging, logger
from pokedex_bff.core.settings import settings
from pokedex_bff.db.session import Database


def _new_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=settings.HTTP_TIMEOUT,
        limits=httpx.Limits(max_keepalive_connections=20, max_connections=50),
        headers={"User-Agent": "Pokedex-BFF/1.0"},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the DB pool and HTTP client unless they were injected."""
    owns_db = app.state.db is None
    owns_http = app.state.http_client is None

    if owns_db:
        app.state.db = Database.from_settings(settings)
    if owns_http:
        app.state.http_client = _new_http_client()
    logger.info("Pokedex BFF started")

    yield

    if owns_http:
        await app.state.http_client.aclose()
        app.state.http_client = None
    if owns_db:
        app.state.db.dispose()
        app.state.db = None
    logger.info("Pokedex BFF stopped")


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        detail = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        detail = "Invalid request"
    return JSONResponse(status_code=400, content={"detail": detail})


async def _database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Database error"})


def create_app(
    *,
    database: Database | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
    app.state.db = database
    app.state.http_client = http_client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Cookie session only carries the OAuth handshake; API auth is the bearer token.
    app.add_middleware(SessionMiddleware, secret_key=settings.SESSION_SECRET)

    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, _database_error_handler)

    app.include_router(health_router, tags=["Health"])
    app.include_router(auth_router, tags=["Auth"])
    app.include_router(pokemon_router, prefix=settings.API_PREFIX, tags=["Pokemon"])
    app.include_router(favorites_router, prefix=settings.API_PREFIX, tags=["Favorites"])
    app.include_router(teams_router, prefix=settings.API_PREFIX, tags=["Teams"])
    app.include_router(friends_router, prefix=settings.API_PREFIX, tags=["Friends"])
    app.include_router(battle_router, prefix=settings.API_PREFIX, tags=["Battle"])
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
